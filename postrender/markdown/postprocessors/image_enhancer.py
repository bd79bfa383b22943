# postrender/markdown/postprocessors/image_enhancer.py
"""
Postprocessor that prepares images in mixed-HTML posts.

- Appends ``max-width: 100%`` / ``height: auto`` when the author's style does
  not size the image (author declarations are kept as they are)
- Replaces images served by unreliable proxy hosts with the same
  "image unavailable" placeholder the Markdown path emits
"""

from bs4 import BeautifulSoup

from ..images import decode_wrapped_url, is_unreliable_host, with_sizing_hints
from ..markers import unavailable_image
from ..nodes import UnavailableImageNode
from .utils import get_shared_soup, soup_to_html


def image_enhancer(html: str, context: dict) -> str:
    soup = get_shared_soup(html, context)

    for img in list(soup.find_all("img")):
        src = img.get("src", "")

        if src and is_unreliable_host(src):
            decoded = decode_wrapped_url(src)
            placeholder = unavailable_image(UnavailableImageNode(img.get("alt", ""), decoded or src, decoded is not None))
            img.replace_with(BeautifulSoup(placeholder, "html.parser"))
            continue

        img["style"] = with_sizing_hints(img.get("style", ""))

        if not img.get("loading"):
            img["loading"] = "lazy"

    return soup_to_html(context, soup)


def image_enhancer_default(html: str, context: dict) -> str:
    """
    Default configuration for image_enhancer.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return image_enhancer(html, context)
