# postrender/markdown/postprocessors/link_decorator.py
"""
Postprocessor that prepares anchors in mixed-HTML posts.

This postprocessor:
1. Turns every ``<a href>`` whose content is plain text into an enhanced-link
   marker, so the reconciler promotes it to a LinkPart and the UI adapter can
   add the site badge
2. Adds target="_blank", rel="noopener noreferrer" and the "external-link"
   class to external anchors that wrap other markup (images, code) and so
   stay anchors

Uses shared soup caching for efficiency.
"""

from bs4 import BeautifulSoup, Tag

from postrender.links import is_internal

from ..markers import link_marker
from .utils import get_shared_soup, soup_to_html


def _has_markup(link: Tag) -> bool:
    return any(isinstance(child, Tag) for child in link.children)


def link_decorator(html: str, context: dict) -> str:
    """
    Promote plain-text anchors to link markers and decorate the others.

    Args:
        html: HTML string to process
        context: Context dictionary for shared soup caching; an optional
            ``site_origin`` key decides which links are internal

    Returns:
        Processed HTML
    """
    soup = get_shared_soup(html, context)
    origin = context.get("site_origin")

    for link in list(soup.find_all("a", href=True)):
        href = link.get("href", "").strip()
        if not href or href.startswith("#"):
            continue

        if not _has_markup(link):
            marker = BeautifulSoup(link_marker(href, link.get_text()), "html.parser")
            link.replace_with(marker)
            continue

        if is_internal(href, origin):
            continue

        link["target"] = "_blank"
        link["rel"] = "noopener noreferrer"

        existing_classes = link.get("class", [])
        if isinstance(existing_classes, str):
            existing_classes = existing_classes.split()
        if "external-link" not in existing_classes:
            existing_classes.append("external-link")
        link["class"] = existing_classes

    return soup_to_html(context, soup)


def link_decorator_default(html: str, context: dict) -> str:
    """
    Default configuration for link_decorator.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return link_decorator(html, context)
