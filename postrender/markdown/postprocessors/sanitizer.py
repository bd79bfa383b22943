# postrender/markdown/postprocessors/sanitizer.py

import html as html_std
import logging
from functools import lru_cache

import bleach
from bleach.css_sanitizer import CSSSanitizer

logger = logging.getLogger(__name__)

# Added to bleach's defaults (a, strong, em, code, ul, ...)
EXTRA_TAGS = (
    ("p", "br", "wbr", "div", "span", "section", "article"),
    ("cite", "mark", "ins", "del", "s", "sup", "sub", "small", "u"),
    ("h1", "h2", "h3", "h4", "h5", "h6"),
    ("ul", "ol", "li", "hr", "blockquote", "dl", "dt", "dd"),
    ("pre", "code", "kbd", "samp", "var"),
    ("table", "thead", "tbody", "tfoot", "tr", "th", "td", "caption", "colgroup", "col"),
    ("img", "figure", "figcaption", "picture"),
    ("time", "address", "details", "summary"),
)

GLOBAL_ATTRIBUTES = {"class", "id", "title"}

TAG_ATTRIBUTES = {
    "a": {"href", "rel", "target"},
    "img": {"src", "alt", "width", "height", "loading", "decoding", "style"},
    "span": {"style"},
    "div": {"style"},
    "p": {"style"},
    "table": {"style"},
    "tr": {"style"},
    "th": {"colspan", "rowspan", "scope", "style", "align"},
    "td": {"colspan", "rowspan", "style", "align"},
    "ol": {"start", "type"},
    "blockquote": {"cite"},
    "time": {"datetime"},
    "abbr": {"title"},
}

CSS_PROPERTIES = [
    "width", "height", "max-width", "max-height", "min-width", "min-height",
    "object-fit", "display", "margin", "padding",
    "border", "border-collapse", "text-align", "vertical-align",
    "color", "background-color", "font-weight", "font-style",
]

PROTOCOLS = ["http", "https", "mailto", "tel"]


def _allow_attribute(tag, name, value):
    """Attribute filter passed to bleach in place of a static mapping."""
    if name in GLOBAL_ATTRIBUTES or name.startswith(("data-", "aria-")):
        return True
    return name in TAG_ATTRIBUTES.get(tag, ())


@lru_cache(maxsize=1)
def _get_bleach_config():
    """Cache bleach configuration for better performance."""
    allowed_tags = set(bleach.sanitizer.ALLOWED_TAGS)
    for group in EXTRA_TAGS:
        allowed_tags.update(group)

    css_sanitizer = CSSSanitizer(allowed_css_properties=CSS_PROPERTIES)
    return frozenset(allowed_tags), css_sanitizer


def clean_fragment(html):
    """
    Sanitize an HTML fragment with the pipeline's allow-list.

    Disallowed tags are escaped rather than stripped so the author still sees
    what they wrote.
    """
    allowed_tags, css_sanitizer = _get_bleach_config()

    try:
        return bleach.clean(
            html,
            tags=allowed_tags,
            attributes=_allow_attribute,
            protocols=PROTOCOLS,
            css_sanitizer=css_sanitizer,
            strip=False,
        )
    except Exception as e:
        logger.error(f"Bleach sanitization failed: {e}", exc_info=True)
        # Never hand unsanitized markup onwards
        return html_std.escape(html)


def sanitize_html(html, context):
    """
    Sanitize a mixed-HTML document.
    This is the FIRST post-processor and should run before any other HTML modifications.
    """
    return clean_fragment(html)
