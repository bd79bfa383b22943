# postrender/markdown/markers.py
"""
Marker markup shared by the inline transformer and the mixed-HTML
postprocessors. The reconciler recognises these shapes.
"""

import html as html_std

from .nodes import UnavailableImageNode

LINK_MARKER_CLASS = "enhanced-link"


def escape(value: str) -> str:
    return html_std.escape(value, quote=True)


def link_marker(href: str, text: str) -> str:
    return f'<span class="{LINK_MARKER_CLASS}" data-href="{escape(href)}">{escape(text)}</span>'


def unavailable_image(node: UnavailableImageNode) -> str:
    """Placeholder block for an image whose host refuses hot-linking."""
    label = "Image unavailable"
    if node.alt:
        label += f": {node.alt}"
    link_text = node.original_url if node.decoded else "View original"
    return (
        '<span class="image-unavailable">'
        f'<span class="image-unavailable__label">{escape(label)}</span> '
        f"{link_marker(node.original_url, link_text)}"
        "</span>"
    )


def image_link(href: str, image_html: str, external: bool) -> str:
    """Anchor around a linked image. It stays an anchor rather than a marker."""
    if not external:
        return f'<a href="{escape(href)}">{image_html}</a>'
    return (
        f'<a href="{escape(href)}" class="external-link" target="_blank" rel="noopener noreferrer">'
        f"{image_html}</a>"
    )
