# postrender/markdown/postprocessors/__init__.py

from .image_enhancer import image_enhancer_default
from .link_decorator import link_decorator_default
from .sanitizer import sanitize_html
from .table_enhancer import table_enhancer_default
from .utils import clear_shared_soup

# Run over whole mixed-HTML documents only; Markdown posts are sanitized
# line by line inside the inline transformer
POSTPROCESSORS = [
    sanitize_html,
    table_enhancer_default,  # Borders, padding, no zebra striping, hover rows
    image_enhancer_default,  # Sizing hints and unavailable-image placeholders
    link_decorator_default,  # Promote plain-text anchors to link markers
    # Order matters - they run sequentially
]


def apply_postprocessors(html, context):
    """Apply all postprocessors in order"""
    for processor in POSTPROCESSORS:
        html = processor(html, context)
    clear_shared_soup(context)
    return html
