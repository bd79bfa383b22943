from functools import lru_cache

from .nodes import StyleRecord


@lru_cache(maxsize=1)
def get_render_config():
    """
    Configuration for the post rendering pipeline.

    Style records are attached to render nodes and only turned into markup
    by the UI adapter, so changing a class or declaration here never touches
    the parser. The ``table_html`` declarations are the exception: mixed-HTML
    documents are restyled in place, so those are written straight into the
    markup by the table enhancer.
    """
    return {
        "styles": {
            "heading": StyleRecord(classes=("post-heading",)),
            "paragraph": StyleRecord(classes=("post-paragraph",)),
            "quote": StyleRecord(classes=("post-quote",)),
            "list": StyleRecord(classes=("post-list",)),
            "divider": StyleRecord(classes=("post-divider",)),
            "spacer": StyleRecord(classes=("post-break",)),
            "code": StyleRecord(classes=("code-block",)),
            "table": StyleRecord(
                classes=("post-table",),
                declarations=(("width", "100%"), ("border-collapse", "collapse")),
            ),
            "html": StyleRecord(classes=("post-html",)),
        },
        "table_html": {
            "table": (("border-collapse", "collapse"), ("width", "100%")),
            "th": (
                ("border", "1px solid #000000"),
                ("padding", "1rem 1.5rem"),
                ("background-color", "#f5f5f5"),
                ("font-weight", "600"),
                ("text-align", "left"),
            ),
            "td": (
                ("border", "1px solid #000000"),
                ("padding", "1rem 1.5rem"),
                ("background-color", "#ffffff"),
            ),
            "row_hover_class": "post-table__row--hover",
        },
        "image_viewer": {
            "overlay_class": "image-viewer",
        },
    }
