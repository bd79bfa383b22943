# postrender/markdown/renderer.py

import logging
import re

from postrender import conf

from .config import get_render_config
from .errors import TableParseError
from .image_viewer import ImageViewer, collect_images
from .inline import transform_inline
from .nodes import (
    Blank,
    BulletList,
    CodeBlock,
    CodeNode,
    Divider,
    DividerNode,
    Heading,
    HeadingNode,
    HtmlNode,
    ListNode,
    Paragraph,
    ParagraphNode,
    Quote,
    QuoteNode,
    RenderTree,
    SpacerNode,
    Table,
    TableNode,
)
from .postprocessors import apply_postprocessors
from .preprocessors import HTML_PREPROCESSORS, apply_preprocessors
from .preprocessors.front_matter import PostMetadata
from .reconciler import reconcile
from .segmenter import segment_text
from .tables import render_table
from .toc import assign_anchors

logger = logging.getLogger(__name__)

HTML_TAG_RE = re.compile(r"<[a-zA-Z][^>]*>")
# A stray "<" in prose is not enough, the document must contain one of these
HTML_DOCUMENT_RE = re.compile(r"<table\b|<p[\s>]|<h1[\s>]", re.IGNORECASE)


def is_mixed_html(content):
    """Whether ``content`` is an HTML document rather than Markdown."""
    return bool(HTML_TAG_RE.search(content) and HTML_DOCUMENT_RE.search(content))


def _inline_parts(text, viewer):
    return tuple(collect_images(reconcile(transform_inline(text)), viewer))


def _table_nodes(block, styles, viewer):
    try:
        model = render_table(block.raw_lines)
    except TableParseError:
        logger.warning("Could not parse table, rendering %d lines as paragraphs", len(block.raw_lines))
        return [
            ParagraphNode(_inline_parts(line, viewer), styles["paragraph"])
            for line in block.raw_lines
            if line.strip()
        ]

    headers = tuple(_inline_parts(cell, viewer) for cell in model.headers)
    rows = tuple(tuple(_inline_parts(cell, viewer) for cell in row) for row in model.rows)
    return [TableNode(headers, rows, tuple(model.alignments), styles["table"])]


def _block_nodes(block, styles, viewer):
    """Map one block to its render node(s)."""
    if isinstance(block, Heading):
        return [HeadingNode(block.level, _inline_parts(block.text, viewer), style=styles["heading"])]
    if isinstance(block, Paragraph):
        return [ParagraphNode(_inline_parts(block.text, viewer), styles["paragraph"])]
    if isinstance(block, Quote):
        return [QuoteNode(_inline_parts(block.text, viewer), styles["quote"])]
    if isinstance(block, BulletList):
        items = tuple(_inline_parts(item, viewer) for item in block.items)
        return [ListNode(items, styles["list"])]
    if isinstance(block, CodeBlock):
        # Code is shown verbatim; it never goes through the inline transformer
        return [CodeNode(block.language, block.body, styles["code"])]
    if isinstance(block, Table):
        return _table_nodes(block, styles, viewer)
    if isinstance(block, Divider):
        return [DividerNode(styles["divider"])]
    if isinstance(block, Blank):
        return [SpacerNode(styles["spacer"])]
    raise TypeError(f"Unknown block {block!r}")


def _render_markdown(text, context, styles, viewer):
    text = apply_preprocessors(text, context)

    nodes = []
    for block in segment_text(text, context.get("max_heading_level")):
        nodes.extend(_block_nodes(block, styles, viewer))
    return assign_anchors(nodes)


def _render_html(text, context, styles, viewer):
    text = apply_preprocessors(text, context, HTML_PREPROCESSORS)
    html = apply_postprocessors(text, context)
    parts = collect_images(reconcile(html), viewer)
    return [HtmlNode(tuple(parts), styles["html"])]


def _metadata(context):
    return PostMetadata.from_front_matter(context.get("front_matter") or {})


def render_document(text, context=None):
    """
    Main rendering function: raw post text to a render tree.

    Args:
        text: Raw post text, Markdown or mixed HTML, optionally front-matter
            prefixed
        context: Optional dict shared with the processors. Recognized keys:
            ``image_viewer`` (an ImageViewer to register images with; one
            is created when missing), ``site_origin`` and
            ``max_heading_level``. The parsed front matter is stored back
            under ``front_matter``.

    Returns:
        RenderTree whose ``viewer`` holds every image of the document and
        whose ``metadata`` is the PostMetadata read from the front matter
    """
    context = context if context is not None else {}

    viewer = context.get("image_viewer")
    if viewer is None:
        viewer = context["image_viewer"] = ImageViewer()
    context.setdefault("site_origin", conf.site_origin() or None)

    styles = get_render_config()["styles"]
    text = text or ""

    if is_mixed_html(text):
        nodes = _render_html(text, context, styles, viewer)
        return RenderTree(nodes=nodes, viewer=viewer, metadata=_metadata(context), is_html=True)

    nodes = _render_markdown(text, context, styles, viewer)
    return RenderTree(nodes=nodes, viewer=viewer, metadata=_metadata(context))
