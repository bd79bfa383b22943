# postrender/markdown/adapter.py
"""
UI adapter: turn a render tree into HTML for templates.

This is the only module that resolves style records into ``class`` and
``style`` attributes, classifies links, and highlights code. Everything is
built with Django's ``format_html`` so part text is escaped on the way out;
RawHtmlPart markup is trusted as already sanitized by the pipeline.
"""

from django.utils.html import format_html, format_html_join
from django.utils.safestring import mark_safe

from postrender.links import classify, format_display_domain, is_internal

from .config import get_render_config
from .highlight import highlight_code
from .nodes import (
    EMPTY_STYLE,
    CodeNode,
    CodePart,
    DividerNode,
    HeadingNode,
    HtmlNode,
    LinkPart,
    ListNode,
    ParagraphNode,
    QuoteNode,
    RawHtmlPart,
    SpacerNode,
    TableNode,
)


def style_attrs(style):
    """` class="..." style="..."` for a style record, or an empty string."""
    classes = " ".join(style.classes)
    attrs = format_html(' class="{}"', classes) if classes else ""
    css = style.css()
    if css:
        attrs = format_html('{} style="{}"', attrs, css)
    return mark_safe(attrs)


def render_link(part, site_origin=None):
    if is_internal(part.href, site_origin):
        return format_html('<a href="{}" class="enhanced-link">{}</a>', part.href, part.text)

    info = classify(part.href)
    domain = format_display_domain(info.domain)
    title = f"{info.label} - {domain}" if domain else info.label
    badge = format_html(
        '<span class="link-badge link-badge--{}" style="color: {}; background-color: {}" title="{}">'
        '<span class="link-badge__icon" aria-hidden="true">{}</span>{}</span>',
        info.type,
        info.color,
        info.bg_color,
        title,
        info.icon,
        info.label,
    )
    return format_html(
        '<a href="{}" class="enhanced-link external-link" target="_blank" '
        'rel="noopener noreferrer" data-link-type="{}">{}{}</a>',
        part.href,
        info.type,
        part.text,
        badge,
    )


def render_code(block, theme="light", style=EMPTY_STYLE):
    """Code block with its header. ``block`` is a CodeNode or a CodePart."""
    language = block.language
    line_count = block.line_count
    header = format_html(
        '<div class="code-block__header">'
        '<span class="code-block__language">{}</span>'
        '<span class="code-block__lines">{} line{}</span>'
        "</div>",
        (language or "text").upper(),
        line_count,
        "" if line_count == 1 else "s",
    )
    return format_html(
        '<div{} data-language="{}">{}{}</div>',
        style_attrs(style),
        language or "",
        header,
        mark_safe(highlight_code(block.code, language, theme)),
    )


def render_parts(parts, theme="light", site_origin=None):
    rendered = []
    for part in parts:
        if isinstance(part, LinkPart):
            rendered.append(render_link(part, site_origin))
        elif isinstance(part, CodePart):
            rendered.append(render_code(part, theme))
        elif isinstance(part, RawHtmlPart):
            rendered.append(mark_safe(part.html))
        else:
            raise TypeError(f"Unknown render part {part!r}")
    return mark_safe("".join(rendered))


def _render_table(node, theme, site_origin):
    hover_class = get_render_config()["table_html"]["row_hover_class"]
    alignments = tuple(node.alignments) + (None,) * len(node.headers)

    def cell(tag, parts, alignment):
        align = format_html(' style="text-align: {}"', alignment) if alignment else ""
        return format_html("<{}{}>{}</{}>", tag, align, render_parts(parts, theme, site_origin), tag)

    head = format_html_join(
        "", "{}", ((cell("th", parts, align),) for parts, align in zip(node.headers, alignments))
    )
    body = format_html_join(
        "",
        '<tr class="{}">{}</tr>',
        (
            (
                hover_class,
                mark_safe("".join(cell("td", parts, align) for parts, align in zip(row, alignments))),
            )
            for row in node.rows
        ),
    )
    return format_html(
        '<div class="table-scroll-wrapper"><table{}><thead><tr>{}</tr></thead><tbody>{}</tbody></table></div>',
        style_attrs(node.style),
        head,
        body,
    )


def render_node(node, theme="light", site_origin=None):
    """Render a single render node."""
    if isinstance(node, HeadingNode):
        anchor = format_html(' id="{}"', node.anchor) if node.anchor else ""
        return format_html(
            "<h{}{}{}>{}</h{}>",
            node.level,
            anchor,
            style_attrs(node.style),
            render_parts(node.parts, theme, site_origin),
            node.level,
        )
    if isinstance(node, ParagraphNode):
        return format_html("<p{}>{}</p>", style_attrs(node.style), render_parts(node.parts, theme, site_origin))
    if isinstance(node, QuoteNode):
        return format_html(
            "<blockquote{}>{}</blockquote>", style_attrs(node.style), render_parts(node.parts, theme, site_origin)
        )
    if isinstance(node, ListNode):
        items = format_html_join(
            "", "<li>{}</li>", ((render_parts(item, theme, site_origin),) for item in node.items)
        )
        return format_html("<ul{}>{}</ul>", style_attrs(node.style), items)
    if isinstance(node, CodeNode):
        return render_code(node, theme, node.style)
    if isinstance(node, TableNode):
        return _render_table(node, theme, site_origin)
    if isinstance(node, DividerNode):
        return format_html("<hr{}>", style_attrs(node.style))
    if isinstance(node, SpacerNode):
        return format_html('<div{} aria-hidden="true"></div>', style_attrs(node.style))
    if isinstance(node, HtmlNode):
        return format_html("<div{}>{}</div>", style_attrs(node.style), render_parts(node.parts, theme, site_origin))
    raise TypeError(f"Unknown render node {node!r}")


def render_image_viewer(tree):
    """The overlay every zoomable image opens into. Emitted once per page."""
    overlay_class = get_render_config()["image_viewer"]["overlay_class"]
    return format_html(
        '<div class="{}" data-image-count="{}" role="dialog" aria-modal="true" hidden>'
        '<button type="button" class="{}__close" aria-label="Close">&times;</button>'
        '<img class="{}__image" alt="">'
        "</div>",
        overlay_class,
        len(tree.images),
        overlay_class,
        overlay_class,
    )


def tree_to_html(tree, theme="light", site_origin=None):
    """
    Render a whole tree to safe HTML.

    Args:
        tree: RenderTree from :func:`postrender.markdown.renderer.render_document`
        theme: "light" or "dark"; only changes the code highlighting palette
        site_origin: Origin deciding which links are internal; defaults to
            the POSTRENDER_SITE_ORIGIN setting

    Returns:
        SafeString
    """
    html = "".join(render_node(node, theme, site_origin) for node in tree.nodes)
    if tree.images:
        html += render_image_viewer(tree)
    return mark_safe(html)
