# postrender/templatetags/markdown_tags.py

from django import template
from django.utils.safestring import mark_safe

from postrender.markdown.adapter import tree_to_html
from postrender.markdown.renderer import render_document
from postrender.markdown.toc import extract_toc

register = template.Library()


@register.filter(name="markdown")
def markdown_filter(value):
    return mark_safe(tree_to_html(render_document(value)))


@register.simple_tag(takes_context=True)
def markdown_with_context(context, value):
    """Template tag that passes template context to the renderer"""
    processor_context = {
        "request": context.get("request"),
        "post": context.get("post"),
    }
    request = processor_context["request"]
    site_origin = None
    if request is not None and hasattr(request, "build_absolute_uri"):
        site_origin = request.build_absolute_uri("/").rstrip("/")
        processor_context["site_origin"] = site_origin

    tree = render_document(value, context=processor_context)
    theme = context.get("theme") or "light"
    return mark_safe(tree_to_html(tree, theme=theme, site_origin=site_origin))


@register.filter(name="markdown_toc")
def markdown_toc_filter(value):
    """Nested table of contents for a post, for use with ``{% with %}``/``{% for %}``"""
    return extract_toc(render_document(value))


@register.filter(name="markdown_metadata")
def markdown_metadata_filter(value):
    """PostMetadata read from the post's front matter"""
    return render_document(value).metadata
