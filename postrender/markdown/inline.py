# postrender/markdown/inline.py
"""
Inline transformer: one line (or table cell) of Markdown to an HTML fragment.

The text is parsed into typed inline nodes in ordered passes:

1. Raw ``<img>`` tags        → ImageNode (author style kept, sizing appended)
2. ``![alt](src)`` images    → ImageNode, or UnavailableImageNode for proxies
3. ``[<image>](href)``       → LinkedImageNode, so badges stay clickable
4. ``[text](href)`` links    → LinkNode
5. Code spans, ``**bold**`` and ``*italic*``

Passes 1, 2 and 4 only look inside the plain text runs left by the previous
ones, so ``*`` and backticks inside a link's text or href can never be
picked up by the emphasis pass. Passes 3 and 5 see already-parsed nodes as
single opaque atoms: emphasis can wrap a link, and a code span that encloses
a link or image shows that node's source text literally.

The serialized fragment wraps each link in an enhanced-link marker span that
the reconciler later turns into a LinkPart:

    <span class="enhanced-link" data-href="https://github.com/x">a link</span>
"""

from __future__ import annotations

import re
from typing import Callable, Iterator, List, Sequence

from bs4 import BeautifulSoup

from postrender.links import is_internal

from .errors import InlineTransformError
from .images import decode_wrapped_url, is_unreliable_host, with_sizing_hints
from .markers import escape, image_link, link_marker, unavailable_image
from .nodes import (
    CodeSpan,
    Emphasis,
    ImageNode,
    InlineNode,
    LinkedImageNode,
    LinkNode,
    Strong,
    TextRun,
    UnavailableImageNode,
)
from .postprocessors.sanitizer import clean_fragment

IMG_TAG_RE = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
MD_IMAGE_RE = re.compile(r'!\[([^\]]*)\]\(\s*([^)\s]+)(?:\s+"[^"]*")?\s*\)')
MD_LINK_RE = re.compile(r'\[([^\]]+)\]\(\s*([^)\s]+)(?:\s+"[^"]*")?\s*\)')

# Stands in for an already-parsed node while atoms are matched
ATOM = "\x00"
LINKED_IMAGE_RE = re.compile(r'\[' + ATOM + r'\]\(\s*([^)\s]+)(?:\s+"[^"]*")?\s*\)')
EMPHASIS_RE = re.compile(
    r"`(?P<code>[^`]+)`"
    r"|\*\*(?P<strong>.+?)\*\*"
    r"|\*(?P<em>[^*]+?)\*",
    re.DOTALL,
)


def _split_text_runs(
    nodes: Sequence[InlineNode],
    pattern: re.Pattern,
    build: Callable[[re.Match], InlineNode],
) -> List[InlineNode]:
    """Replace every match of ``pattern`` inside text runs with ``build(match)``."""
    result: List[InlineNode] = []
    for node in nodes:
        if not isinstance(node, TextRun):
            result.append(node)
            continue

        pos = 0
        for match in pattern.finditer(node.text):
            if match.start() > pos:
                result.append(TextRun(node.text[pos:match.start()]))
            result.append(build(match))
            pos = match.end()
        if pos < len(node.text):
            result.append(TextRun(node.text[pos:]))
    return result


def _image(src: str, alt: str, source: str, style: str = "") -> InlineNode:
    if is_unreliable_host(src):
        decoded = decode_wrapped_url(src)
        return UnavailableImageNode(alt, decoded or src, decoded is not None, source=source)
    return ImageNode(src, alt, with_sizing_hints(style), source=source)


def _raw_image(match: re.Match) -> InlineNode:
    img = BeautifulSoup(match.group(0), "html.parser").find("img")
    if img is None:
        return TextRun(match.group(0))
    return _image(img.get("src", ""), img.get("alt", ""), match.group(0), img.get("style", ""))


def _markdown_image(match: re.Match) -> InlineNode:
    return _image(match.group(2), match.group(1), match.group(0))


def _link(match: re.Match) -> InlineNode:
    return LinkNode(href=match.group(2), text=match.group(1), source=match.group(0))


def _next_atom(atoms: Iterator[InlineNode]) -> InlineNode:
    try:
        return next(atoms)
    except StopIteration:
        raise InlineTransformError("More atom markers than parsed nodes") from None


def _flatten(nodes: Sequence[InlineNode]) -> tuple[str, Iterator[InlineNode]]:
    """Text runs joined with one ATOM per parsed node, plus those nodes in order."""
    parsed = [node for node in nodes if not isinstance(node, TextRun)]
    flat = "".join(node.text if isinstance(node, TextRun) else ATOM for node in nodes)
    return flat, iter(parsed)


def _all_placed(atoms: Iterator[InlineNode]) -> None:
    if next(atoms, None) is not None:
        raise InlineTransformError("Parsed inline node was not placed back")


def _with_atoms(text: str, atoms: Iterator[InlineNode]) -> List[InlineNode]:
    nodes: List[InlineNode] = []
    for index, chunk in enumerate(text.split(ATOM)):
        if index:
            nodes.append(_next_atom(atoms))
        if chunk:
            nodes.append(TextRun(chunk))
    return nodes


def _source_text(text: str, atoms: Iterator[InlineNode]) -> str:
    """``text`` with every atom put back as the source it was parsed from."""
    chunks = text.split(ATOM)
    out = [chunks[0]]
    for chunk in chunks[1:]:
        out.append(_next_atom(atoms).source)
        out.append(chunk)
    return "".join(out)


def _linked_images(nodes: Sequence[InlineNode]) -> List[InlineNode]:
    flat, atoms = _flatten(nodes)
    result: List[InlineNode] = []
    pos = 0
    for match in LINKED_IMAGE_RE.finditer(flat):
        result.extend(_with_atoms(flat[pos:match.start()], atoms))
        node = _next_atom(atoms)
        if isinstance(node, ImageNode):
            source = match.group(0).replace(ATOM, node.source)
            result.append(LinkedImageNode(match.group(1), node, source=source))
        else:
            # Placeholders already carry a link of their own
            result.extend([TextRun("["), node, TextRun(match.group(0)[2:])])
        pos = match.end()
    result.extend(_with_atoms(flat[pos:], atoms))
    _all_placed(atoms)
    return result


def _parse_emphasis(text: str, atoms: Iterator[InlineNode]) -> List[InlineNode]:
    nodes: List[InlineNode] = []
    pos = 0
    for match in EMPHASIS_RE.finditer(text):
        nodes.extend(_with_atoms(text[pos:match.start()], atoms))
        if match.group("code") is not None:
            nodes.append(CodeSpan(_source_text(match.group("code"), atoms)))
        elif match.group("strong") is not None:
            nodes.append(Strong(tuple(_parse_emphasis(match.group("strong"), atoms))))
        else:
            nodes.append(Emphasis(tuple(_parse_emphasis(match.group("em"), atoms))))
        pos = match.end()
    nodes.extend(_with_atoms(text[pos:], atoms))
    return nodes


def _emphasis(nodes: Sequence[InlineNode]) -> List[InlineNode]:
    flat, atoms = _flatten(nodes)
    result = _parse_emphasis(flat, atoms)
    _all_placed(atoms)
    return result


def parse_inline(text: str) -> List[InlineNode]:
    """Parse one line of Markdown into inline nodes."""
    nodes: List[InlineNode] = [TextRun(text.replace(ATOM, ""))]
    nodes = _split_text_runs(nodes, IMG_TAG_RE, _raw_image)
    nodes = _split_text_runs(nodes, MD_IMAGE_RE, _markdown_image)
    nodes = _linked_images(nodes)
    nodes = _split_text_runs(nodes, MD_LINK_RE, _link)
    return _emphasis(nodes)


def _img_html(node: ImageNode) -> str:
    return f'<img src="{escape(node.src)}" alt="{escape(node.alt)}" style="{escape(node.style)}">'


def serialize(nodes: Sequence[InlineNode]) -> str:
    """Emit the intermediate HTML for ``nodes``. Text runs pass through raw."""
    out = []
    for node in nodes:
        if isinstance(node, TextRun):
            out.append(node.text)
        elif isinstance(node, LinkNode):
            out.append(link_marker(node.href, node.text))
        elif isinstance(node, ImageNode):
            out.append(_img_html(node))
        elif isinstance(node, LinkedImageNode):
            out.append(image_link(node.href, _img_html(node.image), not is_internal(node.href)))
        elif isinstance(node, UnavailableImageNode):
            out.append(unavailable_image(node))
        elif isinstance(node, Strong):
            out.append(f"<strong>{serialize(node.children)}</strong>")
        elif isinstance(node, Emphasis):
            out.append(f"<em>{serialize(node.children)}</em>")
        elif isinstance(node, CodeSpan):
            out.append(f"<code>{escape(node.text)}</code>")
        else:
            raise InlineTransformError(f"Cannot serialize inline node {node!r}")
    return "".join(out)


def transform_inline(text: str) -> str:
    """
    Transform one line of Markdown into a sanitized HTML fragment.

    Args:
        text: Raw line or table cell text

    Returns:
        HTML with links as enhanced-link markers, ready for
        :func:`postrender.markdown.reconciler.reconcile`
    """
    return clean_fragment(serialize(parse_inline(text)))
