# postrender/markdown/nodes.py
"""
Typed records that flow through the rendering pipeline.

Three families live here:

1. Blocks - what the segmenter emits, one per source construct.
2. Inline nodes - what the inline transformer parses a line of text into.
3. Render parts / render nodes - what the renderer hands to the UI adapter.

All records are frozen dataclasses; every stage builds new records instead of
mutating the previous stage's output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


# --- Style records ---------------------------------------------------------


@dataclass(frozen=True)
class StyleRecord:
    """Presentation hints attached to a render node.

    The pipeline never bakes CSS into node content; the adapter resolves
    ``classes`` and ``declarations`` to attributes when producing markup.
    """

    classes: tuple[str, ...] = ()
    declarations: tuple[tuple[str, str], ...] = ()

    def css(self) -> str:
        return "; ".join(f"{name}: {value}" for name, value in self.declarations)


EMPTY_STYLE = StyleRecord()


# --- Blocks ----------------------------------------------------------------


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class Quote:
    text: str


@dataclass(frozen=True)
class BulletList:
    items: tuple[str, ...]


@dataclass(frozen=True)
class CodeBlock:
    language: Optional[str]
    body: str


@dataclass(frozen=True)
class Table:
    raw_lines: tuple[str, ...]


@dataclass(frozen=True)
class Divider:
    pass


@dataclass(frozen=True)
class Blank:
    pass


Block = Union[Heading, Paragraph, Quote, BulletList, CodeBlock, Table, Divider, Blank]


# --- Inline nodes ----------------------------------------------------------


@dataclass(frozen=True)
class TextRun:
    text: str


@dataclass(frozen=True)
class LinkNode:
    href: str
    text: str
    source: str = field(default="", compare=False, repr=False)


@dataclass(frozen=True)
class ImageNode:
    src: str
    alt: str = ""
    style: str = ""
    source: str = field(default="", compare=False, repr=False)


@dataclass(frozen=True)
class UnavailableImageNode:
    """Stand-in for an image served from a host that cannot be embedded.

    ``original_url`` is the unwrapped target when decoding succeeded,
    otherwise the wrapped URL itself (``decoded`` is then False).
    """

    alt: str
    original_url: str
    decoded: bool
    source: str = field(default="", compare=False, repr=False)


@dataclass(frozen=True)
class LinkedImageNode:
    """An image that is itself the content of a link, e.g. a badge."""

    href: str
    image: ImageNode
    source: str = field(default="", compare=False, repr=False)


@dataclass(frozen=True)
class Strong:
    children: tuple["InlineNode", ...]


@dataclass(frozen=True)
class Emphasis:
    children: tuple["InlineNode", ...]


@dataclass(frozen=True)
class CodeSpan:
    text: str


InlineNode = Union[
    TextRun, LinkNode, ImageNode, UnavailableImageNode, LinkedImageNode, Strong, Emphasis, CodeSpan
]


# --- Render parts ----------------------------------------------------------


@dataclass(frozen=True)
class LinkPart:
    href: str
    text: str


@dataclass(frozen=True)
class CodePart:
    language: Optional[str]
    code: str

    @property
    def line_count(self) -> int:
        return len(self.code.split("\n"))


@dataclass(frozen=True)
class RawHtmlPart:
    html: str


RenderPart = Union[LinkPart, CodePart, RawHtmlPart]
Parts = tuple[RenderPart, ...]


# --- Render nodes ----------------------------------------------------------


@dataclass(frozen=True)
class HeadingNode:
    level: int
    parts: Parts
    anchor: str = ""
    style: StyleRecord = EMPTY_STYLE


@dataclass(frozen=True)
class ParagraphNode:
    parts: Parts
    style: StyleRecord = EMPTY_STYLE


@dataclass(frozen=True)
class QuoteNode:
    parts: Parts
    style: StyleRecord = EMPTY_STYLE


@dataclass(frozen=True)
class ListNode:
    items: tuple[Parts, ...]
    style: StyleRecord = EMPTY_STYLE


@dataclass(frozen=True)
class DividerNode:
    style: StyleRecord = EMPTY_STYLE


@dataclass(frozen=True)
class SpacerNode:
    style: StyleRecord = EMPTY_STYLE


@dataclass(frozen=True)
class CodeNode:
    language: Optional[str]
    code: str
    style: StyleRecord = EMPTY_STYLE

    @property
    def line_count(self) -> int:
        return len(self.code.split("\n"))


@dataclass(frozen=True)
class TableNode:
    headers: tuple[Parts, ...]
    rows: tuple[tuple[Parts, ...], ...]
    alignments: tuple[Optional[str], ...] = ()
    style: StyleRecord = EMPTY_STYLE


@dataclass(frozen=True)
class HtmlNode:
    """A mixed-HTML document body, already reconciled into parts."""

    parts: Parts
    style: StyleRecord = EMPTY_STYLE


RenderNode = Union[
    HeadingNode,
    ParagraphNode,
    QuoteNode,
    ListNode,
    DividerNode,
    SpacerNode,
    CodeNode,
    TableNode,
    HtmlNode,
]


@dataclass
class RenderTree:
    """Final output of :func:`postrender.markdown.renderer.render_document`."""

    nodes: list = field(default_factory=list)
    viewer: Optional[object] = None
    metadata: Optional[object] = None
    is_html: bool = False

    @property
    def images(self) -> list:
        return list(self.viewer.images) if self.viewer is not None else []
