from __future__ import annotations

from dataclasses import replace
from typing import Iterable, TypedDict

from bs4 import BeautifulSoup
from django.utils.text import slugify

from .nodes import CodePart, HeadingNode, HtmlNode, LinkPart, Parts, RawHtmlPart, RenderTree


class TocEntry(TypedDict):
    level: int
    id: str
    title: str
    children: list["TocEntry"]


def parts_text(parts: Parts) -> str:
    """Plain text of a run of render parts, markup removed."""
    chunks: list[str] = []
    for part in parts:
        if isinstance(part, LinkPart):
            chunks.append(part.text)
        elif isinstance(part, CodePart):
            chunks.append(part.code)
        elif isinstance(part, RawHtmlPart):
            chunks.append(BeautifulSoup(part.html, "html.parser").get_text())
    return " ".join("".join(chunks).split())


def assign_anchors(nodes: list) -> list:
    """
    Give every heading node an ``anchor`` id unique within the document.

    Anchors are slugs of the heading text; repeats get ``-1``, ``-2``...
    suffixes in document order. Headings without any sluggable text fall
    back to ``section``.
    """
    seen: set[str] = set()
    result = []
    for node in nodes:
        if isinstance(node, HeadingNode):
            base = slugify(parts_text(node.parts)) or "section"
            anchor = base
            counter = 0
            while anchor in seen:
                counter += 1
                anchor = f"{base}-{counter}"
            seen.add(anchor)
            node = replace(node, anchor=anchor)
        result.append(node)
    return result


def _html_headings(node: HtmlNode) -> Iterable[tuple[int, str, str]]:
    """Headings of a mixed-HTML body that the author gave an ``id``."""
    html = "".join(part.html for part in node.parts if isinstance(part, RawHtmlPart))
    soup = BeautifulSoup(html, "html.parser")
    for heading in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"]):
        identifier = heading.get("id")
        text = heading.get_text(separator=" ", strip=True)
        if identifier and text:
            yield int(heading.name[1]), identifier, text


def _headings(tree: RenderTree) -> Iterable[tuple[int, str, str]]:
    for node in tree.nodes:
        if isinstance(node, HeadingNode):
            title = parts_text(node.parts)
            if title and node.anchor:
                yield node.level, node.anchor, title
        elif isinstance(node, HtmlNode):
            yield from _html_headings(node)


def _nest(entries: Iterable[TocEntry]) -> list[TocEntry]:
    toc: list[TocEntry] = []
    stack: list[TocEntry] = []
    for entry in entries:
        while stack and stack[-1]["level"] >= entry["level"]:
            stack.pop()

        if stack:
            stack[-1]["children"].append(entry)
        else:
            toc.append(entry)

        stack.append(entry)
    return toc


def extract_toc(tree: RenderTree) -> list[TocEntry]:
    """
    Given a render tree, return a hierarchical list of headings for a TOC.

    The resulting structure is a list of dictionaries. Each dictionary contains:
        - level: Heading level (1-6)
        - id: Anchor of the heading
        - title: Plain-text version of the heading
        - children: Nested list of child headings

    Mixed-HTML documents contribute only the headings that carry an ``id``
    attribute, since those are the only ones a TOC entry can link to.
    """
    return _nest(
        {"level": level, "id": identifier, "title": title, "children": []}
        for level, identifier, title in _headings(tree)
    )
