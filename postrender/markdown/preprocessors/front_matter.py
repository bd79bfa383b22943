"""
Preprocessor that removes the YAML-like front matter header from a post.

    ---
    title: "Hello"
    tags: [python, django]
    draft: false
    ---
    # Body starts here

Recognised value shapes:
    [a, b]         → ["a", "b"]
    "text" / 'text' → "text"
    true / false   → True / False
    anything else  → the raw string

A header without a closing fence is not front matter: the document is left
untouched.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Union

logger = logging.getLogger(__name__)

FrontMatterValue = Union[str, bool, list]

FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_value(raw: str) -> FrontMatterValue:
    value = raw.strip()
    if value.startswith("[") and value.endswith("]"):
        inner = value[1:-1].strip()
        if not inner:
            return []
        return [_unquote(item.strip()) for item in inner.split(",") if item.strip()]
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def parse_front_matter(text: str) -> tuple[dict[str, FrontMatterValue], str]:
    """
    Split ``text`` into its front matter mapping and the remaining body.

    Returns:
        ``(metadata, body)``; ``metadata`` is empty and ``body`` is ``text``
        unchanged when there is no well-formed header.
    """
    match = FRONT_MATTER_RE.match(text)
    if not match:
        if text.startswith("---"):
            logger.debug("Front matter fence is not closed, leaving document as-is")
        return {}, text

    metadata: dict[str, FrontMatterValue] = {}
    for line in (match.group(1) or "").splitlines():
        key, sep, value = line.partition(":")
        key = key.strip()
        if not sep or not key:
            continue
        metadata[key] = parse_value(value)

    return metadata, text[match.end():]


def strip_front_matter(text: str) -> str:
    return parse_front_matter(text)[1]


@dataclass
class PostMetadata:
    """The front matter keys the blog front end understands."""

    title: Optional[str] = None
    date: Optional[str] = None
    updated: Optional[str] = None
    author: Optional[str] = None
    summary: Optional[str] = None
    tags: list = field(default_factory=list)
    categories: list = field(default_factory=list)

    @classmethod
    def from_front_matter(cls, metadata: dict) -> "PostMetadata":
        def text_value(key):
            value = metadata.get(key)
            return value if isinstance(value, str) and value else None

        def list_value(key):
            value = metadata.get(key)
            if isinstance(value, list):
                return [str(item) for item in value]
            if isinstance(value, str) and value:
                return [value]
            return []

        return cls(
            title=text_value("title"),
            date=text_value("date"),
            updated=text_value("updated"),
            author=text_value("author"),
            summary=text_value("summary"),
            tags=list_value("tags"),
            categories=list_value("categories"),
        )


def front_matter_default(text: str, context: dict) -> str:
    """
    Default configuration for the front matter stripper.

    Register this in PREPROCESSORS. The parsed mapping is left in
    ``context["front_matter"]``.
    """
    metadata, body = parse_front_matter(text)
    context["front_matter"] = metadata
    return body
