# postrender/markdown/segmenter.py
"""
Block segmenter: turns normalized lines into an ordered list of blocks.

The segmenter is a small state machine. At any point it is in exactly one
run mode:

    NONE        - no multi-line construct open
    CODE_FENCE  - inside ``` ... ```, every line is captured verbatim
    LIST        - accumulating unordered list items
    TABLE       - accumulating pipe-delimited rows

Each line is offered to the rules below, in priority order, until one
consumes it:

    code fence > table > list > heading > quote > divider > blank > paragraph

A rule that closes a run (a table meeting a pipe-less line, a list meeting
a non-item line) flushes the run and lets the line fall through to the
remaining rules, so no line is ever lost.
"""

from __future__ import annotations

import enum
import re
from typing import Iterable, List, Optional

from postrender import conf

from .nodes import Blank, Block, BulletList, CodeBlock, Divider, Heading, Paragraph, Quote, Table

FENCE = "```"
LIST_ITEM_RE = re.compile(r"^[-*+]\s+(.*)$")
DIVIDER_RE = re.compile(r"^(?:-{3,}|_{3,}|\*{3,})$")
QUOTE_RE = re.compile(r"^> ?")


class RunMode(enum.Enum):
    NONE = "none"
    CODE_FENCE = "code_fence"
    LIST = "list"
    TABLE = "table"


def split_lines(text: str) -> List[str]:
    """Split normalized text into lines, ignoring one terminating newline."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class BlockSegmenter:
    """Line-by-line segmenter. One instance may be reused across documents."""

    def __init__(self, max_heading_level: Optional[int] = None):
        self.max_heading_level = max_heading_level or conf.max_heading_level()
        self.rules = [
            self._code_fence_rule,
            self._table_rule,
            self._list_rule,
            self._heading_rule,
            self._quote_rule,
            self._divider_rule,
            self._blank_rule,
            self._paragraph_rule,
        ]
        self._reset()

    def _reset(self) -> None:
        self.mode = RunMode.NONE
        self.blocks: List[Block] = []
        self.buffer: List[str] = []
        self.language: Optional[str] = None
        self.pending_blank = False

    # -- driving ------------------------------------------------------------

    def segment(self, lines: Iterable[str]) -> List[Block]:
        self._reset()
        for line in lines:
            for rule in self.rules:
                if rule(line):
                    break
        self._flush()
        blocks = self.blocks
        self._reset()
        return blocks

    def _emit(self, block: Block) -> None:
        self.blocks.append(block)

    def _flush(self) -> None:
        """Close whatever run is open and emit its block."""
        if self.mode is RunMode.CODE_FENCE:
            self._emit(CodeBlock(self.language, "\n".join(self.buffer)))
        elif self.mode is RunMode.LIST:
            self._emit(BulletList(tuple(self.buffer)))
            if self.pending_blank:
                self._emit(Blank())
        elif self.mode is RunMode.TABLE:
            self._emit(Table(tuple(self.buffer)))
        self.mode = RunMode.NONE
        self.buffer = []
        self.language = None
        self.pending_blank = False

    # -- rules ----------------------------------------------------------------

    def _code_fence_rule(self, line: str) -> bool:
        if self.mode is RunMode.CODE_FENCE:
            if line.startswith(FENCE):
                self._flush()
            else:
                self.buffer.append(line)
            return True

        if not line.startswith(FENCE):
            return False

        self._flush()
        self.mode = RunMode.CODE_FENCE
        self.language = line.lstrip("`").strip() or None
        return True

    def _table_rule(self, line: str) -> bool:
        if self.mode is RunMode.TABLE:
            if line.strip() and "|" in line:
                self.buffer.append(line)
                return True
            self._flush()
            return False

        if line.count("|") < 2:
            return False

        self._flush()
        self.mode = RunMode.TABLE
        self.buffer = [line]
        return True

    def _list_rule(self, line: str) -> bool:
        match = LIST_ITEM_RE.match(line)
        if match:
            if self.mode is not RunMode.LIST:
                self._flush()
                self.mode = RunMode.LIST
            # A single blank line between items is absorbed into the list
            self.pending_blank = False
            self.buffer.append(match.group(1).strip())
            return True

        if self.mode is not RunMode.LIST:
            return False

        if not line.strip() and not self.pending_blank:
            self.pending_blank = True
            return True

        self._flush()
        return False

    def _heading_rule(self, line: str) -> bool:
        if not line.startswith("#"):
            return False
        stripped = line.lstrip("#")
        level = min(len(line) - len(stripped), self.max_heading_level)
        self._emit(Heading(level, stripped.strip()))
        return True

    def _quote_rule(self, line: str) -> bool:
        if not line.startswith(">"):
            return False
        self._emit(Quote(QUOTE_RE.sub("", line, count=1)))
        return True

    def _divider_rule(self, line: str) -> bool:
        if not DIVIDER_RE.match(line.strip()):
            return False
        self._emit(Divider())
        return True

    def _blank_rule(self, line: str) -> bool:
        if line.strip():
            return False
        # Leading blanks and runs of blanks produce at most one marker
        if self.blocks and not isinstance(self.blocks[-1], Blank):
            self._emit(Blank())
        return True

    def _paragraph_rule(self, line: str) -> bool:
        self._emit(Paragraph(line))
        return True


def segment(lines: Iterable[str], max_heading_level: Optional[int] = None) -> List[Block]:
    """Segment ``lines`` into blocks in source order."""
    return BlockSegmenter(max_heading_level).segment(lines)


def segment_text(text: str, max_heading_level: Optional[int] = None) -> List[Block]:
    return segment(split_lines(text), max_heading_level)
