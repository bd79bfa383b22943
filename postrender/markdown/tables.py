# postrender/markdown/tables.py
"""
Table renderer: lay out a run of pipe-delimited lines as a grid.

    | Name | Score |      ← header, always the first line
    |:-----|------:|      ← separator (optional), carries alignment
    | Ada  | 10    |      ← data rows
    | Bob  |              ← ragged rows are padded, never dropped

The separator is looked for anywhere after the header; without one, data
starts on the second line. Ragged rows are reconciled to a single width:
short rows are padded with empty cells, and a row longer than the header
widens the header with empty header cells.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .errors import TableParseError

logger = logging.getLogger(__name__)

SEPARATOR_CELL_RE = re.compile(r"^:?-+:?$")
ALNUM_RE = re.compile(r"\w")


@dataclass
class TableModel:
    headers: List[str]
    rows: List[List[str]] = field(default_factory=list)
    alignments: List[Optional[str]] = field(default_factory=list)

    @property
    def width(self) -> int:
        return len(self.headers)


def split_row(line: str) -> List[str]:
    """Split on ``|``, trim cells, drop the empty edge cells of outer pipes."""
    cells = [cell.strip() for cell in line.strip().split("|")]
    if len(cells) > 1 and cells[0] == "":
        cells = cells[1:]
    if len(cells) > 1 and cells[-1] == "":
        cells = cells[:-1]
    return cells


def is_separator(line: str) -> bool:
    cells = [cell.replace(" ", "") for cell in split_row(line)]
    filled = [cell for cell in cells if cell]
    if filled and all(SEPARATOR_CELL_RE.match(cell) for cell in filled):
        return True
    return "--" in line and not ALNUM_RE.search(line)


def _alignment(cell: str) -> Optional[str]:
    cell = cell.replace(" ", "")
    if cell.startswith(":") and cell.endswith(":"):
        return "center"
    if cell.endswith(":"):
        return "right"
    if cell.startswith(":"):
        return "left"
    return None


def render_table(raw_lines: Sequence[str]) -> TableModel:
    """
    Build a TableModel from the raw lines of a table run.

    Raises:
        TableParseError: if the run holds no non-blank line at all
    """
    lines = [line for line in raw_lines if line.strip()]
    if not lines:
        raise TableParseError("Table run has no rows")

    headers = split_row(lines[0])
    body = lines[1:]
    alignments: List[Optional[str]] = []

    for index, line in enumerate(body):
        if is_separator(line):
            alignments = [_alignment(cell) for cell in split_row(line)]
            # Rows seen before the separator are kept as data
            body = body[:index] + body[index + 1:]
            break

    rows = [split_row(line) for line in body]

    width = max([len(headers)] + [len(row) for row in rows])
    if width > len(headers):
        logger.debug("Widening table header from %d to %d columns", len(headers), width)
        headers = headers + [""] * (width - len(headers))

    padded = []
    for row in rows:
        if len(row) < width:
            logger.debug("Padding ragged table row %r to %d cells", row, width)
            row = row + [""] * (width - len(row))
        padded.append(row)

    alignments = (alignments + [None] * width)[:width]

    return TableModel(headers=headers, rows=padded, alignments=alignments)
