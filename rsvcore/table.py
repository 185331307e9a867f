"""Aligned text tables, drawn either borderless or with box-drawing lines."""

from __future__ import annotations

import sys
import unicodedata
from collections.abc import Iterable, Iterator, Sequence
from typing import TextIO


def _char_width(c: str) -> int:
    if unicodedata.combining(c):
        return 0
    return 2 if unicodedata.east_asian_width(c) in ("W", "F") else 1


def _width(s: str) -> int:
    return sum(_char_width(c) for c in s)


def _pad(s: str, width: int) -> str:
    return s + " " * (width - _width(s))


def _layout(rows: Sequence[Sequence[str]]) -> tuple[list[list[list[str]]], list[int]]:
    ncols = max((len(r) for r in rows), default=0)
    cells = [
        [str(c).split("\n") for c in row] + [[""] for _ in range(ncols - len(row))]
        for row in rows
    ]
    widths = [
        max((_width(line) for row in cells for line in row[i]), default=0)
        for i in range(ncols)
    ]
    return cells, widths


def _row_lines(
    row: list[list[str]], widths: list[int], left: str, mid: str, right: str
) -> Iterator[str]:
    height = max((len(cell) for cell in row), default=1)
    for k in range(height):
        parts = [
            " " + _pad(cell[k] if k < len(cell) else "", w) + " "
            for cell, w in zip(row, widths)
        ]
        yield left + mid.join(parts) + right


def _render_blank(rows: Sequence[Sequence[str]]) -> str:
    cells, widths = _layout(rows)
    return "\n".join(
        line for row in cells for line in _row_lines(row, widths, "", " ", "")
    )


def _render_sharp(rows: Sequence[Sequence[str]]) -> str:
    """Box-drawn table with a rule under the first row only."""
    cells, widths = _layout(rows)
    if not cells:
        return ""

    def rule(left: str, mid: str, right: str) -> str:
        return left + mid.join("─" * (w + 2) for w in widths) + right

    out = [rule("┌", "┬", "┐")]
    for i, row in enumerate(cells):
        if i == 1:
            out.append(rule("├", "┼", "┤"))
        out.extend(_row_lines(row, widths, "│", "│", "│"))
    out.append(rule("└", "┴", "┘"))
    return "\n".join(out)


class Table:
    """Rows of text printed as a borderless aligned table."""

    def __init__(self) -> None:
        self._rows: list[list[str]] = []

    def __len__(self) -> int:
        return len(self._rows)

    def add_record(self, row: Iterable[object]) -> None:
        self._rows.append([str(c) for c in row])

    @classmethod
    def from_records(cls, rows: Iterable[Iterable[object]]) -> Table:
        table = cls()
        for row in rows:
            table.add_record(row)
        return table

    def render(self) -> str:
        """The aligned table without a trailing newline."""
        return _render_blank(self._rows)

    def print_blank(self, stream: TextIO | None = None) -> None:
        """Write the table; nothing is written for an empty table."""
        if not self._rows:
            return
        out = stream if stream is not None else sys.stdout
        try:
            out.write(self.render() + "\n")
            out.flush()
        except BrokenPipeError:
            return