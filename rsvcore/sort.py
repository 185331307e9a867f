"""In-memory sorting of rows by one or two columns, as strings or numbers."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

from .column_type import _parse_f64
from .row_split import split_row
from .util import CliError
from .writer import Writer

T = TypeVar("T")

_FLAGS = ("n", "N", "d", "D")


@dataclass(frozen=True)
class SortColumn:
    """One sort key: a column index, its direction and whether it is numeric."""

    col: int
    ascending: bool = True
    numeric: bool = False

    def key(self, field: str) -> str | float:
        if not self.numeric:
            return field
        value = _parse_f64(field)
        if value is None:
            return 0.0
        if math.isnan(value):
            raise CliError(f"cannot sort by NaN value <{field}> in column {self.col}.")
        return value


class SortColumns:
    """One or two sort keys parsed from ``-c`` syntax such as ``0DN,2N``."""

    def __init__(self, columns: Sequence[SortColumn]) -> None:
        self.columns = list(columns)

    @classmethod
    def from_str(cls, cols: str) -> SortColumns:
        columns = []
        for part in cols.split(","):
            j = part.replace(" ", "")
            for _ in range(2):
                if j.endswith(_FLAGS):
                    j = j[:-1]
            if not j:
                continue
            body = j[1:] if j.startswith("+") else j
            if not (body.isascii() and body.isdigit()):
                raise CliError(
                    f"column syntax error for <-c {part}>. Run <rsv sort -h> for help."
                )
            columns.append(
                SortColumn(
                    col=int(body),
                    ascending=not any(c in part for c in "dD"),
                    numeric=any(c in part for c in "nN"),
                )
            )
        if not columns:
            raise CliError("no column is specified.")
        if len(columns) > 2:
            raise CliError("sort by more than two columns is not supported.")
        return cls(columns)

    def _sorted(self, items: Sequence[T], fields_of: Sequence[Sequence[str]]) -> list[T]:
        single = len(self.columns) == 1
        decorated = []
        for item, fields in zip(items, fields_of):
            keys = []
            for c in self.columns:
                if c.col < len(fields):
                    field = fields[c.col]
                elif single:
                    field = ""
                else:
                    raise CliError(f"column {c.col} does not exist in a row.")
                keys.append(c.key(field))
            decorated.append((item, keys))
        # stable sorts from the last key to the first give a lexicographic order
        for idx in reversed(range(len(self.columns))):
            decorated.sort(key=lambda t: t[1][idx], reverse=not self.columns[idx].ascending)
        return [item for item, _ in decorated]

    def sorted_lines(self, lines: Sequence[str], sep: str, quote: str) -> list[str]:
        """The lines sorted by the columns found when splitting them."""
        fields = [list(split_row(line, sep, quote)) for line in lines]
        return self._sorted(lines, fields)

    def sorted_rows(self, rows: Sequence[Sequence[str]]) -> list[Sequence[str]]:
        """Already split rows, sorted; every row must hold the sort columns."""
        for row in rows:
            for c in self.columns:
                if c.col >= len(row):
                    raise CliError(f"column {c.col} does not exist in a row.")
        return self._sorted(rows, rows)

    def sort_and_write(
        self, lines: Sequence[str], sep: str, quote: str, wtr: Writer
    ) -> None:
        wtr.write_strings(self.sorted_lines(lines, sep, quote))

    def sort_rows_and_write(self, rows: Sequence[Sequence[str]], wtr: Writer) -> None:
        wtr.write_fields_of_lines(self.sorted_rows(rows))