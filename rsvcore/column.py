"""Column selection syntax: ``0,1,2,5``, ``0-2,5``, ``-1`` and ``-3--1``."""

from __future__ import annotations

import os
import re
from collections.abc import Iterator, Sequence
from pathlib import Path

from .row_split import split_row
from .util import CliError

_SYNTAX_ERROR = (
    "Column syntax error: can be something like 0,1,2,5 or 0-2,5 or -1 or -3--1."
)
_USIZE = re.compile(r"\+?[0-9]+")
_I32 = re.compile(r"[+-]?[0-9]+")


def _parse_usize(col: str) -> int:
    if not _USIZE.fullmatch(col):
        raise CliError(_SYNTAX_ERROR)
    return int(col)


def _parse_i32(col: str) -> int:
    if not _I32.fullmatch(col):
        raise CliError(_SYNTAX_ERROR)
    value = int(col)
    if not -(2**31) <= value < 2**31:
        raise CliError(_SYNTAX_ERROR)
    return value


def _count_columns(path: str | os.PathLike[str], sep: str, quote: str) -> int:
    with open(path, encoding="utf-8", newline="") as f:
        first_line = f.readline()
    return sum(1 for _ in split_row(first_line, sep, quote))


class Columns:
    """A parsed list of column indices, in the order given and without duplicates."""

    def __init__(self, raw: str) -> None:
        self._raw = raw
        self._path: Path | None = None
        self._sep = ","
        self._quote = '"'
        self._total: int | None = None
        self.cols: list[int] = []
        self.max = 0
        self.select_all = True
        self.parsed = False

    def total_col(self, total: int) -> Columns:
        """Set the number of columns, used to resolve negative indices."""
        self._total = total
        return self

    def total_col_of(
        self, path: str | os.PathLike[str], sep: str, quote: str
    ) -> Columns:
        """Take the number of columns from the first line of ``path`` when needed."""
        self._path = Path(path)
        self._sep = sep
        self._quote = quote
        return self

    def parse(self) -> Columns:
        """Parse the raw selection; an empty one selects every column."""
        self.parsed = True
        if not self._raw:
            return self
        for part in self._raw.split(","):
            if part.strip():
                self._parse_col(part)
        self.max = max(self.cols, default=0)
        self.select_all = not self.cols
        return self

    def _parse_col(self, col: str) -> None:
        dashes = col.count("-")
        if col.startswith("-"):
            if dashes == 1:
                self._push(self._true_col(col))
                return
            split_at = col.index("-", 1)
        else:
            if dashes == 0:
                self._push(self._true_col(col))
                return
            split_at = col.index("-")
        low = self._true_col(col[:split_at])
        high = self._true_col(col[split_at + 1 :])
        self._push_range(low, high)

    def _true_col(self, col: str) -> int:
        if not col.startswith("-"):
            return _parse_usize(col)
        if self._total is None:
            if self._path is None:
                raise CliError("the number of columns is unknown.")
            self._total = _count_columns(self._path, self._sep, self._quote)
        i = self._total + _parse_i32(col)
        if i < 0:
            raise CliError(f"Column {col} does not exist.")
        return i

    def _push(self, col: int) -> None:
        if col not in self.cols:
            self.cols.append(col)

    def _push_range(self, low: int, high: int) -> None:
        if low > high:
            raise CliError("Min column is bigger than max column.")
        for i in range(low, high + 1):
            self._push(i)

    def __iter__(self) -> Iterator[int]:
        return iter(self.cols)

    def artificial_cols_with_appended_n(self) -> list[str]:
        """Names ``col<i>`` for the selected columns, followed by ``n``."""
        return [f"col{i}" for i in self.cols] + ["n"]

    def artificial_n_cols(self, n: int) -> list[str]:
        """Names ``col0`` to ``col<n-1>``."""
        return [f"col{i}" for i in range(n)]

    def select_owned_string(self, fields: Sequence[str]) -> str:
        """Join the selected fields with commas."""
        return ",".join(fields[i] for i in self.cols)

    def select_owned_vector_and_append_n(self, fields: Sequence[str]) -> list[str]:
        """The selected fields followed by ``n``."""
        return [fields[i] for i in self.cols] + ["n"]

    def col_vec_or_length_of(self, n: int) -> list[int]:
        """The selected columns, or ``0..n`` when every column is selected."""
        if self.select_all:
            return list(range(n))
        return list(self.cols)