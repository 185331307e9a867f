"""Guessing column types (int, float, string, null) from sample rows."""

from __future__ import annotations

import enum
import itertools
import os
import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from .column import Columns
from .row_split import split_row
from .util import CliError, is_null

_GUESS_ROWS = 5000
_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _parse_i64(s: str) -> int | None:
    if not _INT_RE.fullmatch(s):
        return None
    value = int(s)
    return value if _I64_MIN <= value <= _I64_MAX else None


def _parse_f64(s: str) -> float | None:
    if not _FLOAT_RE.fullmatch(s):
        return None
    return float(s)


class ColumnType(enum.Enum):
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    NULL = "null"

    def __str__(self) -> str:
        return self.value

    def is_string(self) -> bool:
        return self is ColumnType.STRING

    def is_number(self) -> bool:
        return self in (ColumnType.INT, ColumnType.FLOAT)

    def updated(self, f: str) -> ColumnType:
        """The type after also seeing the non-null field ``f``."""
        if self is ColumnType.NULL or self is ColumnType.INT:
            if _parse_i64(f) is not None:
                return ColumnType.INT
            if _parse_f64(f) is not None:
                return ColumnType.FLOAT
            return ColumnType.STRING
        if self is ColumnType.FLOAT:
            return ColumnType.FLOAT if _parse_f64(f) is not None else ColumnType.STRING
        return self


@dataclass
class CType:
    """The guessed type of one column and its longest field in bytes."""

    col_index: int
    col_type: ColumnType
    max_length: int

    def excel_col_width(self) -> float:
        return min(max(float(self.max_length), 6.0), 60.0)


def _read_text_lines(path: str | os.PathLike[str], skip: int, take: int) -> list[str]:
    lines = []
    with open(path, "rb") as f:
        for raw in itertools.islice(f, skip, skip + take):
            if raw.endswith(b"\n"):
                raw = raw[:-1]
                if raw.endswith(b"\r"):
                    raw = raw[:-1]
            try:
                lines.append(raw.decode("utf-8"))
            except UnicodeDecodeError:
                continue
    return lines


def _col_type_at(n: int, rows: Sequence[Sequence[str]]) -> ColumnType:
    ctype = ColumnType.NULL
    for row in rows:
        if ctype.is_string():
            break
        f = row[n]
        if is_null(f):
            continue
        ctype = ctype.updated(f)
    return ctype


def _max_length_at(n: int, rows: Sequence[Sequence[str]]) -> int:
    return max((len(row[n].encode("utf-8")) for row in rows), default=0)


class ColumnTypes:
    """The guessed types of a set of columns."""

    def __init__(self, types: Iterable[CType] = ()) -> None:
        self._types = list(types)

    def __iter__(self) -> Iterator[CType]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    @classmethod
    def _guess(cls, rows: Sequence[Sequence[str]], cols: Columns) -> ColumnTypes:
        indices = cols.col_vec_or_length_of(len(rows[0]))
        if indices:
            top = max(indices)
            if any(len(row) <= top for row in rows):
                raise CliError(f"column {top} does not exist in every row.")
        return cls(
            CType(c, _col_type_at(c, rows), _max_length_at(c, rows)) for c in indices
        )

    @classmethod
    def guess_from_csv(
        cls,
        path: str | os.PathLike[str],
        sep: str,
        quote: str,
        no_header: bool,
        cols: Columns,
    ) -> ColumnTypes | None:
        """Guess from up to 5000 data lines of a file; None when it has no data."""
        lines = _read_text_lines(path, 0 if no_header else 1, _GUESS_ROWS)
        if not lines:
            return None
        rows = [list(split_row(line, sep, quote)) for line in lines]
        return cls._guess(rows, cols)

    @classmethod
    def guess_from_io(cls, rows: Sequence[Sequence[str]], cols: Columns) -> ColumnTypes:
        """Guess from up to the first 5000 of already split rows."""
        sample = list(rows[:_GUESS_ROWS])
        if not sample:
            raise CliError("no rows to guess column types from.")
        return cls._guess(sample, cols)