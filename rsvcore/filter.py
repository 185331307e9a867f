"""Row filters such as ``0=a,b``, ``1N>10&2!=`` or ``0>=@1 + 1``."""

from __future__ import annotations

import enum
import os
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .math_expr import CompiledExpr, parse_expr
from .row_split import split_row
from .util import CliError

_SYNTAX_ERROR = (
    "Column syntax error: can be something like 0 (first column), -1 (last column)."
)
_OP_SPLIT = re.compile("!=|>=|<=|=|>|<")
_USIZE = re.compile(r"\+?[0-9]+")
_I32 = re.compile(r"[+-]?[0-9]+")
_MATH_CHARS = frozenset("+*/%^(@c")


class _Op(enum.Enum):
    EQUAL = "="
    NOT_EQUAL = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="

    def evaluate(self, a: float, b: float) -> bool:
        if self is _Op.EQUAL:
            return a == b
        if self is _Op.NOT_EQUAL:
            return a != b
        if self is _Op.GT:
            return a > b
        if self is _Op.GE:
            return a >= b
        if self is _Op.LT:
            return a < b
        return a <= b


# the order matters: two-character operators first
_OP_ORDER = (_Op.NOT_EQUAL, _Op.GE, _Op.LE, _Op.EQUAL, _Op.GT, _Op.LT)


def _detect_op(text: str) -> _Op:
    for op in _OP_ORDER:
        if op.value in text:
            return op
    return _Op.NOT_EQUAL


def _strict_float(s: str) -> float | None:
    if not s or not s.isascii() or "_" in s or s != s.strip():
        return None
    try:
        return float(s)
    except ValueError:
        return None


def parse_f64(s: str) -> float:
    """Parse a number, raising CliError when it is not one."""
    value = _strict_float(s)
    if value is None:
        raise CliError(f"<{s}> is not a valid number, run <rsv select -h> for help.")
    return value


def _parse_f64_list(s: str) -> list[float]:
    values = []
    for part in s.split(","):
        value = _strict_float(part)
        if value is None:
            raise CliError(f"<{part}> is not a number, run <rsv select -h> for help.")
        values.append(value)
    return values


@dataclass
class _FilterItem:
    col: int
    is_numeric: bool
    op: _Op
    f64_value: float = 0.0
    str_value: str = ""
    f64_values: list[float] = field(default_factory=list)
    str_values: list[str] = field(default_factory=list)
    expr: CompiledExpr | None = None

    def _expr_value(self, row: Sequence[str]) -> float:
        expr = self.expr
        top = expr.max_column()
        if top == 0 and not expr.contains_column(0):
            return expr.evaluate(None)
        values = [
            parse_f64(row[i]) if expr.contains_column(i) else 0.0
            for i in range(top + 1)
        ]
        return expr.evaluate(values)

    def matches(self, row: Sequence[str]) -> bool:
        value = row[self.col]
        if self.expr is not None:
            v = _strict_float(value)
            if v is None:
                return False
            return self.op.evaluate(v, self._expr_value(row))
        if self.is_numeric:
            v = _strict_float(value)
            if self.op is _Op.EQUAL:
                return v is not None and v in self.f64_values
            if self.op is _Op.NOT_EQUAL:
                return v is None or v not in self.f64_values
            return v is not None and self.op.evaluate(v, self.f64_value)
        if self.op is _Op.EQUAL:
            return value in self.str_values
        if self.op is _Op.NOT_EQUAL:
            return value not in self.str_values
        if self.op is _Op.GE:
            return value >= self.str_value
        if self.op is _Op.GT:
            return value > self.str_value
        if self.op is _Op.LE:
            return value <= self.str_value
        return value < self.str_value


class Filter:
    """A conjunction of column conditions joined by ``&``."""

    def __init__(self, raw: str) -> None:
        self._raw = raw
        self._total: int | None = None
        self._path: Path | None = None
        self._sep = ","
        self._quote = '"'
        self._filters: list[_FilterItem] = []
        self.parsed = False

    def is_empty(self) -> bool:
        return not self._filters

    def total_col(self, total: int) -> Filter:
        """Set the number of columns, used to resolve negative indices."""
        self._total = total
        return self

    def total_col_of(self, path: str | os.PathLike[str], sep: str, quote: str) -> Filter:
        """Take the number of columns from the first line of ``path`` when needed."""
        self._path = Path(path)
        self._sep = sep
        self._quote = quote
        return self

    def _true_col(self, col: str) -> int:
        if not col.startswith("-"):
            if not _USIZE.fullmatch(col):
                raise CliError(_SYNTAX_ERROR)
            return int(col)
        if self._total is None:
            if self._path is None:
                raise CliError("the number of columns is unknown.")
            with open(self._path, encoding="utf-8", newline="") as f:
                first_line = f.readline()
            self._total = sum(1 for _ in split_row(first_line, self._sep, self._quote))
        if not _I32.fullmatch(col) or not -(2**31) <= int(col) < 2**31:
            raise CliError(_SYNTAX_ERROR)
        i = self._total + int(col)
        if i < 0:
            raise CliError(f"Column {col} does not exist.")
        return i

    def parse(self) -> Filter:
        """Parse the raw filter text."""
        self.parsed = True
        if not self._raw:
            return self
        for one in self._raw.split("&"):
            if one:
                self._filters.append(self._parse_one(one))
        return self

    def _parse_one(self, one: str) -> _FilterItem:
        parts = _OP_SPLIT.split(one)
        if len(parts) != 2:
            raise CliError("Filter syntax is wrong, run <rsv select -h> for help.")
        col_text, rhs = parts

        is_numeric = col_text.endswith(("n", "N"))
        if is_numeric:
            col_text = col_text[:-1]
        col = self._true_col(col_text)

        # @1 or c1 refers to a column
        is_math_expr = any(c in _MATH_CHARS for c in rhs) or rhs.rfind("-") > 0
        op = _detect_op(one)
        item = _FilterItem(col=col, is_numeric=is_numeric, op=op)

        if is_math_expr:
            item.expr = parse_expr(rhs)
        elif is_numeric:
            if op in (_Op.EQUAL, _Op.NOT_EQUAL):
                item.f64_values = _parse_f64_list(rhs)
            else:
                item.f64_value = parse_f64(rhs)
        elif op in (_Op.EQUAL, _Op.NOT_EQUAL):
            item.str_values = rhs.split(",")
        else:
            item.str_value = rhs
        return item

    def record_is_valid(self, row: Sequence[str]) -> bool:
        """Tell whether a split row passes every condition."""
        return all(item.matches(row) for item in self._filters)

    def record_valid_map(
        self, row: str, sep: str, quote: str
    ) -> tuple[str, list[str] | None] | None:
        """Return the row and its fields when it passes, or None when it does not.

        With no conditions the row is returned without being split.
        """
        if self.is_empty():
            return row, None
        fields = list(split_row(row, sep, quote))
        if self.record_is_valid(fields):
            return row, fields
        return None