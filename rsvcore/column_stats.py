"""Per-column statistics: min, max, mean, unique and null counts."""

from __future__ import annotations

import json
import math
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .column_type import ColumnType, CType, _parse_f64, _parse_i64
from .row_split import split_row
from .table import _render_sharp
from .util import is_null

_F64_MAX = sys.float_info.max


def _fmt(x: float, precision: int) -> str:
    if math.isnan(x):
        return "NaN"
    return f"{x:.{precision}f}"


@dataclass
class CStat:
    """Running statistics of one column."""

    col_index: int
    col_type: ColumnType
    name: str
    min: float = _F64_MAX
    max: float = -_F64_MAX
    min_string: str = ""
    max_string: str = ""
    mean: float = 0.0
    unique: int = 0
    null: int = 0
    total: float = 0.0
    unique_values: set[str] = field(default_factory=set)

    def parse(self, f: str) -> None:
        """Account for one field, widening the column type when needed."""
        if is_null(f):
            self.null += 1
            return
        if self.col_type is ColumnType.INT:
            iv = _parse_i64(f)
            if iv is not None:
                self._update_number(float(iv))
            else:
                fv = _parse_f64(f)
                if fv is not None:
                    self.col_type = ColumnType.FLOAT
                    self._update_number(fv)
                else:
                    self.col_type = ColumnType.STRING
                    self._update_string(f)
        elif self.col_type is ColumnType.FLOAT:
            fv = _parse_f64(f)
            if fv is not None:
                self._update_number(fv)
            else:
                self.col_type = ColumnType.STRING
                self._update_string(f)
        elif self.col_type is ColumnType.STRING:
            self._update_string(f)
        # unique counts are not kept for float columns
        if self.col_type is not ColumnType.FLOAT:
            self.unique_values.add(f)

    def _update_number(self, v: float) -> None:
        if v > self.max:
            self.max = v
        if v < self.min:
            self.min = v
        self.total += v

    def _update_string(self, v: str) -> None:
        if not self.min_string or v < self.min_string:
            self.min_string = v
        if v > self.max_string:
            self.max_string = v

    def merge(self, other: CStat) -> None:
        """Fold the statistics of the same column from another batch into this one."""
        if self.col_type is not other.col_type:
            self.col_type = other.col_type
        if other.min < self.min:
            self.min = other.min
        if other.max > self.max:
            self.max = other.max
        if not self.min_string or other.min_string < self.min_string:
            self.min_string = other.min_string
        if other.max_string > self.max_string:
            self.max_string = other.max_string
        self.null += other.null
        self.total += other.total
        self.unique_values |= other.unique_values

    def mean_fmt(self) -> str:
        return "-" if self.col_type.is_string() else _fmt(self.mean, 2)

    def min_fmt(self) -> str:
        if self.col_type.is_string():
            return self.min_string
        v = 0.0 if self.min == _F64_MAX else self.min
        return _fmt(v, 0 if self.col_type is ColumnType.INT else 2)

    def max_fmt(self) -> str:
        if self.col_type.is_string():
            return self.max_string
        v = 0.0 if self.max == -_F64_MAX else self.max
        return _fmt(v, 0 if self.col_type is ColumnType.INT else 2)

    def unique_fmt(self) -> str:
        return "-" if self.col_type is ColumnType.FLOAT else str(self.unique)


class ColumnStats:
    """Statistics for a set of columns, gathered row by row."""

    def __init__(self, col_types: Iterable[CType], col_names: Sequence[str]) -> None:
        self.max_col = 0
        self.cols: list[int] = []
        self.stat: list[CStat] = []
        self.rows = 0
        for c in col_types:
            self._push(c.col_index, c.col_type, col_names[c.col_index])

    def _push(self, col_index: int, col_type: ColumnType, name: str) -> None:
        self.cols.append(col_index)
        self.stat.append(CStat(col_index, col_type, name))
        if col_index > self.max_col:
            self.max_col = col_index

    def parse_line_by_fields(self, fields: Sequence[str]) -> None:
        """Account for one split row; rows too short are reported and skipped."""
        if self.max_col >= len(fields):
            print(f"[info] ignore a bad line: {json.dumps(list(fields), ensure_ascii=False)}")
            return
        for i, c in zip(self.cols, self.stat):
            c.parse(fields[i])
        self.rows += 1

    def parse_line(self, line: str, sep: str, quote: str) -> None:
        self.parse_line_by_fields(list(split_row(line, sep, quote)))

    def cal_unique_and_mean(self) -> None:
        """Finish the unique counts and means once all rows are in."""
        for s in self.stat:
            s.unique = len(s.unique_values)
            if s.col_type.is_number():
                n = self.rows - s.null
                if n != 0:
                    s.mean = s.total / n

    def merge(self, other: ColumnStats) -> None:
        self.rows += other.rows
        for mine, theirs in zip(self.stat, other.stat):
            mine.merge(theirs)

    def copy(self) -> ColumnStats:
        """An empty set of statistics over the same columns and types."""
        new = ColumnStats((), ())
        new.max_col = self.max_col
        for c in self.stat:
            new._push(c.col_index, c.col_type, c.name)
        return new

    def render(self) -> str:
        rows = [["col", "type", "min", "max", "mean", "unique", "null"]]
        rows.extend(
            [
                c.name,
                str(c.col_type),
                c.min_fmt(),
                c.max_fmt(),
                c.mean_fmt(),
                c.unique_fmt(),
                str(c.null),
            ]
            for c in self.stat
        )
        return _render_sharp(rows)

    def __str__(self) -> str:
        return self.render()

    def print(self) -> None:
        print(self.render())