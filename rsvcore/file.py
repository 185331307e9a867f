"""File helpers: row size estimation, column counting and frequency export."""

from __future__ import annotations

import math
import os
from collections.abc import Iterable, Sequence
from pathlib import Path

from .progress import MB_SIZE
from .row_split import split_row


def _strip_eol(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


def estimate_row_bytes(path: str | os.PathLike[str]) -> float:
    """Average bytes per line over up to 5001 lines after the header; NaN if none."""
    n = 0
    total = 0
    with open(path, "rb") as f:
        next(f, None)
        for raw in f:
            line = _strip_eol(raw)
            line.decode("utf-8")
            total += len(line) + 1
            n += 1
            if n > 5000:
                break
    if n == 0:
        return math.nan
    return total / n


def column_n(path: str | os.PathLike[str], sep: str, quote: str) -> int | None:
    """Number of fields in the first line, or None when there is no readable line."""
    with open(path, "rb") as f:
        raw = f.readline()
    if not raw:
        return None
    try:
        line = _strip_eol(raw).decode("utf-8")
    except UnicodeDecodeError:
        return None
    return sum(1 for _ in split_row(line, sep, quote))


def estimate_line_count_by_mb(path: str | os.PathLike[str], mb: int | None = None) -> int:
    """Lines that fit in ``mb`` megabytes (default 200); 100000 if the file is unreadable."""
    try:
        per_line = estimate_row_bytes(path)
    except OSError:
        return 100_000
    if math.isnan(per_line):
        return 0
    return int(((mb if mb is not None else 200) * MB_SIZE) / per_line)


def write_frequency_to_csv(
    path: str | os.PathLike[str],
    names: Sequence[str],
    freq: Iterable[tuple[str, int]],
) -> None:
    """Write a frequency table, with a header line when names are given."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        if names:
            f.write(",".join(names) + "\n")
        for key, value in freq:
            f.write(f"{key},{value}\n")


def is_excel(path: str | os.PathLike[str]) -> bool:
    return Path(path).suffix in (".xlsx", ".xls")