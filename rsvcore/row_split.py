"""Split one CSV row into fields.

Supports quoted fields, separators inside quoted fields, quotes escaped by a
backslash and quotes escaped by doubling. A quoted field keeps its quotes only
when it contains a separator.
"""

from __future__ import annotations

from collections.abc import Iterator


def _field(row: str, start: int, end: int, quoted: bool, has_sep: bool) -> str:
    shift = int(quoted) - int(has_sep)
    return row[start + shift : end - shift]


def split_row(row: str, sep: str = ",", quote: str = '"') -> Iterator[str]:
    """Yield the fields of ``row`` split on ``sep``, honouring ``quote``."""
    n = len(row)
    start = 0
    quoted = False
    has_sep = False
    in_quoted = False
    at_start = True
    i = 0
    while i < n:
        c = row[i]
        if c == "\\":
            # the escaped character is taken as is
            i += 1
        elif c == sep:
            if in_quoted:
                has_sep = True
            else:
                yield _field(row, start, i, quoted, has_sep)
                start = i + 1
                quoted = has_sep = in_quoted = False
                at_start = True
                i += 1
                continue
        elif c == quote:
            if at_start:
                quoted = True
                in_quoted = True
            elif i + 1 >= n or row[i + 1] == sep:
                in_quoted = False
            else:
                # doubled quote inside a field
                i += 1
        at_start = False
        i += 1
    yield _field(row, start, n, quoted, has_sep)