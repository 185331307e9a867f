"""Small shared helpers: null detection, separators, timestamps and error exit."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime

_NULL_VALUES = frozenset({"", "NA", "Na", "na", "NULL", "Null", "null"})


class CliError(Exception):
    """An error reported to the user of a command."""


def datetime_str() -> str:
    """Return the current local time as YYYYmmddHHMMSS."""
    return datetime.now().strftime("%Y%m%d%H%M%S")


def is_null(s: str) -> bool:
    """Tell whether a field counts as a missing value."""
    return s in _NULL_VALUES


def get_valid_sep(sep: str) -> str:
    """Turn a user-supplied separator into a single character."""
    cleaned = sep.replace('"', "").replace("'", "")
    if cleaned in ("\\t", "t"):
        return "\t"
    if cleaned == ",":
        return ","
    if len(cleaned.encode("utf-8")) == 1:
        return cleaned
    raise CliError(f"cannot parse separator <{sep}>.")


def print_frequency_table(names: Iterable[str], freq: Iterable[tuple[str, int]]) -> None:
    """Print a frequency table as CSV, stopping quietly if the pipe closes."""
    out = sys.stdout
    try:
        out.write(",".join(names) + "\n")
        for key, n in freq:
            out.write(f"{key},{n}\n")
        out.flush()
    except BrokenPipeError:
        return


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Report any error raised in the block to stderr and exit with status 1."""
    try:
        yield
    except Exception as exc:  # noqa: BLE001 - every error ends the command
        sys.stderr.write(f"Error: {exc}\n")
        sys.stderr.flush()
        raise SystemExit(1) from exc