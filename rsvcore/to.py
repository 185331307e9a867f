"""Saving data to a named file or to a file of a given format."""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path
from typing import BinaryIO

from .filename import new_file

_SUFFIXES = frozenset({"csv", "txt", "tsv", "xlsx", "xls"})


def is_file_suffix(f: str) -> bool:
    """Tell whether ``f`` is a bare format name such as ``csv``."""
    return f in _SUFFIXES


def is_valid_plain_text(f: str) -> bool:
    return f.endswith(("csv", "txt", "tsv"))


def is_valid_excel(f: str) -> bool:
    return f.endswith(("xlsx", "xls"))


def out_filename(out: str) -> Path:
    """The output path in the working directory; a bare format becomes ``export.<fmt>``."""
    name = f"export.{out}" if is_file_suffix(out) else out
    return new_file(name)


def csv_or_io_to_csv(
    path: str | os.PathLike[str] | None,
    out: str,
    stream: BinaryIO | None = None,
) -> Path:
    """Copy ``path``, or the input stream when no path is given, to the output file."""
    target = out_filename(out)
    with open(target, "wb") as dst:
        if path is not None:
            with open(path, "rb") as src:
                shutil.copyfileobj(src, dst)
        else:
            src = stream if stream is not None else sys.stdin.buffer
            shutil.copyfileobj(src, dst)
    print(f"Saved to file: {target}")
    return target