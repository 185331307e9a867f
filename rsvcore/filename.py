"""Helpers that build output file paths."""

from __future__ import annotations

import os
from pathlib import Path

_BAD_FILENAME_CHARACTERS = frozenset('<>:\\/"?*')


def new_path(path: str | os.PathLike[str], suffix: str) -> Path:
    """Return a sibling path whose stem has ``suffix`` appended, keeping the extension."""
    path = Path(path)
    p = path.with_name(f"{path.stem}{suffix}")
    if path.suffix:
        return p.with_suffix(path.suffix)
    return p


def new_file(name: str) -> Path:
    """Return ``name`` inside the current working directory."""
    return Path.cwd() / name


def str_to_filename(s: str) -> str:
    """Drop characters that are not allowed in file names."""
    return "".join(c for c in s if c not in _BAD_FILENAME_CHARACTERS)


def dir_file(directory: str | os.PathLike[str], name: str) -> Path:
    """Return ``name`` inside ``directory``."""
    return Path(directory) / name


def full_path(f: str | os.PathLike[str]) -> Path:
    """Resolve ``f`` against the current working directory."""
    return Path.cwd() / Path(f)