"""Line-oriented output to a file or to standard output."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Sequence
from typing import BinaryIO

from .progress import COMMA, TERMINATOR


def _to_bytes(value: str | bytes) -> bytes:
    return value if isinstance(value, bytes) else value.encode("utf-8")


class Writer:
    """Writes rows, fields and raw bytes to a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._owns_stream = False

    @classmethod
    def _owning(cls, stream: BinaryIO) -> Writer:
        wtr = cls(stream)
        wtr._owns_stream = True
        return wtr

    @classmethod
    def create(cls, path: str | os.PathLike[str]) -> Writer:
        """Write to a new (or truncated) file."""
        return cls._owning(open(path, "wb"))

    @classmethod
    def file_or_stdout(cls, export: bool, path: str | os.PathLike[str]) -> Writer:
        """Write to ``path`` when exporting, otherwise to standard output."""
        return cls.create(path) if export else cls.stdout()

    @classmethod
    def stdout(cls) -> Writer:
        return cls(sys.stdout.buffer)

    @classmethod
    def append_to(cls, path: str | os.PathLike[str]) -> Writer:
        """Append to a file, creating it when it does not exist."""
        return cls._owning(open(path, "ab"))

    def write_bytes(self, data: bytes) -> None:
        self._stream.write(data)

    def write_header(self, row: str) -> None:
        """Write the header line, unless it is empty."""
        if row:
            self.write_str(row)

    def write_str(self, row: str) -> None:
        """Write one line followed by a newline."""
        self._stream.write(_to_bytes(row))
        self._stream.write(TERMINATOR)

    def write_strings(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write_str(line)

    def write_fields(self, line: Sequence[str]) -> None:
        """Write fields joined by commas; an empty row writes nothing."""
        if not line:
            return
        self._stream.write(COMMA.join(_to_bytes(f) for f in line) + TERMINATOR)

    def write_selected_fields(
        self,
        line: Sequence[str],
        cols: Sequence[int],
        sep: str | bytes | None = None,
    ) -> None:
        """Write the fields at ``cols`` joined by ``sep`` (a comma by default)."""
        if not cols:
            return
        separator = COMMA if sep is None else _to_bytes(sep)
        self._stream.write(
            separator.join(_to_bytes(line[i]) for i in cols) + TERMINATOR
        )

    def write_fields_of_lines(self, lines: Iterable[Sequence[str]]) -> None:
        for line in lines:
            self.write_fields(line)

    def close(self) -> None:
        """Flush, and close the stream when this writer opened it."""
        self._stream.flush()
        if self._owns_stream:
            self._stream.close()

    def __enter__(self) -> Writer:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()