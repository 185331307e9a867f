"""Reading text data line by line, in chunks, or from standard input."""

from __future__ import annotations

import itertools
import os
import sys
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TextIO


def _strip_eol(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


def _strip_text_eol(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


@dataclass
class Task:
    """A chunk of lines, their size in bytes without line endings, and its 1-based number."""

    lines: list[str] = field(default_factory=list)
    bytes: int = 0
    chunk: int = 1


class ChunkReader:
    """Reads a UTF-8 file one line at a time, without line endings."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._file = open(path, "rb")

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        raw = self._file.readline()
        if not raw:
            raise StopIteration
        return _strip_eol(raw).decode("utf-8")

    def chunks(self, line_buffer_n: int) -> Iterator[Task]:
        """Yield the remaining lines in chunks of ``line_buffer_n`` lines."""
        size = max(line_buffer_n, 1)
        for number in itertools.count(1):
            lines = list(itertools.islice(self, size))
            if not lines:
                return
            yield Task(
                lines=lines,
                bytes=sum(len(line.encode("utf-8")) for line in lines),
                chunk=number,
            )
            if len(lines) < size:
                return

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> ChunkReader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class IoReader:
    """Reads lines from standard input, optionally only the first records."""

    def __init__(
        self,
        no_header: bool = False,
        top_n: int | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.no_header = no_header
        self.top_n = top_n
        self._stream = stream

    def lines(self) -> list[str]:
        """All lines, or the header plus ``top_n`` records when a limit is set."""
        stream = self._stream if self._stream is not None else sys.stdin
        source: Iterator[str] = iter(stream)
        if self.top_n is not None:
            take = self.top_n + 1 - int(self.no_header)
            source = itertools.islice(source, max(take, 0))
        return [_strip_text_eol(line) for line in source]