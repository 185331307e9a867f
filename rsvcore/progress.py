"""Progress reporting for chunked processing, and size constants."""

from __future__ import annotations

import sys
import time
from typing import TextIO

TERMINATOR = b"\n"
COMMA = b","

KB = 1024.0
MB = 1024.0 * 1024.0
GB = 1024.0 * MB

MB_SIZE = 1024 * 1024


def format_bytes(n: float) -> str:
    """Format a byte count in KB, MB or GB with two decimals."""
    n = float(n)
    if n < MB:
        return f"{n / KB:.2f}KB"
    if n < GB:
        return f"{n / MB:.2f}MB"
    return f"{n / GB:.2f}GB"


class Progress:
    """Counts chunks, bytes and lines, and prints a one-line status."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.chunks = 0
        self.bytes = 0
        self.lines = 0
        self.print_count = 0
        self._stream = stream if stream is not None else sys.stdout
        self._start_time = time.monotonic()

    def add_chunks(self, n: int) -> None:
        self.chunks += n

    def add_bytes(self, n: int) -> None:
        self.bytes += n

    def add_lines(self, n: int) -> None:
        self.lines += n

    def info(self) -> str:
        """The processed size, formatted."""
        return format_bytes(self.bytes)

    def elapsed_time_as_string(self) -> str:
        t = time.monotonic() - self._start_time
        if t < 60.0:
            return f"{int(t)} seconds"
        return f"{t / 60.0:.2f} minutes"

    def _emit(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()
        self.print_count += 1

    def print(self) -> None:
        """Rewrite the status line in place."""
        # trailing spaces wipe what a longer previous status left behind
        self._emit(
            f"\rchunk: {self.chunks}, total processed: {self.info()}, "
            f"elapsed time: {self.elapsed_time_as_string()}         "
        )

    def clear(self) -> None:
        """Blank the status line."""
        self._emit("\r" + " " * 60 + "\r")

    def print_elapsed_time(self) -> None:
        self._emit(f"elapsed time: {self.elapsed_time_as_string()}     \n")