"""Case-insensitive regular expression matching for searches."""

from __future__ import annotations

import re

from .util import CliError


class Re:
    """A compiled case-insensitive pattern."""

    def __init__(self, pattern: str) -> None:
        try:
            self._re = re.compile(pattern, re.IGNORECASE)
        except re.error as exc:
            raise CliError(f"invalid regex <{pattern}>: {exc}") from exc

    def is_match(self, v: str) -> bool:
        """Tell whether the pattern matches anywhere in ``v``."""
        return self._re.search(v) is not None