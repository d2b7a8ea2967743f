"""kankyo exception hierarchy.

Keep this module small and dependency-free: it is imported by every other
module in the package and by tests.
"""

from __future__ import annotations


class KankyoError(Exception):
    """Base exception for all kankyo errors."""


class KankyoIOError(KankyoError):
    """Raised when reading a `.env` source fails.

    The original `OSError` (or `UnicodeDecodeError` for undecodable input) is
    chained as `__cause__` and kept on `source`.
    """

    def __init__(self, source: BaseException) -> None:
        super().__init__(str(source) or type(source).__name__)
        self.source = source


class KankyoConfigError(KankyoError):
    """Raised for an invalid `[tool.kankyo]` configuration table."""
