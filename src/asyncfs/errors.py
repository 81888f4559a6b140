"""
Summary: Library error types and filesystem error classification.
Why: Let callers tell recoverable missing-ancestor failures from everything else.
"""

from __future__ import annotations

import errno
import os


class AsyncFsError(Exception):
    """Base error for the library."""


class DirectoryListingError(AsyncFsError):
    """A directory listing could not be produced.

    Raised only in strict listing mode; the underlying cause is chained via
    ``__cause__`` when one exists.
    """

    def __init__(self, base_path: str | os.PathLike[str], message: str) -> None:
        super().__init__(f"{message}: {os.fspath(base_path)}")
        self.base_path = os.fspath(base_path)


def is_missing_ancestor(exc: BaseException) -> bool:
    """Return True when ``exc`` reports a missing ancestor directory (ENOENT)."""

    return isinstance(exc, OSError) and exc.errno == errno.ENOENT


__all__ = ["AsyncFsError", "DirectoryListingError", "is_missing_ancestor"]
