"""Where: src/asyncfs/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to the filesystem helpers without file I/O.
Assumptions: - Config defaults remain compatible with current runtime expectations.
Trade-offs: - Invalid values silently fall back to defaults instead of failing import.
"""

from __future__ import annotations

import codecs

from asyncfs.config.config import config as app_config

# Text I/O --------------------------------------------------------------------

DEFAULT_ENCODING_FALLBACK: str = "utf-8"


def _valid_encoding(name: object) -> bool:
    if not isinstance(name, str) or not name:
        return False
    try:
        _ = codecs.lookup(name)
    except LookupError:
        return False
    return True


_encoding = getattr(app_config, "default_encoding", DEFAULT_ENCODING_FALLBACK)
DEFAULT_ENCODING: str = _encoding if _valid_encoding(_encoding) else DEFAULT_ENCODING_FALLBACK


# Directory listing -----------------------------------------------------------

LISTING_BACKENDS: tuple[str, ...] = ("walk", "find")

_backend = getattr(app_config, "listing_backend", LISTING_BACKENDS[0])
LISTING_BACKEND: str = _backend if _backend in LISTING_BACKENDS else LISTING_BACKENDS[0]

FIND_EXECUTABLE: str = app_config.find_executable or "find"

STRICT_LISTING: bool = bool(getattr(app_config, "strict_listing", False))


__all__ = [
    "DEFAULT_ENCODING",
    "FIND_EXECUTABLE",
    "LISTING_BACKEND",
    "LISTING_BACKENDS",
    "STRICT_LISTING",
]
