"""Awaitable counterparts of the basic platform filesystem calls.

Each function takes the same parameters as its blocking equivalent and
raises the platform ``OSError`` unchanged.
"""

from __future__ import annotations

import os

import anyio

from asyncfs.awaitables import promisify
from asyncfs.config.settings import DEFAULT_ENCODING

StrPath = str | os.PathLike[str]

_mkdir = promisify(os.mkdir)
_symlink = promisify(os.symlink)


async def read_file(
    path: StrPath, *, encoding: str | None = None, errors: str = "strict"
) -> bytes | str:
    """Read a whole file; bytes when ``encoding`` is None, text otherwise.

    Text is decoded from the raw bytes, so line endings are kept as written.
    """

    raw = await anyio.Path(path).read_bytes()
    if encoding is None:
        return raw
    return raw.decode(encoding, errors)


async def write_file(
    path: StrPath,
    content: str | bytes,
    *,
    encoding: str | None = None,
    errors: str = "strict",
) -> None:
    """Write ``content`` to ``path``, replacing any existing file.

    Text is encoded with ``encoding`` or the configured default encoding.
    """

    target = anyio.Path(path)
    if isinstance(content, (bytes, bytearray, memoryview)):
        _ = await target.write_bytes(bytes(content))
        return
    _ = await target.write_bytes(content.encode(encoding or DEFAULT_ENCODING, errors))


async def mkdir(path: StrPath, mode: int = 0o777) -> None:
    """Create a single directory level, like ``os.mkdir``."""

    await _mkdir(path, mode)


async def symlink(target: StrPath, link_path: StrPath) -> None:
    """Create ``link_path`` pointing at ``target``, like ``os.symlink``."""

    await _symlink(target, link_path)


__all__ = ["StrPath", "mkdir", "read_file", "symlink", "write_file"]
