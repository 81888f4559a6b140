"""
Summary: Directory and file creation that fills in missing ancestors.
Why: Recover from the missing-ancestor failure only, leaving every other error to the caller.
"""

from __future__ import annotations

import os

import anyio

from asyncfs.errors import is_missing_ancestor
from asyncfs.platform.logging import logger

from .primitives import StrPath, mkdir, write_file


async def mkdir_rec(path: StrPath, mode: int = 0o777) -> None:
    """Create ``path`` and every missing ancestor directory.

    An existing directory at ``path`` counts as success; an existing
    non-directory re-raises the original ``FileExistsError``. Errors other
    than a missing ancestor propagate unchanged.
    """
    try:
        await mkdir(path, mode)
    except FileExistsError:
        if not await anyio.Path(path).is_dir():
            raise
    except OSError as exc:
        if not is_missing_ancestor(exc):
            raise
        parent = os.path.dirname(os.path.normpath(path))
        if not parent or parent == os.path.normpath(path):
            raise
        await mkdir_rec(parent, mode)
        logger.debug(
            "Created missing ancestors of %s",
            path,
            extra={"fs_event": "fs.mkdir.ancestor", "path": os.fspath(parent)},
        )
        try:
            await mkdir(path, mode)
        except FileExistsError:
            if not await anyio.Path(path).is_dir():
                raise


async def write_file_rec(
    path: StrPath, content: str | bytes, *, encoding: str | None = None
) -> None:
    """Write a file, creating missing ancestor directories on demand.

    Only a missing-ancestor failure triggers directory creation, followed by
    exactly one retry of the write.
    """
    try:
        await write_file(path, content, encoding=encoding)
    except OSError as exc:
        if not is_missing_ancestor(exc):
            raise
        parent = os.path.dirname(os.path.normpath(path))
        if not parent:
            raise
        logger.debug(
            "Retrying write of %s after creating ancestors",
            path,
            extra={"fs_event": "fs.write.retry", "path": os.fspath(path)},
        )
        await mkdir_rec(parent)
        await write_file(path, content, encoding=encoding)


__all__ = ["mkdir_rec", "write_file_rec"]
