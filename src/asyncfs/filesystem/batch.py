"""Concurrent reads of many files into in-memory records."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Iterable
from dataclasses import dataclass

from asyncfs.config.settings import DEFAULT_ENCODING
from asyncfs.platform.logging import logger

from .primitives import StrPath, read_file


@dataclass(frozen=True)
class FileRecord:
    """A file path and the content read from it."""

    path: str
    content: str | bytes


@dataclass(frozen=True)
class ReadOptions:
    """How batch reads decode content; ``encoding=None`` keeps raw bytes."""

    encoding: str | None = DEFAULT_ENCODING
    errors: str = "strict"


async def _read_record(path: StrPath, options: ReadOptions) -> FileRecord:
    content = await read_file(path, encoding=options.encoding, errors=options.errors)
    return FileRecord(path=os.fspath(path), content=content)


async def files_from_paths(
    paths: Iterable[StrPath], options: ReadOptions | None = None
) -> list[FileRecord]:
    """Read every path concurrently and return records in input order.

    The first failing read propagates unchanged; no partial result is
    returned.
    """
    read_options = options or ReadOptions()
    path_list = list(paths)
    records = await asyncio.gather(*(_read_record(path, read_options) for path in path_list))
    logger.debug(
        "Read %d files",
        len(records),
        extra={"fs_event": "fs.batch.read", "count": len(records)},
    )
    return list(records)


__all__ = ["FileRecord", "ReadOptions", "files_from_paths"]
