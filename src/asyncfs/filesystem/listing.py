"""Where: src/asyncfs/filesystem/listing.py
What: Recursive listing of regular files under a base directory.
Why: Feed batch reads with every regular file beneath a tree, skipping links.
Assumptions: - The ``find`` backend splits on newlines, so file names containing
  newlines are only listed correctly by the ``walk`` backend.
Trade-offs: - Lenient mode reports a missing base directory as an empty listing and
  skips unreadable subdirectories with a warning;
  strict mode raises ``DirectoryListingError`` so callers can tell them apart.
"""

from __future__ import annotations

import asyncio
import os
import stat

import anyio.to_thread

from asyncfs.config.settings import (
    FIND_EXECUTABLE,
    LISTING_BACKEND,
    LISTING_BACKENDS,
    STRICT_LISTING,
)
from asyncfs.errors import DirectoryListingError
from asyncfs.platform.logging import logger

from .primitives import StrPath

_READ_CHUNK_SIZE = 64 * 1024


def _walk_regular_files(base: str) -> tuple[list[str], list[OSError]]:
    if not os.path.isdir(base):
        raise NotADirectoryError(f"Not a directory: {base}")

    files: list[str] = []
    errors: list[OSError] = []
    for root, _dirs, names in os.walk(base, onerror=errors.append, followlinks=False):
        for name in names:
            candidate = os.path.join(root, name)
            try:
                mode = os.lstat(candidate).st_mode
            except OSError:
                continue
            if stat.S_ISREG(mode):
                files.append(candidate)
    return files, errors


async def _list_with_walk(base: str, strict: bool) -> list[str]:
    files, errors = await anyio.to_thread.run_sync(_walk_regular_files, base)
    if errors:
        if strict:
            raise DirectoryListingError(
                base, f"{len(errors)} subdirectories could not be read"
            ) from errors[0]
        for error in errors:
            logger.warning(
                "Skipped unreadable directory while listing %s: %s",
                base,
                error,
                extra={
                    "fs_event": "fs.list.error",
                    "path": error.filename or base,
                    "base_path": base,
                    "error_message": error.strerror or str(error),
                },
            )
    return files


def _as_find_operand(base: str) -> str:
    # find parses a leading "-", "!" or "(" as part of its expression
    if os.path.isabs(base):
        return base
    return os.path.join(os.curdir, base)


async def _list_with_find(base: str, strict: bool) -> list[str]:
    if not await anyio.Path(base).is_dir():
        raise NotADirectoryError(f"Not a directory: {base}")

    process = await asyncio.create_subprocess_exec(
        FIND_EXECUTABLE,
        _as_find_operand(base),
        "-type",
        "f",
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    assert process.stdout is not None and process.stderr is not None

    async def _read_stdout() -> list[bytes]:
        chunks: list[bytes] = []
        while True:
            chunk = await process.stdout.read(_READ_CHUNK_SIZE)
            if not chunk:
                return chunks
            chunks.append(chunk)

    chunks, stderr = await asyncio.gather(_read_stdout(), process.stderr.read())
    return_code = await process.wait()

    output = b"".join(chunks).decode("utf-8", errors="surrogateescape")
    files = [line for line in output.split("\n") if line]

    if return_code != 0:
        message = stderr.decode("utf-8", errors="replace").strip()
        if strict:
            raise DirectoryListingError(
                base, f"{FIND_EXECUTABLE} exited with status {return_code}: {message}"
            )
        logger.warning(
            "%s exited with status %s while listing %s: %s",
            FIND_EXECUTABLE,
            return_code,
            base,
            message,
            extra={"fs_event": "fs.list.error", "path": base, "error_message": message},
        )
    return files


async def find_files(
    base_path: StrPath,
    *,
    backend: str | None = None,
    strict: bool | None = None,
    relative: bool = False,
) -> list[str]:
    """List every regular file under ``base_path``, recursively.

    Directories and symbolic links are excluded. Paths are normalized and
    sorted; by default each starts with ``base_path`` as given, matching
    ``find <base_path> -type f``. With ``relative=True`` they are relative to
    ``base_path`` instead.

    When the base directory is missing or the traversal cannot start, lenient
    mode (the default) logs a warning and returns an empty list, while
    ``strict=True`` raises ``DirectoryListingError`` chained to the cause.
    Unreadable subdirectories are logged and skipped in lenient mode and
    raise in strict mode, for both backends.

    Args:
        base_path: Directory to traverse.
        backend: ``"walk"`` (in-process) or ``"find"`` (external process).
            Defaults to the configured backend.
        strict: Raise instead of returning an empty list on failure.
            Defaults to the configured policy.
        relative: Return paths relative to ``base_path``.

    Returns:
        list[str]: Sorted, normalized file paths.
    """
    chosen = backend or LISTING_BACKEND
    if chosen not in LISTING_BACKENDS:
        raise ValueError(f"Unknown listing backend {chosen!r}; expected one of {LISTING_BACKENDS}")
    is_strict = STRICT_LISTING if strict is None else strict
    base = os.fspath(base_path)

    try:
        if chosen == "find":
            raw = await _list_with_find(base, is_strict)
        else:
            raw = await _list_with_walk(base, is_strict)
    except OSError as exc:
        if is_strict:
            raise DirectoryListingError(base, "Cannot list directory") from exc
        logger.warning(
            "Cannot list %s, returning no files: %s",
            base,
            exc,
            extra={"fs_event": "fs.list.error", "path": base, "error_message": str(exc)},
        )
        return []

    files = sorted(os.path.normpath(path) for path in raw)
    if relative:
        files = sorted(os.path.relpath(path, base) for path in files)

    logger.debug(
        "Listed %d files under %s",
        len(files),
        base,
        extra={"fs_event": "fs.list.complete", "path": base, "count": len(files)},
    )
    return files


__all__ = ["find_files"]
