"""Awaitable filesystem helpers and settle-all combinators."""

from asyncfs.config.config import config as _config
from asyncfs.platform.logging import setup_logger

from .awaitables import Thenable, is_promise, promisify
from .errors import AsyncFsError, DirectoryListingError, is_missing_ancestor
from .filesystem import (
    FileRecord,
    ReadOptions,
    files_from_paths,
    find_files,
    mkdir,
    mkdir_rec,
    read_file,
    symlink,
    write_file,
    write_file_rec,
)
from .settle import Settlement, SettlementStatus, all_complete

if _config.log_file is not None:
    _ = setup_logger(log_file=_config.log_file)

__all__ = [
    "AsyncFsError",
    "DirectoryListingError",
    "FileRecord",
    "ReadOptions",
    "Settlement",
    "SettlementStatus",
    "Thenable",
    "all_complete",
    "files_from_paths",
    "find_files",
    "is_missing_ancestor",
    "is_promise",
    "mkdir",
    "mkdir_rec",
    "promisify",
    "read_file",
    "setup_logger",
    "symlink",
    "write_file",
    "write_file_rec",
]
