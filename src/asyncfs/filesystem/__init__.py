"""Awaitable filesystem helpers.

Where: asyncfs.filesystem
What: Re-export primitives, recursive creation, listing and batch reads.
Why: Give callers one import path for every filesystem coroutine.
"""

from .batch import FileRecord, ReadOptions, files_from_paths
from .listing import find_files
from .primitives import mkdir, read_file, symlink, write_file
from .recursive import mkdir_rec, write_file_rec

__all__ = [
    "FileRecord",
    "ReadOptions",
    "files_from_paths",
    "find_files",
    "mkdir",
    "mkdir_rec",
    "read_file",
    "symlink",
    "write_file",
    "write_file_rec",
]
