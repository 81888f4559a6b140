"""Tests for recursive file listing across both backends."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

import asyncfs.filesystem.listing as listing
from asyncfs.errors import DirectoryListingError
from asyncfs.filesystem import find_files

pytestmark = pytest.mark.asyncio

BACKENDS = [
    "walk",
    pytest.param(
        "find",
        marks=pytest.mark.skipif(shutil.which("find") is None, reason="find not installed"),
    ),
]


@pytest.mark.parametrize("backend", BACKENDS)
async def test_find_files_lists_regular_files_only(
    sample_root: Path, sample_contents: dict[str, str], backend: str
) -> None:
    """Regular files are listed; directories, links and empty paths are not."""

    files = await find_files(str(sample_root), backend=backend)

    expected = sorted(
        os.path.normpath(os.path.join(sample_root, relative))
        for relative in sample_contents
    )
    assert files == expected
    assert "" not in files
    assert str(sample_root / "sub") not in files
    assert str(sample_root / "link.txt") not in files
    assert not any("dir-link" in path for path in files)


@pytest.mark.parametrize("backend", BACKENDS)
async def test_find_files_relative_paths(
    sample_root: Path, sample_contents: dict[str, str], backend: str
) -> None:
    """relative=True strips the base directory from every result."""

    files = await find_files(sample_root, backend=backend, relative=True)

    assert files == sorted(os.path.normpath(relative) for relative in sample_contents)


@pytest.mark.parametrize("backend", BACKENDS)
async def test_find_files_normalizes_redundant_separators(
    sample_root: Path, backend: str
) -> None:
    """Doubled separators in the base path are collapsed in the output."""

    base = f"{sample_root}//"
    files = await find_files(base, backend=backend)

    assert os.path.join(str(sample_root), "top.txt") in files
    assert not any("//" in path for path in files)


@pytest.mark.parametrize("backend", BACKENDS)
async def test_find_files_missing_directory_returns_empty(tmp_path: Path, backend: str) -> None:
    """Lenient mode reports a missing base directory as no files."""

    assert await find_files(tmp_path / "absent", backend=backend, strict=False) == []


@pytest.mark.parametrize("backend", BACKENDS)
async def test_find_files_missing_directory_raises_in_strict_mode(
    tmp_path: Path, backend: str
) -> None:
    """Strict mode raises a listing error chained to the platform error."""

    missing = tmp_path / "absent"
    with pytest.raises(DirectoryListingError) as excinfo:
        _ = await find_files(missing, backend=backend, strict=True)

    assert excinfo.value.base_path == str(missing)
    assert isinstance(excinfo.value.__cause__, OSError)


async def test_find_files_swallows_traversal_start_failure(
    sample_root: Path, mocker: MockerFixture
) -> None:
    """A find executable that cannot start yields an empty listing."""

    _ = mocker.patch.object(listing, "FIND_EXECUTABLE", "definitely-not-a-find-binary")

    assert await find_files(sample_root, backend="find", strict=False) == []


async def test_find_files_strict_start_failure_keeps_cause(
    sample_root: Path, mocker: MockerFixture
) -> None:
    """Strict mode exposes the original FileNotFoundError as the cause."""

    _ = mocker.patch.object(listing, "FIND_EXECUTABLE", "definitely-not-a-find-binary")

    with pytest.raises(DirectoryListingError) as excinfo:
        _ = await find_files(sample_root, backend="find", strict=True)

    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


async def test_find_files_rejects_unknown_backend(tmp_path: Path) -> None:
    """Unknown backends fail loudly whatever the strictness."""

    with pytest.raises(ValueError, match="Unknown listing backend"):
        _ = await find_files(tmp_path, backend="ls", strict=False)


async def test_find_files_empty_directory(tmp_path: Path) -> None:
    """An existing empty directory lists nothing."""

    assert await find_files(tmp_path) == []


@pytest.mark.parametrize("backend", BACKENDS)
async def test_find_files_dash_named_base_stays_inside_base(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, backend: str
) -> None:
    """A relative base that looks like a find option is still treated as a path."""

    (tmp_path / "-print").mkdir()
    _ = (tmp_path / "-print" / "inside.txt").write_text("in", encoding="utf-8")
    _ = (tmp_path / "outside.txt").write_text("out", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    files = await find_files("-print", backend=backend)

    assert files == [os.path.join("-print", "inside.txt")]


def _walk_with_unreadable_subdirectory(top: str, onerror=None, followlinks: bool = False):
    yield top, ["locked"], ["visible.txt"]
    if onerror is not None:
        onerror(PermissionError(13, "Permission denied", os.path.join(top, "locked")))


async def test_find_files_walk_logs_unreadable_subdirectories(
    tmp_path: Path, mocker: MockerFixture, caplog: pytest.LogCaptureFixture
) -> None:
    """Lenient walks keep readable files and report the skipped directory."""

    _ = (tmp_path / "visible.txt").write_text("ok", encoding="utf-8")
    _ = mocker.patch.object(listing.os, "walk", side_effect=_walk_with_unreadable_subdirectory)

    with caplog.at_level(logging.WARNING, logger="asyncfs"):
        files = await find_files(tmp_path, backend="walk", strict=False)

    assert files == [str(tmp_path / "visible.txt")]
    errors = [r for r in caplog.records if getattr(r, "fs_event", None) == "fs.list.error"]
    assert len(errors) == 1
    assert errors[0].path == str(tmp_path / "locked")


async def test_find_files_walk_strict_raises_on_unreadable_subdirectory(
    tmp_path: Path, mocker: MockerFixture
) -> None:
    """Strict walks raise with the directory error as the cause."""

    _ = (tmp_path / "visible.txt").write_text("ok", encoding="utf-8")
    _ = mocker.patch.object(listing.os, "walk", side_effect=_walk_with_unreadable_subdirectory)

    with pytest.raises(DirectoryListingError) as excinfo:
        _ = await find_files(tmp_path, backend="walk", strict=True)

    assert isinstance(excinfo.value.__cause__, PermissionError)


@pytest.fixture
def failing_find(tmp_path: Path, mocker: MockerFixture) -> Path:
    """Install a find replacement that prints one file and then exits 1."""

    script = tmp_path / "fake-find"
    _ = script.write_text(
        '#!/bin/sh\necho "$1/partial.txt"\necho "cannot read locked" >&2\nexit 1\n',
        encoding="utf-8",
    )
    script.chmod(0o755)
    _ = mocker.patch.object(listing, "FIND_EXECUTABLE", str(script))
    base = tmp_path / "base"
    base.mkdir()
    return base


@pytest.mark.skipif(os.name == "nt", reason="requires a POSIX shell")
async def test_find_files_nonzero_exit_returns_partial_output(
    failing_find: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Lenient mode keeps what find printed and logs the failure."""

    with caplog.at_level(logging.WARNING, logger="asyncfs"):
        files = await find_files(failing_find, backend="find", strict=False)

    assert files == [str(failing_find / "partial.txt")]
    errors = [r for r in caplog.records if getattr(r, "fs_event", None) == "fs.list.error"]
    assert len(errors) == 1
    assert "cannot read locked" in errors[0].error_message


@pytest.mark.skipif(os.name == "nt", reason="requires a POSIX shell")
async def test_find_files_nonzero_exit_raises_in_strict_mode(failing_find: Path) -> None:
    """Strict mode turns a failing find into a listing error."""

    with pytest.raises(DirectoryListingError, match="exited with status 1"):
        _ = await find_files(failing_find, backend="find", strict=True)
