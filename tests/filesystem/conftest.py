"""Shared fixtures for filesystem tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture
def sample_contents() -> dict[str, str]:
    """Relative path to text for every regular file in ``sample_root``."""

    return {
        "top.txt": "top level",
        "we!rd name,(1)&[x]'~.txt": "punctuation survives",
        os.path.join("sub", "nested.txt"): "nested content",
    }


@pytest.fixture
def sample_root(tmp_path: Path, sample_contents: dict[str, str]) -> Path:
    """Build a tree with a top-level file, a punctuated file, a nested file and symlinks."""

    root = tmp_path / "tree"
    nested_dir = root / "sub"
    nested_dir.mkdir(parents=True)

    for relative, text in sample_contents.items():
        _ = (root / relative).write_text(text, encoding="utf-8")

    (root / "link.txt").symlink_to(root / "top.txt")
    (root / "dir-link").symlink_to(nested_dir, target_is_directory=True)
    return root
