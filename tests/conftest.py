"""Shared fixtures for backup tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


def write_tree(root: Path, files: dict[str, bytes | str]) -> Path:
    """Create files (and their parent directories) under root."""
    root.mkdir(parents=True, exist_ok=True)
    for rel_path, content in files.items():
        full_path = root / rel_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            full_path.write_text(content, encoding="utf-8")
        else:
            full_path.write_bytes(content)
    return root


@pytest.fixture()
def source_dir(tmp_path: Path) -> Path:
    """Source tree with a nested file, as the end-to-end backups use."""
    return write_tree(
        tmp_path / "orig",
        {
            "a.txt": "hello",
            "b.txt": "",
            "thats/deep/testfile.txt": "backmeup susie",
        },
    )


@pytest.fixture()
def backup_root(tmp_path: Path) -> Path:
    return tmp_path / "backups"
