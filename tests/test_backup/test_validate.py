"""Tests for checksum verification and backup validation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from diskhog.backup.manifest import build_manifest, manifest_path, write_manifest
from diskhog.backup.validate import validate_backups, verify_checksums
from diskhog.errors import NotFoundError

from ..conftest import write_tree

if TYPE_CHECKING:
    from pathlib import Path

SET_NAME = "dhb-set-20250207-160118"


class TestVerifyChecksums:
    def test_identical_trees(self, tmp_path: Path) -> None:
        files = {"a.txt": "hello", "sub/b.txt": "world"}
        write_tree(tmp_path / "src", files)
        write_tree(tmp_path / "dst", files)
        assert verify_checksums(tmp_path / "src", tmp_path / "dst") == []

    def test_reports_changed_and_missing(self, tmp_path: Path) -> None:
        write_tree(tmp_path / "src", {"a.txt": "hello", "sub/b.txt": "world", "c.txt": "c"})
        write_tree(tmp_path / "dst", {"a.txt": "HELLO", "c.txt": "c"})

        assert verify_checksums(tmp_path / "src", tmp_path / "dst") == ["a.txt", "sub/b.txt"]

    def test_non_recursive_ignores_nested_files(self, tmp_path: Path) -> None:
        write_tree(tmp_path / "src", {"a.txt": "hello", "sub/b.txt": "world"})
        write_tree(tmp_path / "dst", {"a.txt": "hello"})

        assert verify_checksums(tmp_path / "src", tmp_path / "dst", recursive=False) == []


class TestValidateBackups:
    @pytest.fixture(autouse=True)
    def _setup(self, backup_root: Path) -> None:
        self.root = backup_root
        self.set_dir = write_tree(backup_root / SET_NAME, {"a.txt": "hello", "thats/deep/testfile.txt": "backmeup"})
        write_manifest(backup_root, build_manifest(self.set_dir, SET_NAME, "2025-02-07T16:01:18+00:00"))

    def _issues(self) -> dict[str, str]:
        return {p.relative_to(self.root).as_posix(): i for p, i in ((v.path, v.issue) for v in validate_backups(self.root))}

    def test_intact_backup_is_valid(self) -> None:
        assert validate_backups(self.root) == []

    def test_modified_file_same_size(self) -> None:
        (self.set_dir / "a.txt").write_text("HELLO")
        assert self._issues() == {f"{SET_NAME}/a.txt": "checksum mismatch"}

    def test_modified_file_different_size(self) -> None:
        (self.set_dir / "a.txt").write_text("hello!!")
        assert self._issues() == {f"{SET_NAME}/a.txt": "size mismatch: expected 5, found 7"}

    def test_missing_file(self) -> None:
        (self.set_dir / "thats" / "deep" / "testfile.txt").unlink()
        assert self._issues() == {f"{SET_NAME}/thats/deep/testfile.txt": "missing file"}

    def test_untracked_file(self) -> None:
        (self.set_dir / "extra.txt").write_text("?")
        assert self._issues() == {f"{SET_NAME}/extra.txt": "file not in manifest"}

    def test_missing_manifest(self) -> None:
        manifest_path(self.root, SET_NAME).unlink()
        assert self._issues() == {SET_NAME: "missing manifest"}

    def test_corrupt_manifest(self) -> None:
        manifest_path(self.root, SET_NAME).write_text("name: [unclosed\n")
        issues = validate_backups(self.root)
        assert len(issues) == 1
        assert issues[0].issue.startswith("unreadable manifest")

    def test_empty_root_is_valid(self, tmp_path: Path) -> None:
        (tmp_path / "empty").mkdir()
        assert validate_backups(tmp_path / "empty") == []

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(NotFoundError):
            validate_backups(tmp_path / "nothing-here")
