"""Tests for whole-file copy."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

import pytest

import diskhog.dhcopy.copy_file as copy_file_module
from diskhog.dhcopy.copy_file import copy_file
from diskhog.errors import BackupIOError, NotFoundError

if TYPE_CHECKING:
    from pathlib import Path


def _sha256(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()


def _failing_transfer(src, dest, buffer_size):  # type: ignore[no-untyped-def]
    dest.write(src.read(3))
    raise OSError(5, "Input/output error")


class TestCopyFile:
    @pytest.fixture(autouse=True)
    def _setup(self, tmp_path: Path) -> None:
        self.src = tmp_path / "src"
        self.dest = tmp_path / "dest"
        self.src.mkdir()
        self.dest.mkdir()

    @pytest.mark.parametrize("size", [0, 1, 64 * 1024 * 3 + 17])
    def test_copies_bytes_exactly(self, size: int) -> None:
        data = bytes(i % 251 for i in range(size))
        (self.src / "f.bin").write_bytes(data)

        copied = copy_file(self.src / "f.bin", self.dest / "f.bin", buffer_size=64 * 1024)

        assert copied == size
        assert _sha256(self.dest / "f.bin") == _sha256(self.src / "f.bin")

    def test_small_buffer_still_copies_everything(self) -> None:
        (self.src / "f.txt").write_text("hello world")
        assert copy_file(self.src / "f.txt", self.dest / "f.txt", buffer_size=2) == 11
        assert (self.dest / "f.txt").read_text() == "hello world"

    def test_overwrites_existing_destination(self) -> None:
        (self.src / "f.txt").write_text("new")
        (self.dest / "f.txt").write_text("much longer old content")

        copy_file(self.src / "f.txt", self.dest / "f.txt")

        assert (self.dest / "f.txt").read_text() == "new"

    def test_overwrites_in_place(self) -> None:
        (self.src / "f.txt").write_text("new")
        (self.dest / "f.txt").write_text("much longer old content")

        copy_file(self.src / "f.txt", self.dest / "f.txt", atomic=False)

        assert (self.dest / "f.txt").read_text() == "new"

    def test_missing_source_raises_not_found(self) -> None:
        with pytest.raises(NotFoundError):
            copy_file(self.src / "missing.txt", self.dest / "missing.txt")
        assert not (self.dest / "missing.txt").exists()
        assert list(self.dest.iterdir()) == []

    def test_directory_source_raises_io_error(self) -> None:
        (self.src / "sub").mkdir()
        with pytest.raises(BackupIOError):
            copy_file(self.src / "sub", self.dest / "sub")
        assert list(self.dest.iterdir()) == []

    def test_missing_destination_directory_raises_not_found(self) -> None:
        (self.src / "f.txt").write_text("x")
        with pytest.raises(NotFoundError):
            copy_file(self.src / "f.txt", self.dest / "no" / "f.txt")

    def test_atomic_failure_keeps_previous_destination(self, monkeypatch: pytest.MonkeyPatch) -> None:
        (self.src / "f.txt").write_text("brand new content")
        (self.dest / "f.txt").write_text("previous")
        monkeypatch.setattr(copy_file_module, "_transfer", _failing_transfer)

        with pytest.raises(BackupIOError):
            copy_file(self.src / "f.txt", self.dest / "f.txt")

        assert (self.dest / "f.txt").read_text() == "previous"
        assert [p.name for p in self.dest.iterdir()] == ["f.txt"]

    def test_in_place_failure_leaves_partial_destination(self, monkeypatch: pytest.MonkeyPatch) -> None:
        (self.src / "f.txt").write_text("brand new content")
        (self.dest / "f.txt").write_text("previous")
        monkeypatch.setattr(copy_file_module, "_transfer", _failing_transfer)

        with pytest.raises(BackupIOError):
            copy_file(self.src / "f.txt", self.dest / "f.txt", atomic=False)

        assert (self.dest / "f.txt").read_text() == "bra"
