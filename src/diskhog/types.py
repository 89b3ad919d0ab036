"""Backup domain types."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from diskhog.infrastructure.config import BUFFER_SIZE

EntryKind = Literal["file", "directory", "other"]
CopyStatus = Literal["copied", "failed", "skipped"]


class DirectoryEntry(BaseModel):
    name: str = Field(min_length=1)
    kind: EntryKind


class CopyTask(BaseModel):
    source: Path
    dest: Path

    @classmethod
    def for_entry(cls, source_dir: Path, dest_dir: Path, entry: DirectoryEntry) -> CopyTask:
        return cls(source=source_dir / entry.name, dest=dest_dir / entry.name)


class CopyOutcome(BaseModel):
    source: Path
    dest: Path
    kind: EntryKind
    status: CopyStatus
    bytes_copied: int = 0
    error: str | None = None


class CopyReport(BaseModel):
    """Per-item outcomes of one folder copy."""

    outcomes: list[CopyOutcome] = Field(default_factory=list)

    @property
    def files_copied(self) -> int:
        return sum(1 for o in self.outcomes if o.kind == "file" and o.status == "copied")

    @property
    def bytes_copied(self) -> int:
        return sum(o.bytes_copied for o in self.outcomes if o.status == "copied")

    @property
    def failures(self) -> list[CopyOutcome]:
        return [o for o in self.outcomes if o.status == "failed"]

    @property
    def skipped(self) -> list[CopyOutcome]:
        return [o for o in self.outcomes if o.status == "skipped"]

    @property
    def success(self) -> bool:
        return not self.failures


class BackupOptions(BaseModel):
    max_space: int | None = Field(default=None, ge=0)
    validate_checksums: bool = False
    recursive: bool = True
    atomic: bool = True
    buffer_size: int = Field(default=BUFFER_SIZE, gt=0)


class FileRecord(BaseModel):
    path: str
    size: int
    sha256: str | None = None


class BackupSetInfo(BaseModel):
    name: str
    created_at: str
    source: str | None = None
    total_size: int
    files: list[FileRecord]


class BackupResult(BaseModel):
    set_name: str
    set_path: Path
    source: Path
    report: CopyReport
    checksum_mismatches: list[str] = Field(default_factory=list)
    pruned_sets: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.report.success and not self.checksum_mismatches


class ValidationIssue(BaseModel):
    path: Path
    issue: str
