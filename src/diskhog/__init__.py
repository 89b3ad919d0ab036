"""disk-hog-backup: copy a directory into timestamped backup sets."""

from __future__ import annotations

from .backup.runner import list_backups
from .backup.validate import validate_backups
from .dhcopy.copy_file import copy_file
from .dhcopy.copy_folder import copy_folder
from .dhcopy.lister import list_directory
from .errors import AccessDeniedError, BackupError, BackupIOError, NotFoundError
from .types import (
    BackupOptions,
    BackupResult,
    BackupSetInfo,
    CopyOutcome,
    CopyReport,
    CopyTask,
    DirectoryEntry,
    FileRecord,
    ValidationIssue,
)

__version__ = "0.1.0"

__all__ = [
    "AccessDeniedError",
    "BackupError",
    "BackupIOError",
    "BackupOptions",
    "BackupResult",
    "BackupSetInfo",
    "CopyOutcome",
    "CopyReport",
    "CopyTask",
    "DirectoryEntry",
    "FileRecord",
    "NotFoundError",
    "ValidationIssue",
    "copy_file",
    "copy_folder",
    "list_backups",
    "list_directory",
    "validate_backups",
]
