"""Backup sets, manifests, space management and validation."""

from __future__ import annotations

from .backup_set import create_empty_set, list_backup_sets, set_name_for
from .manifest import build_manifest, compute_file_hash, read_manifest, write_manifest
from .runner import backup, list_backups
from .space import calculate_dir_size, manage_backup_space
from .validate import validate_backups, verify_checksums

__all__ = [
    # backup_set
    "create_empty_set",
    "list_backup_sets",
    "set_name_for",
    # manifest
    "build_manifest",
    "compute_file_hash",
    "read_manifest",
    "write_manifest",
    # runner
    "backup",
    "list_backups",
    # space
    "calculate_dir_size",
    "manage_backup_space",
    # validate
    "validate_backups",
    "verify_checksums",
]
