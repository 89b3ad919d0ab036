"""Integrity checks for backup sets."""

from __future__ import annotations

import errno
from pathlib import Path

import yaml
from pydantic import ValidationError

from diskhog.errors import NotFoundError
from diskhog.infrastructure.logger import logger
from diskhog.types import ValidationIssue

from .backup_set import list_backup_sets
from .manifest import compute_file_hash, iter_files, manifest_path, read_manifest


def verify_checksums(source: Path | str, set_dir: Path | str, *, recursive: bool = True) -> list[str]:
    """Compare every regular file under source with its copy in set_dir.

    Returns the relative (POSIX) paths whose copy is missing or differs.
    """
    src_root = Path(source)
    dest_root = Path(set_dir)
    mismatches: list[str] = []

    for src_file in iter_files(src_root, recursive=recursive):
        rel = src_file.relative_to(src_root)
        dest_file = dest_root / rel
        try:
            if not dest_file.is_file() or compute_file_hash(src_file) != compute_file_hash(dest_file):
                mismatches.append(rel.as_posix())
        except OSError as err:
            logger.warning("Checksum comparison failed", path=rel.as_posix(), error=str(err))
            mismatches.append(rel.as_posix())

    if mismatches:
        logger.warning("Checksum mismatches", count=len(mismatches))
    return mismatches


def _validate_set(root: Path, name: str) -> list[ValidationIssue]:
    set_dir = root / name
    if not manifest_path(root, name).exists():
        return [ValidationIssue(path=set_dir, issue="missing manifest")]

    try:
        info = read_manifest(root, name)
    except (yaml.YAMLError, ValidationError, TypeError) as err:
        return [ValidationIssue(path=manifest_path(root, name), issue=f"unreadable manifest: {err}")]

    issues: list[ValidationIssue] = []
    recorded = set()
    for record in info.files:
        recorded.add(record.path)
        file_path = set_dir / record.path
        if not file_path.is_file():
            issues.append(ValidationIssue(path=file_path, issue="missing file"))
            continue
        size = file_path.stat().st_size
        if size != record.size:
            issues.append(ValidationIssue(path=file_path, issue=f"size mismatch: expected {record.size}, found {size}"))
            continue
        if record.sha256 and compute_file_hash(file_path) != record.sha256:
            issues.append(ValidationIssue(path=file_path, issue="checksum mismatch"))

    for file_path in iter_files(set_dir):
        if file_path.relative_to(set_dir).as_posix() not in recorded:
            issues.append(ValidationIssue(path=file_path, issue="file not in manifest"))

    return issues


def validate_backups(backup_root: Path | str) -> list[ValidationIssue]:
    """Check every backup set under root against its manifest.

    Raises NotFoundError when the root itself is missing.
    """
    root = Path(backup_root)
    if not root.is_dir():
        raise NotFoundError(errno.ENOENT, "Backup root not found", str(root))

    issues: list[ValidationIssue] = []
    for name in list_backup_sets(root):
        issues.extend(_validate_set(root, name))

    logger.info("Validated backups", root=str(root), issues=len(issues))
    return issues
