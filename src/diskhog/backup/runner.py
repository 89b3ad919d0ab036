"""Run a backup of one source directory into a new backup set."""

from __future__ import annotations

import errno
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import ValidationError

from diskhog.dhcopy.copy_folder import copy_folder
from diskhog.errors import AccessDeniedError, BackupIOError, NotFoundError, translate_os_error
from diskhog.infrastructure.logger import logger
from diskhog.types import BackupOptions, BackupResult, BackupSetInfo

from .backup_set import create_empty_set, list_backup_sets, utc_now
from .manifest import build_manifest, manifest_path, read_manifest, write_manifest
from .space import manage_backup_space
from .validate import verify_checksums

if TYPE_CHECKING:
    from collections.abc import Callable


def _check_source(source: Path) -> None:
    try:
        source.stat()
    except OSError as err:
        raise translate_os_error(err, source) from err
    if not source.is_dir():
        raise BackupIOError(errno.ENOTDIR, "Source is not a directory", str(source))
    if not os.access(source, os.R_OK | os.X_OK):
        raise AccessDeniedError(errno.EACCES, os.strerror(errno.EACCES), str(source))


def backup(
    source: Path | str,
    dest: Path | str,
    options: BackupOptions | None = None,
    *,
    now: Callable[[], datetime] = utc_now,
) -> BackupResult:
    """Back up source into a fresh set under dest.

    Problems with the source or the backup root are raised; nothing is created
    at dest if the source check fails. Failures on individual entries are
    reported in the result.
    """
    options = options or BackupOptions()
    src_path = Path(source)
    root = Path(dest)

    _check_source(src_path)
    if options.recursive and root.resolve().is_relative_to(src_path.resolve()):
        raise BackupIOError(errno.EINVAL, "Backup root is inside the source", str(root))

    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise translate_os_error(err, root) from err

    started = now()
    set_name = create_empty_set(root, lambda: started)
    set_dir = root / set_name

    pruned: list[str] = []
    if options.max_space is not None:
        pruned = manage_backup_space(root, options.max_space, keep=[set_name])

    logger.info("Backing up", source=str(src_path), dest=str(set_dir))
    try:
        report = copy_folder(
            src_path,
            set_dir,
            recursive=options.recursive,
            buffer_size=options.buffer_size,
            atomic=options.atomic,
        )
    except OSError:
        # Source vanished or became unreadable after the check; drop the empty set
        shutil.rmtree(set_dir, ignore_errors=True)
        raise

    mismatches: list[str] = []
    if options.validate_checksums:
        mismatches = verify_checksums(src_path, set_dir, recursive=options.recursive)

    info = build_manifest(set_dir, set_name, started.isoformat(), src_path)
    write_manifest(root, info)
    logger.info("Manifest written", name=set_name, files=len(info.files), total_size=info.total_size)

    return BackupResult(
        set_name=set_name,
        set_path=set_dir,
        source=src_path,
        report=report,
        checksum_mismatches=mismatches,
        pruned_sets=pruned,
    )


def _scan_set(root: Path, name: str) -> BackupSetInfo:
    set_dir = root / name
    created = datetime.fromtimestamp(set_dir.stat().st_mtime).astimezone().isoformat()
    return build_manifest(set_dir, name, created, with_hashes=False)


def list_backups(backup_root: Path | str) -> list[BackupSetInfo]:
    """Describe every backup set under root, oldest first.

    Sets with a missing or unreadable manifest are described from a scan of
    their directory, without hashes.
    """
    root = Path(backup_root)
    if not root.is_dir():
        raise NotFoundError(errno.ENOENT, "Backup root not found", str(root))

    infos: list[BackupSetInfo] = []
    for name in list_backup_sets(root):
        if not manifest_path(root, name).exists():
            infos.append(_scan_set(root, name))
            continue
        try:
            infos.append(read_manifest(root, name))
        except (yaml.YAMLError, ValidationError, TypeError) as err:
            logger.warning("Unreadable manifest, scanning set instead", name=name, error=str(err))
            infos.append(_scan_set(root, name))
    return infos
