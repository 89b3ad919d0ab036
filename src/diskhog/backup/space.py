"""Keep the backup root under a space limit by pruning old sets."""

from __future__ import annotations

import contextlib
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from diskhog.infrastructure.logger import logger

from .backup_set import list_backup_sets
from .manifest import manifest_path

if TYPE_CHECKING:
    from collections.abc import Iterable


def calculate_dir_size(path: Path | str) -> int:
    """Total size in bytes of the regular files below path."""
    total = 0
    for entry in Path(path).rglob("*"):
        if entry.is_file() and not entry.is_symlink():
            total += entry.stat().st_size
    return total


def _age_key(set_dir: Path) -> tuple[float, str]:
    return (set_dir.stat().st_mtime, set_dir.name)


def manage_backup_space(backup_root: Path | str, max_space: int, *, keep: Iterable[str] = ()) -> list[str]:
    """Remove the oldest backup sets until the root fits in max_space bytes.

    Sets named in keep are never removed. Returns the removed set names,
    oldest first.
    """
    root = Path(backup_root)
    kept = set(keep)
    set_dirs = [root / name for name in list_backup_sets(root)]
    sizes = {d.name: calculate_dir_size(d) for d in set_dirs}
    total_size = sum(sizes.values())

    logger.info("Checking backup space", root=str(root), total_size=total_size, max_space=max_space, sets=len(set_dirs))

    removed: list[str] = []
    for set_dir in sorted(set_dirs, key=_age_key):
        if total_size <= max_space:
            break
        if set_dir.name in kept:
            continue

        shutil.rmtree(set_dir)
        with contextlib.suppress(FileNotFoundError):
            manifest_path(root, set_dir.name).unlink()

        total_size -= sizes[set_dir.name]
        removed.append(set_dir.name)
        logger.info("Removed old backup set", name=set_dir.name, freed=sizes[set_dir.name], total_size=total_size)

    if total_size > max_space:
        logger.warning("Backup root still over space limit", total_size=total_size, max_space=max_space)

    return removed
