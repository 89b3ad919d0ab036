"""Timestamped backup set directories under a backup root."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from diskhog.errors import translate_os_error
from diskhog.infrastructure.config import SET_NAME_FORMAT, SET_PREFIX
from diskhog.infrastructure.logger import logger

if TYPE_CHECKING:
    from collections.abc import Callable


def utc_now() -> datetime:
    return datetime.now(UTC)


def set_name_for(moment: datetime) -> str:
    return f"{SET_PREFIX}{moment.astimezone(UTC).strftime(SET_NAME_FORMAT)}"


def create_empty_set(backup_root: Path | str, now: Callable[[], datetime] = utc_now) -> str:
    """Create a new, empty backup set directory and return its name.

    Two sets created within the same second get -1, -2, ... suffixes.
    """
    root = Path(backup_root)
    base_name = set_name_for(now())
    name = base_name
    counter = 0

    while True:
        try:
            (root / name).mkdir(parents=True)
            break
        except FileExistsError:
            counter += 1
            name = f"{base_name}-{counter}"
        except OSError as err:
            raise translate_os_error(err, root / name) from err

    logger.info("Created backup set", root=str(root), name=name)
    return name


def list_backup_sets(backup_root: Path | str) -> list[str]:
    """Return the names of all backup sets under root, oldest first."""
    root = Path(backup_root)
    if not root.is_dir():
        return []
    return sorted(p.name for p in root.iterdir() if p.is_dir() and p.name.startswith(SET_PREFIX))
