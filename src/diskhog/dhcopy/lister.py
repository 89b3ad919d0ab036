"""Single-level directory listing."""

from __future__ import annotations

import os
from pathlib import Path

from diskhog.errors import translate_os_error
from diskhog.types import DirectoryEntry, EntryKind


def _entry_kind(entry: os.DirEntry[str]) -> EntryKind:
    # Symlinks are never followed, so a link to a directory is "other".
    if entry.is_symlink():
        return "other"
    if entry.is_dir(follow_symlinks=False):
        return "directory"
    if entry.is_file(follow_symlinks=False):
        return "file"
    return "other"


def list_directory(path: Path | str) -> list[DirectoryEntry]:
    """Return the immediate children of a directory.

    Order is whatever the filesystem yields; sort the result if you need a
    deterministic order. Raises NotFoundError, AccessDeniedError or
    BackupIOError.
    """
    dir_path = Path(path)
    try:
        with os.scandir(dir_path) as it:
            return [DirectoryEntry(name=entry.name, kind=_entry_kind(entry)) for entry in it]
    except OSError as err:
        raise translate_os_error(err, dir_path) from err
