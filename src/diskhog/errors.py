"""Error taxonomy for listing and copying."""

from __future__ import annotations

import errno
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class BackupError(OSError):
    """Generic filesystem failure while listing or copying."""


BackupIOError = BackupError


class NotFoundError(BackupError, FileNotFoundError):
    pass


class AccessDeniedError(BackupError, PermissionError):
    pass


def translate_os_error(err: OSError, path: Path | str) -> BackupError:
    """Map a raw OSError onto the backup error taxonomy."""
    if isinstance(err, BackupError):
        return err

    message = err.strerror or str(err)
    code = err.errno if err.errno is not None else errno.EIO

    if isinstance(err, FileNotFoundError):
        return NotFoundError(code, message, str(path))
    if isinstance(err, PermissionError):
        return AccessDeniedError(code, message, str(path))
    return BackupIOError(code, message, str(path))
