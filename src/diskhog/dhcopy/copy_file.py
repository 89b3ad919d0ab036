"""Whole-file copy with buffered reads."""

from __future__ import annotations

import contextlib
import os
import uuid
from pathlib import Path
from typing import BinaryIO

from diskhog.errors import translate_os_error
from diskhog.infrastructure.config import BUFFER_SIZE
from diskhog.infrastructure.logger import logger


def _transfer(src: BinaryIO, dest: BinaryIO, buffer_size: int) -> int:
    total = 0
    while True:
        chunk = src.read(buffer_size)
        if not chunk:
            return total
        dest.write(chunk)
        total += len(chunk)


def copy_file(
    source: Path | str,
    dest: Path | str,
    *,
    buffer_size: int = BUFFER_SIZE,
    atomic: bool = True,
) -> int:
    """Copy all bytes of source to dest and return the byte count.

    With atomic=True the bytes land in a temp file next to dest which replaces
    dest only once the transfer has finished; on failure the temp file is
    removed and an existing dest is left as it was. With atomic=False dest is
    truncated and written in place. File metadata is not copied.
    """
    src_path = Path(source)
    dest_path = Path(dest)
    logger.info("Copying file", source=str(src_path), dest=str(dest_path))

    try:
        with open(src_path, "rb") as src_file:
            if atomic:
                bytes_written = _copy_atomic(src_file, dest_path, buffer_size)
            else:
                with open(dest_path, "wb") as dest_file:
                    bytes_written = _transfer(src_file, dest_file, buffer_size)
    except OSError as err:
        raise translate_os_error(err, err.filename or src_path) from err

    logger.info("Bytes copied", dest=str(dest_path), bytes=bytes_written)
    return bytes_written


def _copy_atomic(src_file: BinaryIO, dest_path: Path, buffer_size: int) -> int:
    tmp_path = dest_path.with_name(f".{dest_path.name}.{uuid.uuid4().hex}.partial")
    # 0o666 so the umask applies as it would for a plain open()
    fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
    try:
        with os.fdopen(fd, "wb") as tmp_file:
            bytes_written = _transfer(src_file, tmp_file, buffer_size)
        os.replace(tmp_path, dest_path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            tmp_path.unlink()
        raise
    return bytes_written
