"""Folder copy: list a directory and copy each entry into a destination."""

from __future__ import annotations

from pathlib import Path

from diskhog.errors import translate_os_error
from diskhog.infrastructure.config import BUFFER_SIZE
from diskhog.infrastructure.logger import logger
from diskhog.types import CopyOutcome, CopyReport, CopyTask, DirectoryEntry

from .copy_file import copy_file
from .lister import list_directory


def copy_folder(
    source: Path | str,
    dest: Path | str,
    *,
    recursive: bool = True,
    buffer_size: int = BUFFER_SIZE,
    atomic: bool = True,
) -> CopyReport:
    """Copy the entries of source into dest, one at a time in listing order.

    A failure to list the source root is raised and dest is not created.
    Anything that goes wrong below the root is recorded as a failed outcome
    and the copy carries on with the next entry.
    """
    src_path = Path(source)
    dest_path = Path(dest)

    logger.info("Backing up folder", source=str(src_path), dest=str(dest_path))
    entries = list_directory(src_path)

    try:
        dest_path.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise translate_os_error(err, dest_path) from err

    report = CopyReport()
    _copy_entries(src_path, dest_path, entries, report, recursive, buffer_size, atomic)

    logger.info(
        "Folder copied",
        source=str(src_path),
        files=report.files_copied,
        bytes=report.bytes_copied,
        failures=len(report.failures),
    )
    return report


def _copy_entries(
    src_dir: Path,
    dest_dir: Path,
    entries: list[DirectoryEntry],
    report: CopyReport,
    recursive: bool,
    buffer_size: int,
    atomic: bool,
) -> None:
    logger.info("Listing contents", path=str(src_dir), entries=[e.name for e in entries])

    for entry in entries:
        task = CopyTask.for_entry(src_dir, dest_dir, entry)

        if entry.kind == "file":
            report.outcomes.append(_copy_one_file(task, buffer_size, atomic))
        elif entry.kind == "directory" and recursive:
            _copy_subdirectory(task, report, buffer_size, atomic)
        else:
            logger.info("Skipping entry", path=str(task.source), kind=entry.kind)
            report.outcomes.append(CopyOutcome(source=task.source, dest=task.dest, kind=entry.kind, status="skipped"))


def _copy_one_file(task: CopyTask, buffer_size: int, atomic: bool) -> CopyOutcome:
    try:
        copied = copy_file(task.source, task.dest, buffer_size=buffer_size, atomic=atomic)
    except OSError as err:
        logger.warning("Copy failed", source=str(task.source), error=str(err))
        return CopyOutcome(source=task.source, dest=task.dest, kind="file", status="failed", error=str(err))
    return CopyOutcome(source=task.source, dest=task.dest, kind="file", status="copied", bytes_copied=copied)


def _copy_subdirectory(task: CopyTask, report: CopyReport, buffer_size: int, atomic: bool) -> None:
    try:
        entries = list_directory(task.source)
        task.dest.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        logger.warning("Directory copy failed", source=str(task.source), error=str(err))
        report.outcomes.append(
            CopyOutcome(source=task.source, dest=task.dest, kind="directory", status="failed", error=str(err))
        )
        return

    report.outcomes.append(CopyOutcome(source=task.source, dest=task.dest, kind="directory", status="copied"))
    _copy_entries(task.source, task.dest, entries, report, True, buffer_size, atomic)
