"""Entry point: python -m diskhog"""

from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING

from diskhog.backup import backup, list_backups, validate_backups
from diskhog.errors import BackupError
from diskhog.infrastructure.config import DEFAULT_MAX_SPACE_GB, gigabytes_to_bytes, parse_gigabytes
from diskhog.infrastructure.logger import logger
from diskhog.types import BackupOptions

if TYPE_CHECKING:
    from collections.abc import Sequence

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 3


def _gigabytes(raw: str) -> float:
    value = parse_gigabytes(raw)
    if value is None:
        raise argparse.ArgumentTypeError(f"expected a non-negative number of GB, got {raw!r}")
    return value


def _add_backup_args(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("-s", "--source", required=required, help="Source directory to back up")
    parser.add_argument("-d", "--destination", required=required, help="Backup root; each run creates a new set in it")
    parser.add_argument(
        "-m",
        "--max-space",
        type=_gigabytes,
        default=DEFAULT_MAX_SPACE_GB,
        help="Prune the oldest sets to keep the backup root under this many GB",
    )
    parser.add_argument("--validate-checksums", action="store_true", help="Compare SHA-256 of source and copy")
    parser.add_argument("--no-recursive", action="store_true", help="Copy only the top level of the source")
    parser.add_argument("--in-place", action="store_true", help="Write destination files in place instead of via rename")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="disk-hog-backup", description="Back up a directory into timestamped sets")
    _add_backup_args(parser, required=False)

    subparsers = parser.add_subparsers(dest="command")

    backup_parser = subparsers.add_parser("backup", help="Create a new backup set")
    _add_backup_args(backup_parser, required=True)

    list_parser = subparsers.add_parser("list", help="List existing backup sets")
    list_parser.add_argument("-b", "--backup-root", required=True, help="Backup root directory")

    validate_parser = subparsers.add_parser("validate", help="Check backup sets against their manifests")
    validate_parser.add_argument("-b", "--backup-root", required=True, help="Backup root directory")

    return parser


def run_backup(args: argparse.Namespace) -> int:
    options = BackupOptions(
        max_space=gigabytes_to_bytes(args.max_space) if args.max_space is not None else None,
        validate_checksums=args.validate_checksums,
        recursive=not args.no_recursive,
        atomic=not args.in_place,
    )

    result = backup(args.source, args.destination, options)

    if result.success:
        print(f"Backup successful: created set {result.set_name}")
    else:
        failures = result.report.failures
        print(
            f"Backup finished with {len(failures) + len(result.checksum_mismatches)} failures: "
            f"created set {result.set_name}"
        )
        for outcome in failures:
            print(f"FAILED {outcome.source}: {outcome.error}")
        for rel_path in result.checksum_mismatches:
            print(f"CHECKSUM MISMATCH {rel_path}")

    print(f"Files backed up: {result.report.files_copied}")
    print(f"Total size: {result.report.bytes_copied} bytes")
    for name in result.pruned_sets:
        print(f"Removed old set {name}")

    return EXIT_OK if result.success else EXIT_PARTIAL


def run_list(args: argparse.Namespace) -> int:
    print("Available backups:")
    for info in list_backups(args.backup_root):
        print(f"Set: {info.name}")
        print(f"Date: {info.created_at}")
        print(f"Size: {info.total_size} bytes")
        print(f"Files: {len(info.files)}")
        print("---")
    return EXIT_OK


def run_validate(args: argparse.Namespace) -> int:
    issues = validate_backups(args.backup_root)
    if not issues:
        print("All backups are valid!")
        return EXIT_OK

    print(f"Found {len(issues)} issues:")
    for issue in issues:
        print(f"{issue.path}: {issue.issue}")
    return EXIT_PARTIAL


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        if not args.source or not args.destination:
            parser.error("--source and --destination are required")
        args.command = "backup"

    handlers = {"backup": run_backup, "list": run_list, "validate": run_validate}

    try:
        return handlers[args.command](args)
    except BackupError as err:
        logger.error("Backup aborted", error=str(err))
        print(f"disk-hog-backup: {err}", file=sys.stderr)
        return EXIT_FATAL


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
