"""Per-set manifest persistence and file hashing."""

from __future__ import annotations

import hashlib
from pathlib import Path

import yaml

from diskhog.errors import NotFoundError
from diskhog.infrastructure.config import BUFFER_SIZE, MANIFEST_SUFFIX
from diskhog.types import BackupSetInfo, FileRecord


def compute_file_hash(file_path: Path | str, buffer_size: int = BUFFER_SIZE) -> str:
    """SHA-256 hex digest of a file, read in chunks."""
    digest = hashlib.sha256()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(buffer_size), b""):
            digest.update(chunk)
    return digest.hexdigest()


def manifest_path(backup_root: Path | str, name: str) -> Path:
    return Path(backup_root) / f"{name}{MANIFEST_SUFFIX}"


def iter_files(base: Path, *, recursive: bool = True) -> list[Path]:
    """All regular files under base, as sorted paths. Symlinks are not followed."""
    candidates = base.rglob("*") if recursive else base.iterdir()
    return sorted(p for p in candidates if p.is_file() and not p.is_symlink())


def build_manifest(
    set_dir: Path,
    name: str,
    created_at: str,
    source: Path | str | None = None,
    *,
    with_hashes: bool = True,
) -> BackupSetInfo:
    """Describe every regular file currently inside a backup set."""
    files: list[FileRecord] = []
    for file_path in iter_files(set_dir):
        files.append(
            FileRecord(
                path=file_path.relative_to(set_dir).as_posix(),
                size=file_path.stat().st_size,
                sha256=compute_file_hash(file_path) if with_hashes else None,
            )
        )

    return BackupSetInfo(
        name=name,
        created_at=created_at,
        source=str(source) if source is not None else None,
        total_size=sum(f.size for f in files),
        files=files,
    )


def write_manifest(backup_root: Path | str, info: BackupSetInfo) -> Path:
    """Atomically write the manifest for a backup set."""
    path = manifest_path(backup_root, info.name)
    path.parent.mkdir(parents=True, exist_ok=True)

    content = yaml.safe_dump(info.model_dump(exclude_none=True), sort_keys=True)

    # Write to temp file then atomic rename to prevent corruption on crash
    tmp_path = path.with_suffix(".yaml.tmp")
    tmp_path.write_text(content, encoding="utf-8")
    tmp_path.rename(path)
    return path


def read_manifest(backup_root: Path | str, name: str) -> BackupSetInfo:
    """Read and validate a set's manifest."""
    path = manifest_path(backup_root, name)
    if not path.exists():
        raise NotFoundError(2, "Manifest not found", str(path))

    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    return BackupSetInfo(**raw)
