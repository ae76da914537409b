"""
prefixer.resolver

Validate and normalize the folders a run touches before any file is processed.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from common.base.fs import ensure_dir
from common.base.logging import get_logger

from .errors import DirectoryCreateError, PathNotFoundError
from .models import DEFAULT_LOG_NAME

log = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedPaths:
    source: Path
    backup_dir: Optional[Path]
    log_path: Path


def default_log_path() -> Path:
    """Return ``rename_log.csv`` beside the invoking entry point (or the cwd)."""
    entry = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
    if entry is not None and entry.is_file():
        return entry.resolve().parent / DEFAULT_LOG_NAME
    return Path.cwd() / DEFAULT_LOG_NAME


def _create_dir(path: Path, label: str) -> Path:
    try:
        return ensure_dir(path)
    except OSError as exc:
        raise DirectoryCreateError(f"Cannot create {label} folder {path}: {exc}") from exc


def resolve_paths(
    source: Path | str,
    backup_dir: Path | str | None = None,
    log_path: Path | str | None = None,
) -> ResolvedPaths:
    """Resolve the source, backup and log locations of a run.

    Args:
        source: Folder whose files get prefixed. Must exist.
        backup_dir: Optional copy-before-rename destination, created when absent.
        log_path: CSV audit log location. Its parent folder is created when absent.

    Returns:
        ResolvedPaths with absolute paths.

    Raises:
        PathNotFoundError: If ``source`` does not exist or is not a directory.
        DirectoryCreateError: If the backup or log folder cannot be created, or the
            log path is taken by something other than a regular file.
    """
    source_path = Path(source).expanduser().resolve()
    if not source_path.exists():
        raise PathNotFoundError(f"Source folder not found: {source_path}")
    if not source_path.is_dir():
        raise PathNotFoundError(f"Source path is not a directory: {source_path}")

    resolved_log = Path(log_path).expanduser().resolve() if log_path else default_log_path()
    if resolved_log.exists() and not resolved_log.is_file():
        raise DirectoryCreateError(f"Log path exists and is not a regular file: {resolved_log}")
    _create_dir(resolved_log.parent, "log")

    resolved_backup: Optional[Path] = None
    if backup_dir:
        resolved_backup = _create_dir(Path(backup_dir).expanduser().resolve(), "backup")

    log.debug(f"Source: {source_path} | Backup: {resolved_backup or '-'} | Log: {resolved_log}")
    return ResolvedPaths(source=source_path, backup_dir=resolved_backup, log_path=resolved_log)
