"""
common.base.ops

Filesystem mutation helpers for the prefix tools.

All helpers raise on failure so callers decide whether an error is fatal,
retried, or only worth a warning. None of them overwrite an existing
destination.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from .logging import get_logger
from .fs import ensure_parent

log = get_logger(__name__)


def _refuse_existing(dst: Path) -> None:
    if dst.exists():
        raise FileExistsError(f"Destination exists: {dst}")


def rename_file(src: Path | str, dst: Path | str) -> Path:
    """
    Rename ``src`` to ``dst`` (same filesystem). Returns the new path.

    Raises:
        FileNotFoundError: If the source no longer exists.
        FileExistsError: If the destination is already taken.
        OSError: Any error reported by the operating system.
    """
    src, dst = Path(src), Path(dst)
    if not src.exists():
        raise FileNotFoundError(f"Source not found: {src}")
    _refuse_existing(dst)
    src.rename(dst)
    log.debug(f"Renamed {src} → {dst}")
    return dst


def copy_file(src: Path | str, dst: Path | str, overwrite: bool = False) -> Path:
    """
    Copy a file with its metadata. Creates destination dirs if needed.

    Args:
        src: Source file.
        dst: Destination file.
        overwrite: Replace an existing destination file.
    """
    src, dst = Path(src), Path(dst)
    if not src.exists():
        raise FileNotFoundError(f"Source not found: {src}")
    ensure_parent(dst)
    if not overwrite:
        _refuse_existing(dst)
    shutil.copy2(src, dst)
    log.debug(f"Copied {src} → {dst}")
    return dst


def move_file(src: Path | str, dst: Path | str) -> Path:
    """
    Move a file with logging. Creates destination dirs if needed.

    Args:
        src: Source path.
        dst: Destination path.
    """
    src, dst = Path(src), Path(dst)
    ensure_parent(dst)
    _refuse_existing(dst)
    try:
        shutil.move(str(src), str(dst))
    except OSError as e:
        log.error(f"Move failed {src} → {dst}: {e}")
        raise
    log.debug(f"Moved {src} → {dst}")
    return dst
