"""Filesystem helper utilities shared across common modules."""

from __future__ import annotations

from pathlib import Path


def ensure_dir(path: Path | str) -> Path:
    p = Path(path).expanduser()
    p.mkdir(parents=True, exist_ok=True)
    return p


def ensure_parent(path: Path | str) -> Path:
    return ensure_dir(Path(path).expanduser().parent)


def unique_path(dest: Path) -> Path:
    """
    Return ``dest`` if it is free, otherwise append ``_1``, ``_2``, ... before
    the suffix until a path that does not exist is found.
    """
    if not dest.exists():
        return dest

    counter = 1
    while True:
        candidate = dest.with_name(f"{dest.stem}_{counter}{dest.suffix}")
        if not candidate.exists():
            return candidate
        counter += 1
