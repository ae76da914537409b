"""
prefixer.enumerator

List the candidate files of a run.
"""

from __future__ import annotations

from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List, Optional

from common.base.logging import get_logger

log = get_logger(__name__)


def list_matching_files(
    source: Path,
    pattern: str,
    exclude: Optional[Iterable[Path]] = None,
) -> List[Path]:
    """
    Return the non-directory entries directly under ``source`` whose name
    matches ``pattern`` (case-sensitive glob), sorted by name.

    Paths in ``exclude`` (e.g. the audit log) are never returned.
    """
    excluded = {p.resolve() for p in exclude or []}
    matches: List[Path] = []
    for entry in source.iterdir():
        if entry.is_dir():
            continue
        if not fnmatchcase(entry.name, pattern):
            continue
        if entry.resolve() in excluded:
            log.debug(f"Skipping excluded path: {entry}")
            continue
        matches.append(entry)
    matches.sort(key=lambda p: p.name)
    log.debug(f"{len(matches)} file(s) match '{pattern}' in {source}")
    return matches
