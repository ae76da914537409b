"""
prefixer.planner

Decide the target name of every enumerated file.

A file whose name already starts with the prefix is left alone, so running the
tool twice over the same folder renames nothing the second time. Otherwise the
target is ``prefix + name``; when that name is taken the planner falls back to
``prefix + stem + "_" + <millisecond timestamp> + suffix`` and, should that be
taken as well, appends a counter.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, Set

from common.base.logging import get_logger
from common.shared.utils import safe_filename

from .models import RenamePlan

log = get_logger(__name__)

Clock = Callable[[], datetime]


def collision_timestamp(moment: datetime) -> str:
    """Format ``moment`` as ``YYYYMMDDHHMMSSmmm``."""
    return moment.strftime("%Y%m%d%H%M%S") + f"{moment.microsecond // 1000:03d}"


def validate_prefix(prefix: str) -> str:
    if not prefix:
        raise ValueError("Prefix cannot be empty")
    if safe_filename(prefix) != prefix:
        raise ValueError(f"Prefix contains characters not allowed in filenames: {prefix!r}")
    return prefix


class RenamePlanner:
    """Compute rename plans in enumeration order, remembering claimed targets."""

    def __init__(self, prefix: str, clock: Clock = datetime.now):
        self.prefix = validate_prefix(prefix)
        self.clock = clock
        self._claimed: Set[Path] = set()

    def _is_taken(self, candidate: Path) -> bool:
        return candidate in self._claimed or candidate.exists()

    def _first_free(self, candidate: Path) -> Path:
        stem, suffix = candidate.stem, candidate.suffix
        counter = 1
        while self._is_taken(candidate):
            candidate = candidate.with_name(f"{stem}_{counter}{suffix}")
            counter += 1
        return candidate

    def plan(self, path: Path) -> RenamePlan:
        if path.name.startswith(self.prefix):
            log.debug(f"Already prefixed: {path.name}")
            return RenamePlan(source=path, target=path, already_prefixed=True)

        target = path.with_name(self.prefix + path.name)
        collision = False
        if self._is_taken(target):
            collision = True
            stamped = path.with_name(
                f"{self.prefix}{path.stem}_{collision_timestamp(self.clock())}{path.suffix}"
            )
            target = self._first_free(stamped)
            log.warning(f"⚠️ Target exists for {path.name}; using {target.name}")

        self._claimed.add(target)
        return RenamePlan(source=path, target=target, collision=collision)
