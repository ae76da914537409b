"""Data model for the prefix pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

DEFAULT_FILTER = "*.txt"
DEFAULT_PREFIX = "finance_"
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 2.0
DEFAULT_LOG_NAME = "rename_log.csv"
QUARANTINE_DIR_NAME = "Failed"


class TaskStatus(str, Enum):
    SKIPPED = "Skipped"
    PREVIEW = "Preview"
    DRY_RUN = "DryRun"
    SUCCESS = "Success"
    FAILED = "Failed"
    SUMMARY = "Summary"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RenameSettings:
    source: Path
    filter: str = DEFAULT_FILTER
    prefix: str = DEFAULT_PREFIX
    backup_dir: Optional[Path] = None
    log_path: Optional[Path] = None
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY
    dry_run: bool = False

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {self.max_retries}")
        if self.retry_delay < 0:
            raise ValueError(f"retry_delay cannot be negative, got {self.retry_delay}")


@dataclass(frozen=True)
class RenamePlan:
    source: Path
    target: Path
    already_prefixed: bool = False
    collision: bool = False

    @property
    def action(self) -> str:
        return f"Rename '{self.source.name}' to '{self.target.name}'"


@dataclass(frozen=True)
class FileTask:
    original_path: Path
    target_path: Optional[Path]
    status: TaskStatus
    message: str = ""
    attempts: int = 0


@dataclass
class RunSummary:
    """Counters and records accumulated over one run."""

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    previewed: int = 0
    simulated: int = 0
    tasks: List[FileTask] = field(default_factory=list)

    def record(self, task: FileTask) -> None:
        self.tasks.append(task)
        self.total += 1
        if task.status is TaskStatus.SUCCESS:
            self.succeeded += 1
        elif task.status is TaskStatus.FAILED:
            self.failed += 1
        elif task.status is TaskStatus.SKIPPED:
            self.skipped += 1
        elif task.status is TaskStatus.PREVIEW:
            self.previewed += 1
        elif task.status is TaskStatus.DRY_RUN:
            self.simulated += 1

    def by_status(self) -> Dict[TaskStatus, int]:
        counts: Dict[TaskStatus, int] = {}
        for task in self.tasks:
            counts[task.status] = counts.get(task.status, 0) + 1
        return counts

    @property
    def message(self) -> str:
        """Summary line; Preview and DryRun counts appear only when non-zero."""
        parts = [
            f"Processed: {self.total}",
            f"Succeeded: {self.succeeded}",
            f"Failed: {self.failed}",
            f"Skipped: {self.skipped}",
        ]
        if self.previewed:
            parts.append(f"Preview: {self.previewed}")
        if self.simulated:
            parts.append(f"DryRun: {self.simulated}")
        return ", ".join(parts)
