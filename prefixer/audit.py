"""
prefixer.audit

Append-only CSV audit log: one row per file decision plus a trailing summary
row per run. Rows are written as soon as a decision is made, so a crashed run
leaves a valid prefix of the log behind.
"""

from __future__ import annotations

import csv
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List

from common.base.file_io import open_file
from common.base.fs import ensure_parent
from common.base.logging import get_logger

from .models import FileTask, RunSummary, TaskStatus

log = get_logger(__name__)

AUDIT_FIELDS = ["Timestamp", "OriginalPath", "TargetPath", "Status", "Message", "Attempts"]
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class AuditLog:
    """CSV sink for FileTask records."""

    def __init__(self, path: Path, clock: Callable[[], datetime] = datetime.now):
        self.path = path
        self.clock = clock

    def _needs_header(self) -> bool:
        return not self.path.exists() or self.path.stat().st_size == 0

    def _append(self, row: Dict[str, str]) -> None:
        ensure_parent(self.path)
        header = self._needs_header()
        with open_file(self.path, "a", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=AUDIT_FIELDS)
            if header:
                writer.writeheader()
            writer.writerow(row)

    def write(self, task: FileTask) -> None:
        self._append({
            "Timestamp": self.clock().strftime(TIMESTAMP_FORMAT),
            "OriginalPath": str(task.original_path) if task.original_path else "",
            "TargetPath": str(task.target_path) if task.target_path else "",
            "Status": task.status.value,
            "Message": task.message,
            "Attempts": str(task.attempts),
        })

    def write_summary(self, summary: RunSummary) -> None:
        self._append({
            "Timestamp": self.clock().strftime(TIMESTAMP_FORMAT),
            "OriginalPath": "",
            "TargetPath": "",
            "Status": TaskStatus.SUMMARY.value,
            "Message": summary.message,
            "Attempts": "0",
        })
        log.debug(f"Summary appended to {self.path}")


def read_records(path: Path) -> List[Dict[str, str]]:
    """Return every row of an audit log as a dict keyed by the header names."""
    with open_file(path, "r", newline="") as handle:
        return list(csv.DictReader(handle))
