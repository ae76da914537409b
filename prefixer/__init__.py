"""Batch filename prefixing with backup, retry, quarantine and a CSV audit log."""

from .models import FileTask, RenamePlan, RenameSettings, RunSummary, TaskStatus  # noqa: F401
from .runner import run_prefix  # noqa: F401

__all__ = [
    "FileTask",
    "RenamePlan",
    "RenameSettings",
    "RunSummary",
    "TaskStatus",
    "run_prefix",
]
