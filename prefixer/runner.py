"""
prefixer.runner

Drive one run: resolve paths, enumerate, then plan, execute and audit each
file in turn before appending the summary record.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from common.base.logging import get_logger
from common.shared.utils import Progress

from .audit import AuditLog
from .enumerator import list_matching_files
from .executor import ActionExecutor, ConfirmFn
from .models import RenameSettings, RunSummary
from .planner import RenamePlanner, validate_prefix
from .resolver import resolve_paths

log = get_logger(__name__)


def run_prefix(
    settings: RenameSettings,
    *,
    confirm: Optional[ConfirmFn] = None,
    show_progress: bool = False,
    clock: Callable[[], datetime] = datetime.now,
) -> RunSummary:
    """
    Prefix every matching file of ``settings.source``.

    Args:
        settings: Run configuration.
        confirm: Optional per-action gate; returning False records the file as
            ``Preview`` without touching it.
        show_progress: Display a tqdm progress bar over the files.
        clock: Time source for collision names and audit timestamps.

    Returns:
        RunSummary with one FileTask per processed file.

    Raises:
        PathNotFoundError: The source folder does not exist.
        DirectoryCreateError: The backup or log folder cannot be created.
        ValueError: The prefix is not a valid filename fragment.
    """
    validate_prefix(settings.prefix)
    paths = resolve_paths(settings.source, settings.backup_dir, settings.log_path)
    summary = RunSummary()

    files = list_matching_files(paths.source, settings.filter, exclude=[paths.log_path])
    if not files:
        log.warning(f"⚠️ No files matching '{settings.filter}' in {paths.source}; nothing to do.")
        return summary

    mode = "dry-run" if settings.dry_run else "live"
    log.info(f"🚀 Processing {len(files)} file(s) in {paths.source} ({mode}, prefix '{settings.prefix}')")

    planner = RenamePlanner(settings.prefix, clock=clock)
    executor = ActionExecutor(
        paths.source,
        backup_dir=paths.backup_dir,
        dry_run=settings.dry_run,
        max_retries=settings.max_retries,
        retry_delay=settings.retry_delay,
        confirm=confirm,
    )
    audit = AuditLog(paths.log_path, clock=clock)

    for path in Progress(files, desc="Prefixing", disable=not show_progress):
        task = executor.execute(planner.plan(path))
        audit.write(task)
        summary.record(task)

    audit.write_summary(summary)
    log.debug("Status breakdown: " + ", ".join(f"{status}={count}" for status, count in summary.by_status().items()))
    log.info(f"📊 {summary.message}")
    log.info(f"📄 Audit log: {paths.log_path}")
    return summary
