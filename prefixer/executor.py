"""
prefixer.executor

Carry a RenamePlan to a terminal FileTask.

Per file the executor moves through ``Planned -> ConfirmationPending ->
Executing -> Succeeded | Failed``, with early exits to ``Skipped`` (already
prefixed), ``Preview`` (vetoed at the confirmation gate) and ``DryRun``.
Only the live path touches the disk: optional backup copy, rename with a fixed
delay between attempts, and quarantine into ``<source>/Failed`` once every
attempt has failed.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, Optional

from common.base.fs import ensure_dir, unique_path
from common.base.logging import get_logger
from common.base.ops import copy_file, move_file, rename_file

from .errors import BackupError, QuarantineError, RenameError
from .models import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_DELAY,
    QUARANTINE_DIR_NAME,
    FileTask,
    RenamePlan,
    TaskStatus,
)

log = get_logger(__name__)

ConfirmFn = Callable[[str], bool]


def decline_all(action: str) -> bool:
    """Confirmation gate that vetoes every action (what-if mode)."""
    return False


class ActionExecutor:
    def __init__(
        self,
        source_dir: Path,
        *,
        backup_dir: Optional[Path] = None,
        dry_run: bool = False,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        confirm: Optional[ConfirmFn] = None,
    ):
        self.source_dir = source_dir
        self.backup_dir = backup_dir
        self.dry_run = dry_run
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.confirm = confirm

    @property
    def quarantine_dir(self) -> Path:
        return self.source_dir / QUARANTINE_DIR_NAME

    # ------------------------------------------------------------------
    # Mutation predicate
    # ------------------------------------------------------------------

    def simulated_status(self, plan: RenamePlan) -> Optional[TaskStatus]:
        """
        Return the status a simulated run records for ``plan``, or None when the
        plan may mutate the disk. The confirmation gate is asked first; dry-run
        only applies to actions that passed it.
        """
        if self.confirm is not None and not self.confirm(plan.action):
            return TaskStatus.PREVIEW
        if self.dry_run:
            return TaskStatus.DRY_RUN
        return None

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _backup(self, source: Path) -> None:
        if self.backup_dir is None:
            return
        try:
            copy_file(source, self.backup_dir / source.name, overwrite=True)
        except OSError as exc:
            raise BackupError(f"Backup of {source.name} to {self.backup_dir} failed: {exc}") from exc
        log.debug(f"Backed up {source.name} → {self.backup_dir}")

    def _quarantine(self, source: Path) -> Path:
        try:
            destination = unique_path(ensure_dir(self.quarantine_dir) / source.name)
            return move_file(source, destination)
        except OSError as exc:
            raise QuarantineError(f"Could not move {source.name} to {self.quarantine_dir}: {exc}") from exc

    def _rename_with_retry(self, plan: RenamePlan) -> FileTask:
        last_error: Optional[OSError] = None
        for attempt in range(1, self.max_retries + 1):
            try:
                rename_file(plan.source, plan.target)
            except OSError as exc:
                last_error = exc
                if attempt < self.max_retries:
                    log.warning(
                        f"⚠️ Attempt {attempt}/{self.max_retries} failed for {plan.source.name}: {exc}; "
                        f"retrying in {self.retry_delay:g}s"
                    )
                    time.sleep(self.retry_delay)
                continue
            log.info(f"✅ Renamed {plan.source.name} → {plan.target.name} (attempt {attempt})")
            message = "Target existed; timestamped name used" if plan.collision else ""
            return FileTask(plan.source, plan.target, TaskStatus.SUCCESS, message, attempt)

        error = RenameError(f"Rename failed after {self.max_retries} attempt(s): {last_error}")
        log.error(f"❌ {plan.source.name}: {error}")
        try:
            moved = self._quarantine(plan.source)
            log.warning(f"⚠️ Quarantined {plan.source.name} → {moved}")
        except QuarantineError as exc:
            log.warning(f"⚠️ {exc}")
        return FileTask(plan.source, plan.target, TaskStatus.FAILED, str(error), self.max_retries)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def execute(self, plan: RenamePlan) -> FileTask:
        if plan.already_prefixed:
            log.info(f"⏭️ Skipped (already prefixed): {plan.source.name}")
            return FileTask(plan.source, plan.source, TaskStatus.SKIPPED, "Already prefixed")

        simulated = self.simulated_status(plan)
        if simulated is TaskStatus.PREVIEW:
            log.info(f"[PREVIEW] {plan.action}")
            return FileTask(plan.source, plan.target, simulated, "Declined at confirmation")
        if simulated is TaskStatus.DRY_RUN:
            log.info(f"[DRY-RUN] {plan.action}")
            return FileTask(plan.source, plan.target, simulated, "Dry run; no changes made")

        try:
            self._backup(plan.source)
        except BackupError as exc:
            log.warning(f"⚠️ {exc}; continuing with rename")

        return self._rename_with_retry(plan)
