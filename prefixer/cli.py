"""Command-line entry point for the file prefix task.

Installed as the ``file-prefix`` console script and runnable with
``python -m prefixer``. Values come from built-in defaults, then the
``file_prefix`` task of the YAML config, then command-line flags.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import argcomplete

from common.base.logging import get_logger, normalize_use_rich, setup_logging, shutdown_logging
from common.shared.loader import DEFAULT_CONFIG_FILENAME, CONFIGS_DIR, load_task_config
from common.shared.utils import confirm as prompt_confirm

from .errors import ConfigError
from .executor import ConfirmFn, decline_all
from .models import (
    DEFAULT_FILTER,
    DEFAULT_MAX_RETRIES,
    DEFAULT_PREFIX,
    DEFAULT_RETRY_DELAY,
    RenameSettings,
)
from .runner import run_prefix

TASK_NAME = "file_prefix"
DEFAULT_CONFIG_PATH = CONFIGS_DIR / DEFAULT_CONFIG_FILENAME

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_FATAL = 2
EXIT_INTERRUPTED = 130

log = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="file-prefix",
        description="Prepend a prefix to every matching file in a folder, with backup, retry and a CSV audit log.",
    )
    parser.add_argument("source", nargs="?", help="Folder to scan (defaults to 'source' from config).")
    parser.add_argument("--filter", "-f", help=f"Glob pattern of files to process (default: {DEFAULT_FILTER}).")
    parser.add_argument("--prefix", "-p", help=f"Prefix to prepend (default: {DEFAULT_PREFIX}).")
    parser.add_argument("--backup-dir", help="Copy each original here before renaming it.")
    parser.add_argument("--log-path", help="CSV audit log (default: rename_log.csv beside the tool).")
    parser.add_argument("--max-retries", type=int, help=f"Rename attempts per file (default: {DEFAULT_MAX_RETRIES}).")
    parser.add_argument(
        "--retry-delay",
        type=float,
        help=f"Seconds to wait between attempts (default: {DEFAULT_RETRY_DELAY:g}).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Simulate renames without modifying files.",
    )
    gate = parser.add_mutually_exclusive_group()
    gate.add_argument("--confirm", action="store_true", help="Ask before each rename; declined files are recorded as Preview.")
    gate.add_argument("--what-if", action="store_true", help="Record every eligible file as Preview without prompting.")
    parser.add_argument("--config", "-c", help="Path to configuration YAML (defaults to configs/config.yaml).")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging verbosity (default: config or INFO).",
    )
    parser.add_argument("--log-dir", help="Directory for the run's diagnostic log file.")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")
    return parser


def _load_config(config_arg: Optional[str]) -> Dict[str, Any]:
    if config_arg:
        return load_task_config(TASK_NAME, Path(config_arg).expanduser().resolve())
    if DEFAULT_CONFIG_PATH.exists():
        return load_task_config(TASK_NAME, DEFAULT_CONFIG_PATH)
    return {}


def _pick(cli_value: Any, cfg: Dict[str, Any], key: str, default: Any = None) -> Any:
    if cli_value is not None:
        return cli_value
    return cfg.get(key, default)


def settings_from_args(args: argparse.Namespace, cfg: Dict[str, Any]) -> RenameSettings:
    source = _pick(args.source, cfg, "source")
    if not source:
        raise ConfigError("A source folder is required (positional argument or 'source' in config).")
    backup_dir = _pick(args.backup_dir, cfg, "backup_dir")
    log_path = _pick(args.log_path, cfg, "log_path")
    return RenameSettings(
        source=Path(source),
        filter=_pick(args.filter, cfg, "filter", DEFAULT_FILTER),
        prefix=_pick(args.prefix, cfg, "prefix", DEFAULT_PREFIX),
        backup_dir=Path(backup_dir) if backup_dir else None,
        log_path=Path(log_path) if log_path else None,
        max_retries=_pick(args.max_retries, cfg, "max_retries", DEFAULT_MAX_RETRIES),
        retry_delay=_pick(args.retry_delay, cfg, "retry_delay", DEFAULT_RETRY_DELAY),
        dry_run=args.dry_run or bool(cfg.get("dry_run", False)),
    )


def _confirm_fn(args: argparse.Namespace, cfg: Dict[str, Any]) -> Optional[ConfirmFn]:
    if args.confirm:
        return prompt_confirm
    if args.what_if or cfg.get("what_if"):
        return decline_all
    return None


def _configure_logging(args: argparse.Namespace, logging_cfg: Dict[str, Any]) -> None:
    setup_logging(
        level=args.log_level or logging_cfg.get("level"),
        use_rich=normalize_use_rich(logging_cfg.get("use_rich")),
        log_dir=args.log_dir or logging_cfg.get("log_dir"),
        file_prefix=logging_cfg.get("file_prefix"),
    )


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        cfg = _load_config(args.config)
        settings = settings_from_args(args, cfg)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))

    _configure_logging(args, cfg.get("__logging__") or {})
    try:
        summary = run_prefix(
            settings,
            confirm=_confirm_fn(args, cfg),
            show_progress=not args.no_progress,
        )
    except (OSError, ValueError) as exc:
        log.error(f"❌ {exc}")
        return EXIT_FATAL
    except KeyboardInterrupt:
        log.warning("⚠️ Operation cancelled by user.")
        return EXIT_INTERRUPTED
    finally:
        shutdown_logging()

    return EXIT_FAILURES if summary.failed else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
