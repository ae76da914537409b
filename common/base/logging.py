"""
common.base.logging

Logging for the prefix tools: a Rich (or ANSI) console handler with emoji
level labels plus one timestamped log file per run. Defaults for level, Rich
toggle, log directory and file prefix come from the ``logging`` section of
configs/config.yaml.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from rich.logging import RichHandler
from rich.text import Text

ROOT_LOGGER_NAME = "prefixer"

ANSI_RESET = "\033[0m"

LEVEL_STYLES: Dict[int, Dict[str, str]] = {
    logging.DEBUG: {"emoji": "🐛", "ansi": "\033[36m", "rich": "bright_cyan"},
    logging.INFO: {"emoji": "ℹ️", "ansi": "\033[32m", "rich": "green"},
    logging.WARNING: {"emoji": "⚠️", "ansi": "\033[33m", "rich": "yellow"},
    logging.ERROR: {"emoji": "❌", "ansi": "\033[31m", "rich": "red"},
    logging.CRITICAL: {"emoji": "💥", "ansi": "\033[95m", "rich": "bold magenta"},
}
DEFAULT_STYLE = LEVEL_STYLES[logging.INFO]


def _style(record: logging.LogRecord) -> Dict[str, str]:
    return LEVEL_STYLES.get(record.levelno, DEFAULT_STYLE)


class LevelEmojiFilter(logging.Filter):
    """Attach ``level_emoji`` and a colored ``level_display`` to every record."""

    def __init__(self, color: bool = False):
        super().__init__()
        self.color = color

    def filter(self, record: logging.LogRecord) -> bool:
        style = _style(record)
        record.level_emoji = style["emoji"]  # type: ignore[attr-defined]
        display = f"{style['emoji']} {record.levelname}"
        if self.color:
            display = f"{style['ansi']}{display}{ANSI_RESET}"
        record.level_display = display  # type: ignore[attr-defined]
        return True


class PrefixRichHandler(RichHandler):
    """Rich console handler with emoji-enhanced level column."""

    def get_level_text(self, record: logging.LogRecord) -> Text:
        style = _style(record)
        text = Text()
        text.append(f"{style['emoji']} ", style=style["rich"])
        text.append(record.levelname, style=style["rich"])
        return text


# ----------------------------------------------------------------------
# CONFIG-DRIVEN DEFAULTS
# ----------------------------------------------------------------------

_DEFAULT_SETTINGS_CACHE: Dict[str, Any] | None = None


def _normalize_level(value: Any) -> str:
    if isinstance(value, str):
        candidate = value.strip().upper()
        if candidate in logging._nameToLevel:  # type: ignore[attr-defined]
            return candidate
    elif isinstance(value, int):
        label = logging.getLevelName(value)
        if isinstance(label, str) and not label.startswith("Level "):
            return label
    return "INFO"


def normalize_use_rich(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1", "on"}:
            return True
        if lowered in {"false", "no", "0", "off"}:
            return False
    return None


def _load_default_logging_settings() -> Dict[str, Any]:
    global _DEFAULT_SETTINGS_CACHE
    if _DEFAULT_SETTINGS_CACHE is None:
        from common.shared.loader import load_logging_config

        try:
            raw = load_logging_config(None)
        except (OSError, ValueError):
            raw = {}

        _DEFAULT_SETTINGS_CACHE = {
            "level": _normalize_level(raw.get("level")),
            "use_rich": normalize_use_rich(raw.get("use_rich")),
            "log_dir": raw.get("log_dir"),
            "file_prefix": raw.get("file_prefix"),
        }
    return dict(_DEFAULT_SETTINGS_CACHE)


# ----------------------------------------------------------------------
# SETUP / TEARDOWN
# ----------------------------------------------------------------------

def setup_logging(
    level: str | int | None = None,
    use_rich: Optional[bool] = None,
    log_dir: Optional[Path | str] = None,
    file_prefix: Optional[str] = None,
) -> logging.Logger:
    """
    Configure and return the root prefixer logger.

    Args:
        level: Desired logging level. Defaults to the value in config.yaml (INFO if unset).
        use_rich: Force-enable or disable the Rich handler. None honors config (Rich on).
        log_dir: Directory to store log files. Defaults to config.yaml or ./logs.
        file_prefix: Prefix for generated log filenames.
    """
    defaults = _load_default_logging_settings()
    resolved_level = _normalize_level(level if level is not None else defaults.get("level"))
    rich_choice = use_rich if use_rich is not None else defaults.get("use_rich")
    resolved_use_rich = True if rich_choice is None else bool(rich_choice)
    resolved_log_dir = Path(log_dir or defaults.get("log_dir") or "./logs").expanduser()
    resolved_file_prefix = file_prefix or defaults.get("file_prefix") or "prefixer"

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(resolved_level)
    shutdown_logging()

    console_handler: logging.Handler
    if resolved_use_rich:
        console_handler = PrefixRichHandler(
            rich_tracebacks=True,
            markup=False,
            show_path=False,
            log_time_format="[%X]",
        )
    else:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.addFilter(LevelEmojiFilter(color=True))
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s %(level_display)s %(name)s: %(message)s", datefmt="%H:%M:%S")
        )
    logger.addHandler(console_handler)

    resolved_log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    log_file_path = resolved_log_dir / f"{resolved_file_prefix}_{timestamp}.log"

    file_handler = logging.FileHandler(log_file_path, mode="a", encoding="utf-8")
    file_handler.addFilter(LevelEmojiFilter())
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(level_emoji)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(file_handler)

    logger.propagate = False
    logger.debug(
        "Logger initialized at level %s (Rich=%s), file %s",
        resolved_level,
        "ON" if resolved_use_rich else "OFF",
        log_file_path.resolve(),
    )
    return logger


def shutdown_logging() -> None:
    """Close and detach every handler of the root prefixer logger."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Retrieve a logger under the ``prefixer`` namespace."""
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
