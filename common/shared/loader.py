"""
Shared configuration loading and validation helpers.

Provides:
 - `load_config`: basic YAML loader
 - `load_logging_config`: the top-level `logging` section
 - `load_task_config`: validated configuration for a given task
 - `cli_main`: command-line entry point exposed as the `prefix-config` script
"""

from __future__ import annotations

import argparse
import base64
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from common.base.file_io import dump_json, read_yaml


ConfigDict = Dict[str, Any]

DEFAULT_CONFIG_FILENAME = "config.yaml"
LOGGING_SECTION_KEY = "logging"
TASKS_SECTION_KEY = "tasks"
CONFIGS_DIR = Path(__file__).resolve().parents[2] / "configs"


TASK_SCHEMAS: Dict[str, Dict[str, Iterable[str]]] = {
    "file_prefix": {
        "required": [],
        "optional": [
            "source",
            "filter",
            "prefix",
            "backup_dir",
            "log_path",
            "max_retries",
            "retry_delay",
            "dry_run",
            "what_if",
        ],
    },
}

FIELD_ALIASES = {
    "root": "source",
    "backup": "backup_dir",
    "log": "log_path",
    "retries": "max_retries",
}

SINGLE_PATH_FIELDS = {"source", "backup_dir", "log_path"}
BOOLEAN_FIELDS = {"dry_run", "what_if"}
INTEGER_FIELDS = {"max_retries"}
FLOAT_FIELDS = {"retry_delay"}
STRING_FIELDS = {"filter", "prefix"}
LOGGING_ALLOWED_KEYS = {"level", "use_rich", "log_dir", "file_prefix"}

YES_VALUES = {"1", "true", "yes", "y", "on"}
NO_VALUES = {"0", "false", "no", "n", "off"}


def load_config(path: str | Path | None) -> Mapping[str, Any] | Dict[str, Any]:
    if not path:
        return {}

    cfg_path = Path(path).expanduser()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {cfg_path}")

    data = read_yaml(cfg_path)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"Configuration root must be a mapping in {cfg_path}")

    return data or {}


def load_logging_config(config_path: str | Path | None = None) -> Dict[str, Any]:
    root = load_config(config_path or _default_config_path())
    return _extract_logging_settings(root)


def load_task_config(task: str, config_path: str | Path | None = None) -> ConfigDict:
    """
    Load and validate the configuration block of ``task``.

    The returned mapping only holds keys that were present in the file, with
    paths expanded and scalar types coerced. Bookkeeping entries are stored
    under dunder keys (``__task__``, ``__config_path__``, ``__logging__``).
    """
    if task not in TASK_SCHEMAS:
        raise ValueError(f"Unknown task '{task}'. Expected one of: {', '.join(sorted(TASK_SCHEMAS))}")

    resolved_path = _resolve_config_path(config_path)
    root_config = dict(load_config(resolved_path))
    task_config_raw = _extract_task_config(root_config, task, resolved_path)

    task_logging_override: Dict[str, Any] = {}
    if "logging" in task_config_raw:
        logging_payload = task_config_raw.pop("logging")
        if not isinstance(logging_payload, Mapping):
            raise ValueError(
                f"Task '{task}' logging section must be a mapping in {resolved_path}"
            )
        task_logging_override = dict(logging_payload)
        invalid_logging_keys = [
            key for key in task_logging_override if key not in LOGGING_ALLOWED_KEYS
        ]
        if invalid_logging_keys:
            invalid_keys = ", ".join(sorted(invalid_logging_keys))
            raise ValueError(
                f"Task '{task}' logging section contains unsupported keys in {resolved_path}: {invalid_keys}"
            )
    config = _apply_aliases(task_config_raw)

    schema = TASK_SCHEMAS[task]
    required = set(schema.get("required", []))
    optional = set(schema.get("optional", []))
    allowed_keys = required | optional

    missing = [key for key in required if not config.get(key)]
    if missing:
        raise ValueError(
            f"Configuration '{resolved_path}' missing required fields for task '{task}': {', '.join(missing)}"
        )

    unexpected = [key for key in config if key not in allowed_keys]
    if unexpected:
        raise ValueError(
            f"Configuration '{resolved_path}' contains unsupported keys for task '{task}': {', '.join(sorted(unexpected))}"
        )

    normalized: ConfigDict = {}
    for key in allowed_keys:
        if key not in config:
            continue
        value = config[key]
        if value is None:
            continue

        if key in SINGLE_PATH_FIELDS:
            normalized[key] = _normalize_single_path(value)
        elif key in BOOLEAN_FIELDS:
            normalized[key] = _coerce_yes_no(value, key, resolved_path)
        elif key in INTEGER_FIELDS:
            normalized[key] = _coerce_int(value, key, resolved_path)
        elif key in FLOAT_FIELDS:
            normalized[key] = _coerce_float(value, key, resolved_path)
        elif key in STRING_FIELDS:
            normalized[key] = str(value)
        else:
            normalized[key] = value

    normalized["__task__"] = task
    normalized["__config_path__"] = str(resolved_path)

    merged_logging = _extract_logging_settings(root_config)
    if task_logging_override:
        merged_logging.update(task_logging_override)
    merged_logging = _apply_logging_defaults(merged_logging, normalized.get("source"))
    if merged_logging:
        normalized["__logging__"] = merged_logging
    return normalized


def _apply_aliases(config: Mapping[str, Any]) -> ConfigDict:
    result: ConfigDict = {}
    for key, value in config.items():
        canonical = FIELD_ALIASES.get(key, key)
        result[canonical] = value
    return result


def _normalize_single_path(value: Any) -> str:
    return str(Path(str(value)).expanduser())


def _coerce_yes_no(value: object, key: str, config_path: Path) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in YES_VALUES:
        return True
    if text in NO_VALUES:
        return False
    raise ValueError(
        f"Configuration '{config_path}' field '{key}' must be a boolean (true/false, yes/no)."
    )


def _coerce_int(value: Any, field: str, config_path: Path) -> int:
    if isinstance(value, bool):
        raise ValueError(
            f"Configuration '{config_path}' field '{field}' must be an integer."
        )
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"Configuration '{config_path}' field '{field}' must be an integer."
        ) from exc


def _coerce_float(value: Any, field: str, config_path: Path) -> float:
    if isinstance(value, bool):
        raise ValueError(
            f"Configuration '{config_path}' field '{field}' must be a number."
        )
    try:
        return float(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"Configuration '{config_path}' field '{field}' must be a number."
        ) from exc


def _default_config_path() -> Optional[Path]:
    candidate = CONFIGS_DIR / DEFAULT_CONFIG_FILENAME
    return candidate if candidate.exists() else None


def _resolve_config_path(config_path: str | Path | None) -> Path:
    if config_path:
        return Path(config_path).expanduser()

    candidate = _default_config_path()
    if candidate is None:
        raise FileNotFoundError(
            f"No configuration path provided and default file not found: {CONFIGS_DIR / DEFAULT_CONFIG_FILENAME}"
        )
    return candidate


def _extract_task_config(root: Mapping[str, Any], task: str, config_path: Path) -> ConfigDict:
    if TASKS_SECTION_KEY in root:
        tasks_section = root.get(TASKS_SECTION_KEY) or {}
        if not isinstance(tasks_section, Mapping):
            raise ValueError(f"'tasks' section must be a mapping in {config_path}")
        if task not in tasks_section:
            raise ValueError(
                f"Configuration '{config_path}' missing task '{task}' under 'tasks' section"
            )
        task_payload = tasks_section[task] or {}
        if not isinstance(task_payload, Mapping):
            raise ValueError(f"Task '{task}' entry must be a mapping in {config_path}")
        return dict(task_payload)

    # Single-task files carry the task keys at the root.
    payload = dict(root)
    payload.pop(LOGGING_SECTION_KEY, None)
    return payload


def _extract_logging_settings(root: Mapping[str, Any]) -> Dict[str, Any]:
    section = root.get(LOGGING_SECTION_KEY, {})
    return dict(section) if isinstance(section, Mapping) else {}


def _apply_logging_defaults(
    logging_cfg: Dict[str, Any],
    source: Optional[str],
) -> Dict[str, Any]:
    if not logging_cfg:
        return {}

    cfg = dict(logging_cfg)
    base_root = Path(source).expanduser().resolve() if source else None
    log_dir_value = cfg.get("log_dir")

    if log_dir_value:
        path = Path(str(log_dir_value)).expanduser()
        if path.is_absolute():
            cfg["log_dir"] = str(path.resolve())
        elif base_root:
            cfg["log_dir"] = str((base_root / path).resolve())
        else:
            cfg["log_dir"] = str(path.resolve())

    return cfg


def cli_main(argv: Optional[Iterable[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Load and validate prefix tool YAML configs.")
    parser.add_argument("task", help=f"Task identifier ({', '.join(sorted(TASK_SCHEMAS))})")
    parser.add_argument("config_path", nargs="?", help="Path to YAML file (defaults to configs/config.yaml)")
    parser.add_argument(
        "--format",
        choices={"b64", "json"},
        default="json",
        help="Output format: raw JSON (default) or base64-encoded JSON.",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    config = load_task_config(args.task, args.config_path)
    payload = dump_json(config)

    if args.format == "json":
        print(payload)
    else:
        print(base64.b64encode(payload.encode("utf-8")).decode("utf-8"))
    return 0


if __name__ == "__main__":
    raise SystemExit(cli_main())
