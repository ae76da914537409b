from __future__ import annotations

import base64
import json
import subprocess
import sys
from pathlib import Path
import textwrap

import pytest

from common.shared.loader import load_task_config


def _write_config(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(content, encoding="utf-8")
    return path


def _wrap_task_config(body: str, logging_body: str | None = None) -> str:
    logging_block = (logging_body or "level: INFO").strip()
    parts: list[str] = []
    parts.append("logging:\n")
    parts.append(textwrap.indent(logging_block, "  "))
    parts.append("\ntasks:\n")
    parts.append("  file_prefix:\n")
    parts.append(textwrap.indent(body.strip(), "    "))
    parts.append("\n")
    return "".join(parts)


def test_load_task_config_coerces_types(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "prefix.yaml",
        _wrap_task_config(
            f"source: '{tmp_path}'\n"
            "prefix: hr_\n"
            "filter: '*.csv'\n"
            "max_retries: '5'\n"
            "retry_delay: 0.5\n"
            "dry_run: yes\n"
        ),
    )

    config = load_task_config("file_prefix", cfg_path)

    assert config["source"] == str(tmp_path)
    assert config["prefix"] == "hr_"
    assert config["filter"] == "*.csv"
    assert config["max_retries"] == 5
    assert config["retry_delay"] == 0.5
    assert config["dry_run"] is True
    assert config["__task__"] == "file_prefix"
    assert config["__logging__"]["level"] == "INFO"


def test_load_task_config_aliases(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "alias.yaml",
        _wrap_task_config(
            f"root: '{tmp_path}'\n"
            f"backup: '{tmp_path / 'bk'}'\n"
            f"log: '{tmp_path / 'audit.csv'}'\n"
            "retries: 2\n"
        ),
    )

    config = load_task_config("file_prefix", cfg_path)

    assert config["source"] == str(tmp_path)
    assert config["backup_dir"] == str(tmp_path / "bk")
    assert config["log_path"] == str(tmp_path / "audit.csv")
    assert config["max_retries"] == 2


def test_load_task_config_rejects_unknown_keys(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "bad.yaml",
        _wrap_task_config("suffix: _done\n"),
    )

    with pytest.raises(ValueError, match="unsupported keys"):
        load_task_config("file_prefix", cfg_path)


def test_load_task_config_rejects_bad_integer(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "bad_int.yaml",
        _wrap_task_config("max_retries: many\n"),
    )

    with pytest.raises(ValueError, match="max_retries"):
        load_task_config("file_prefix", cfg_path)


def test_load_task_config_unknown_task(tmp_path: Path) -> None:
    cfg_path = _write_config(tmp_path, "x.yaml", _wrap_task_config("prefix: a_\n"))

    with pytest.raises(ValueError, match="Unknown task"):
        load_task_config("vid_rename", cfg_path)


def test_single_task_file_without_tasks_section(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "flat.yaml",
        "logging:\n  level: DEBUG\nprefix: ops_\ndry_run: false\n",
    )

    config = load_task_config("file_prefix", cfg_path)

    assert config["prefix"] == "ops_"
    assert config["dry_run"] is False
    assert config["__logging__"]["level"] == "DEBUG"


def test_relative_log_dir_anchored_to_source(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "logs.yaml",
        _wrap_task_config(
            f"source: '{tmp_path}'\n",
            logging_body="level: WARNING\nlog_dir: ./logs",
        ),
    )

    config = load_task_config("file_prefix", cfg_path)

    assert config["__logging__"]["log_dir"] == str((tmp_path / "logs").resolve())


def test_task_logging_override(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "override.yaml",
        _wrap_task_config(
            "prefix: a_\n"
            "logging:\n"
            "  level: DEBUG\n"
            "  file_prefix: per_task\n",
            logging_body="level: WARNING\nfile_prefix: global_default",
        ),
    )

    logging_cfg = load_task_config("file_prefix", cfg_path)["__logging__"]

    assert logging_cfg["level"] == "DEBUG"
    assert logging_cfg["file_prefix"] == "per_task"


def test_load_task_config_logging_requires_mapping(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "invalid_logging.yaml",
        _wrap_task_config("logging: not_a_mapping\n"),
    )

    with pytest.raises(ValueError):
        load_task_config("file_prefix", cfg_path)


def test_cli_base64_encoding(tmp_path: Path) -> None:
    cfg_path = _write_config(
        tmp_path,
        "prefix.yaml",
        _wrap_task_config(f"source: '{tmp_path}'\ndry_run: true\n"),
    )

    output = subprocess.check_output(
        [sys.executable, "-m", "common.shared.loader", "file_prefix", str(cfg_path), "--format", "b64"],
        cwd=Path(__file__).resolve().parent.parent.parent,
    )

    config = json.loads(base64.b64decode(output.strip()).decode("utf-8"))

    assert config["source"] == str(tmp_path)
    assert config["dry_run"] is True
    assert config["__logging__"]["level"] == "INFO"


def test_load_task_config_malformed_yaml(tmp_path: Path) -> None:
    cfg_path = _write_config(tmp_path, "broken.yaml", "tasks:\n  file_prefix: [unclosed\n")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_task_config("file_prefix", cfg_path)
