from __future__ import annotations

from pathlib import Path

import pytest

from prefixer.planner import RenamePlanner, collision_timestamp, validate_prefix


def test_plan_skips_already_prefixed(tmp_path: Path) -> None:
    path = tmp_path / "finance_old.txt"
    path.write_text("x", encoding="utf-8")

    plan = RenamePlanner("finance_").plan(path)

    assert plan.already_prefixed is True
    assert plan.target == path


def test_prefix_match_is_case_sensitive(tmp_path: Path) -> None:
    path = tmp_path / "FINANCE_old.txt"
    path.write_text("x", encoding="utf-8")

    plan = RenamePlanner("finance_").plan(path)

    assert plan.already_prefixed is False
    assert plan.target.name == "finance_FINANCE_old.txt"


def test_plan_prepends_prefix(tmp_path: Path) -> None:
    path = tmp_path / "report.txt"
    path.write_text("x", encoding="utf-8")

    plan = RenamePlanner("finance_").plan(path)

    assert plan.target == tmp_path / "finance_report.txt"
    assert plan.collision is False


def test_collision_uses_millisecond_timestamp(tmp_path: Path, fixed_clock) -> None:
    (tmp_path / "a.txt").write_text("new", encoding="utf-8")
    (tmp_path / "finance_a.txt").write_text("existing", encoding="utf-8")

    plan = RenamePlanner("finance_", clock=fixed_clock).plan(tmp_path / "a.txt")

    assert plan.collision is True
    assert plan.target.name == "finance_a_20240501123045123.txt"
    assert plan.target.name.startswith("finance_")


def test_second_collision_gets_counter(tmp_path: Path, fixed_clock) -> None:
    (tmp_path / "a.txt").write_text("new", encoding="utf-8")
    (tmp_path / "finance_a.txt").write_text("existing", encoding="utf-8")
    (tmp_path / "finance_a_20240501123045123.txt").write_text("older", encoding="utf-8")

    plan = RenamePlanner("finance_", clock=fixed_clock).plan(tmp_path / "a.txt")

    assert plan.target.name == "finance_a_20240501123045123_1.txt"


def test_claimed_targets_are_not_reused_within_a_run(tmp_path: Path, fixed_clock) -> None:
    planner = RenamePlanner("x_", clock=fixed_clock)
    first = planner.plan(tmp_path / "a.txt")
    # Same name again (e.g. a dry run where nothing is renamed on disk).
    second = planner.plan(tmp_path / "a.txt")

    assert first.target.name == "x_a.txt"
    assert second.target != first.target
    assert second.target.name == "x_a_20240501123045123.txt"


def test_collision_timestamp_format() -> None:
    from datetime import datetime

    assert collision_timestamp(datetime(2023, 1, 2, 3, 4, 5, 6000)) == "20230102030405006"


@pytest.mark.parametrize("prefix", ["", "bad/", "a:b"])
def test_validate_prefix_rejects_invalid(prefix: str) -> None:
    with pytest.raises(ValueError):
        validate_prefix(prefix)
