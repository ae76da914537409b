from __future__ import annotations

import pytest

from common.shared.utils import confirm, safe_filename


@pytest.mark.parametrize("answer, expected", [("y", True), (" YES ", True), ("n", False), ("", False)])
def test_confirm_answers(monkeypatch: pytest.MonkeyPatch, answer: str, expected: bool) -> None:
    monkeypatch.setattr("builtins.input", lambda _prompt: answer)

    assert confirm("Rename?") is expected


def test_confirm_end_of_input_is_no(monkeypatch: pytest.MonkeyPatch) -> None:
    def closed_stdin(_prompt: str) -> str:
        raise EOFError

    monkeypatch.setattr("builtins.input", closed_stdin)

    assert confirm("Rename?") is False


def test_safe_filename_replaces_reserved_characters() -> None:
    assert safe_filename(' a/b:c? ') == "a_b_c_"
