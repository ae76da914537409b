from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, Dict

import pytest


FIXED_MOMENT = datetime(2024, 5, 1, 12, 30, 45, 123456)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_MOMENT


@pytest.fixture
def make_files(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """Create ``name -> content`` files under ``tmp_path / 'inbox'``."""

    def _make(files: Dict[str, str]) -> Path:
        source = tmp_path / "inbox"
        source.mkdir(exist_ok=True)
        for name, content in files.items():
            (source / name).write_text(content, encoding="utf-8")
        return source

    return _make


@pytest.fixture
def snapshot() -> Callable[[Path], Dict[str, bytes]]:
    """Map file name to bytes for every file directly under a folder."""

    def _snapshot(folder: Path) -> Dict[str, bytes]:
        return {p.name: p.read_bytes() for p in sorted(folder.iterdir()) if p.is_file()}

    return _snapshot
