"""Shared pytest fixtures for balancing_scale tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


EXAMPLE_LINES = ["a b c", "b 5 5", "c 2 8"]


@pytest.fixture()
def write_input(tmp_path: Path) -> Callable[[str], Path]:
    """Write text to a fresh input file and return its path."""

    def _write(text: str, name: str = "scales.txt") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
