"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def write_ndjson(tmp_path: Path):
    """Return a helper that writes raw lines into an NDJSON file."""

    def _write(lines: list[str], name: str = "source.jsonl") -> Path:
        source_path = tmp_path / name
        source_path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return source_path

    return _write
