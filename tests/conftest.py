# tests/conftest.py
from __future__ import annotations

import pytest

from bealsearch import runtime


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Every test gets its own workspace and a clean runtime."""
    home = tmp_path / "ws"
    monkeypatch.setenv("BEALSEARCH_HOME", str(home))
    monkeypatch.delenv("BEALSEARCH_DEV", raising=False)
    runtime.reset()
    yield home
    runtime.reset()
