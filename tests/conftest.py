from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.dir_builder import DirBuilder


@pytest.fixture
def dir_builder(tmp_path: Path) -> DirBuilder:
    """Provide a reusable project directory rooted at the pytest tmp_path."""
    return DirBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _isolate_user_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point config lookup at a file that does not exist."""
    monkeypatch.setenv("PROMPTLINE_CONFIG", str(tmp_path / "no-config" / "promptline.yml"))
