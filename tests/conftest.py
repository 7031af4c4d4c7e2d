from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from services.config_manager import ConfigManager


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    config_dir = tmp_path / "config"
    monkeypatch.setenv("CONFIG_DIFF_CONFIG_DIR", str(config_dir))
    ConfigManager.reset()
    yield config_dir
    ConfigManager.reset()
