"""
Shared fixtures for log_compressor tests.

Every test gets an isolated settings environment (no repo YAML, no stray
LOG_COMPRESSOR_* variables) and the root logger is restored afterwards,
since the CLI reconfigures it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

import pytest

from log_compressor.config import SETTINGS_FILE_ENV, AppSettings


@pytest.fixture(autouse=True)
def isolated_settings_env(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("LOG_COMPRESSOR_"):
            monkeypatch.delenv(name, raising=False)
    missing = tmp_path_factory.mktemp("settings") / "missing.yaml"
    monkeypatch.setenv(SETTINGS_FILE_ENV, str(missing))


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("log_compressor").setLevel(logging.NOTSET)


@pytest.fixture()
def settings() -> AppSettings:
    """Sequential, quiet settings."""
    return AppSettings(runner={"max_workers": 1, "show_progress": False})


@pytest.fixture()
def log_dir(tmp_path: Path) -> Path:
    d = tmp_path / "logs"
    d.mkdir()
    return d

