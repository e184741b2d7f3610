"""Settings loading: YAML defaults, env overrides and CLI overrides."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from log_compressor.config import SETTINGS_FILE_ENV, AppSettings, load_settings, resolve_settings_file


def test_defaults_without_yaml() -> None:
    settings = load_settings()

    assert settings.scan.log_suffix == "log"
    assert settings.scan.self_token == "log_compressor"
    assert settings.archive.extension == "zip"
    assert settings.archive.chunk_size_bytes == 1_048_576
    assert settings.archive.timestamp_format == "%Y-%m-%d_%H-%M-%S"
    assert settings.runner.max_workers >= 1
    assert settings.logging.log_file is None


def test_yaml_file_is_loaded(tmp_path: Path) -> None:
    config_file = tmp_path / "settings.yaml"
    config_file.write_text(
        "archive:\n  extension: zipx\n  compression_level: 9\nscan:\n  log_suffix: txt\n",
        encoding="utf-8",
    )

    settings = load_settings(config_file)

    assert settings.archive.extension == "zipx"
    assert settings.archive.compression_level == 9
    assert settings.scan.log_suffix == "txt"
    assert settings.archive.chunk_size_bytes == 1_048_576


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path / "settings.yaml"
    config_file.write_text("runner:\n  max_workers: 2\n", encoding="utf-8")
    monkeypatch.setenv(SETTINGS_FILE_ENV, str(config_file))
    monkeypatch.setenv("LOG_COMPRESSOR_RUNNER__MAX_WORKERS", "8")

    assert resolve_settings_file() == config_file
    assert load_settings().runner.max_workers == 8


def test_invalid_values_are_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_COMPRESSOR_ARCHIVE__CHUNK_SIZE_BYTES", "0")

    with pytest.raises(ValidationError):
        load_settings()


def test_with_overrides_only_touches_given_values() -> None:
    base = AppSettings()

    updated = base.with_overrides(log_suffix="out", max_workers=3, show_progress=False, verify_crc=True)

    assert updated.scan.log_suffix == "out"
    assert updated.scan.self_token == base.scan.self_token
    assert updated.runner.max_workers == 3
    assert updated.runner.show_progress is False
    assert updated.archive.verify_crc is True
    assert updated.archive.extension == base.archive.extension
    assert base.scan.log_suffix == "log"
    assert base.with_overrides() == base
