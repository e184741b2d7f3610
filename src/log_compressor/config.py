"""Configuration models and loading logic."""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_SETTINGS_FILE = Path("configs/settings.yaml")
SETTINGS_FILE_ENV = "LOG_COMPRESSOR_SETTINGS_FILE"
SELF_TOKEN = "log_compressor"


class ScanConfig(BaseModel):
    """Candidate selection rules for the target directory."""

    log_suffix: str = Field(default="log", min_length=1)
    self_token: str = Field(default=SELF_TOKEN, min_length=1)


class ArchiveConfig(BaseModel):
    """Archive container and streaming settings."""

    extension: str = Field(default="zip", min_length=1)
    chunk_size_bytes: int = Field(default=1_048_576, ge=1)
    compression_level: int = Field(default=6, ge=0, le=9)
    timestamp_format: str = "%Y-%m-%d_%H-%M-%S"
    verify_crc: bool = False


class RunnerConfig(BaseModel):
    """Batch runner behavior."""

    max_workers: int = Field(default=4, ge=1)
    show_progress: bool = True


class LoggingConfig(BaseModel):
    """Process logging settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: Path | None = None


class AppSettings(BaseSettings):
    """Top-level application settings."""

    _yaml_file_override: ClassVar[Path | None] = None

    scan: ScanConfig = Field(default_factory=ScanConfig)
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)
    runner: RunnerConfig = Field(default_factory=RunnerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="LOG_COMPRESSOR_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use YAML defaults while allowing env vars to override values."""

        yaml_file = resolve_settings_file(cls._yaml_file_override)
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    def as_dict(self) -> dict[str, object]:
        """Return settings as a standard nested dictionary."""

        return self.model_dump(mode="json")

    def with_overrides(
        self,
        *,
        log_suffix: str | None = None,
        max_workers: int | None = None,
        show_progress: bool | None = None,
        verify_crc: bool | None = None,
        log_file: Path | None = None,
        level: str | None = None,
    ) -> "AppSettings":
        """Return a copy with CLI-provided values applied on top."""

        scan = self.scan
        if log_suffix is not None:
            scan = scan.model_copy(update={"log_suffix": log_suffix})
        runner_updates: dict[str, object] = {}
        if max_workers is not None:
            runner_updates["max_workers"] = max_workers
        if show_progress is not None:
            runner_updates["show_progress"] = show_progress
        archive = self.archive
        if verify_crc is not None:
            archive = archive.model_copy(update={"verify_crc": verify_crc})
        logging_updates: dict[str, object] = {}
        if log_file is not None:
            logging_updates["log_file"] = log_file
        if level is not None:
            logging_updates["level"] = level
        return self.model_copy(
            update={
                "scan": scan,
                "archive": archive,
                "runner": self.runner.model_copy(update=runner_updates),
                "logging": self.logging.model_copy(update=logging_updates),
            }
        )


def find_project_root(start: Path | None = None) -> Path:
    """Locate the project root by traversing upward for config markers."""

    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / DEFAULT_SETTINGS_FILE).exists():
            return candidate
    return current


def resolve_settings_file(override: Path | None = None) -> Path:
    """Resolve settings file from explicit override, env var, or default."""

    chosen = override
    if chosen is None:
        env_value = os.getenv(SETTINGS_FILE_ENV)
        if env_value:
            chosen = Path(env_value)
    if chosen is None:
        chosen = DEFAULT_SETTINGS_FILE

    if not chosen.is_absolute():
        chosen = (find_project_root() / chosen).resolve()
    return chosen


def load_settings(config_file: Path | None = None) -> AppSettings:
    """Load settings with YAML defaults and environment variable overrides."""

    AppSettings._yaml_file_override = config_file
    try:
        return AppSettings()
    finally:
        AppSettings._yaml_file_override = None
