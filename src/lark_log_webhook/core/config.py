"""Configuration management for Lark Log Webhook.

This module provides configuration models and loading functionality using Pydantic
for validation and type safety.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogType = Literal["success", "error", "warn", "info", "debug"]

LOG_TYPES: tuple[str, ...] = ("success", "error", "warn", "info", "debug")

_DOTENV_LOADED = False


def _load_env_once() -> None:
    """Load environment variables from a .env file exactly once."""

    global _DOTENV_LOADED
    if not _DOTENV_LOADED:
        load_dotenv()
        _DOTENV_LOADED = True


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables in configuration data."""

    if isinstance(data, str):
        return os.path.expandvars(data)
    if isinstance(data, dict):
        return {key: _expand_env_vars(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    return data


class LarkWebhookConfig(BaseModel):
    """Configuration for forwarding log records to a Lark webhook."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Lark webhook URL")
    secret: str = Field(..., description="Lark webhook signing secret")
    title: str = Field(
        default="",
        description="Card title; the record source is appended. Empty disables the title",
    )
    types: list[LogType] = Field(
        default_factory=lambda: ["error", "warn"],
        description="Log types to forward",
    )
    timeout: float | None = Field(
        default=None,
        ge=0.0,
        description="Request timeout in seconds (None keeps the HTTP client default)",
    )
    headers: dict[str, str] = Field(
        default_factory=dict, description="Extra HTTP headers sent with requests"
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Webhook URL cannot be empty")
        value = value.strip()
        if not value.startswith("http"):
            raise ValueError("Webhook URL must start with http:// or https://")
        return value

    @field_validator("types")
    @classmethod
    def dedupe_types(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))


class LoggingConfig(BaseModel):
    """Configuration for local logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )
    log_file: str | None = Field(default=None, description="Log file path")
    max_bytes: int = Field(default=10485760, description="Max log file size (10MB)")
    backup_count: int = Field(default=5, description="Number of backup files")

    @field_validator("level")
    @classmethod
    def normalise_level(cls, value: str) -> str:
        level = (value or "INFO").strip().upper()
        if level not in {"DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {level}")
        return level


class AppConfig(BaseSettings):
    """Top-level configuration for Lark Log Webhook."""

    model_config = SettingsConfigDict(
        env_prefix="LARK_LOG_",
        env_nested_delimiter="__",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    lark_webhook: LarkWebhookConfig | None = Field(
        default=None, description="Lark webhook log forwarding configuration"
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> AppConfig:
        """Load configuration from a YAML file."""

        _load_env_once()
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, encoding="utf-8") as handle:
            try:
                config_data = yaml.safe_load(handle)
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid YAML in config file: {exc}") from exc

        if not config_data:
            config_data = {}

        config_data = _expand_env_vars(config_data)
        return cls(**config_data)

    @classmethod
    def from_json(cls, path: str | Path) -> AppConfig:
        """Load configuration from a JSON file."""

        import json

        _load_env_once()
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, encoding="utf-8") as handle:
            try:
                config_data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in config file: {exc}") from exc

        config_data = _expand_env_vars(config_data)
        return cls(**config_data)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""

        return self.model_dump()
