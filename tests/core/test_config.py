"""Tests for configuration management.

Tests cover:
- LarkWebhookConfig validation
- LoggingConfig validation
- AppConfig loading from YAML and JSON
- Environment variable expansion
"""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from lark_log_webhook.core.config import AppConfig, LarkWebhookConfig, LoggingConfig


class TestLarkWebhookConfig:
    """Tests for LarkWebhookConfig."""

    def test_default_values(self):
        """Test default configuration values."""
        config = LarkWebhookConfig(url="https://example.com/hook", secret="s")

        assert config.title == ""
        assert config.types == ["error", "warn"]
        assert config.timeout is None
        assert config.headers == {}

    def test_url_is_stripped(self):
        config = LarkWebhookConfig(url="  https://example.com/hook  ", secret="s")
        assert config.url == "https://example.com/hook"

    def test_url_validation(self):
        """Test webhook config validation for URL format."""
        with pytest.raises(ValueError, match="Webhook URL cannot be empty"):
            LarkWebhookConfig(url="", secret="s")
        with pytest.raises(ValueError, match="Webhook URL must start with"):
            LarkWebhookConfig(url="not-a-url", secret="s")

    def test_secret_is_required(self):
        with pytest.raises(ValidationError):
            LarkWebhookConfig(url="https://example.com/hook")

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            LarkWebhookConfig(url="https://example.com/hook", secret="s", types=["fatal"])

    def test_duplicate_types_removed(self):
        config = LarkWebhookConfig(
            url="https://example.com/hook",
            secret="s",
            types=["info", "error", "info"],
        )
        assert config.types == ["info", "error"]

    def test_config_is_immutable(self):
        config = LarkWebhookConfig(url="https://example.com/hook", secret="s")
        with pytest.raises(ValidationError):
            config.title = "changed"


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_default_values(self):
        config = LoggingConfig()

        assert config.level == "INFO"
        assert config.log_file is None
        assert config.max_bytes == 10485760
        assert config.backup_count == 5

    def test_level_is_normalised(self):
        assert LoggingConfig(level="debug").level == "DEBUG"
        assert LoggingConfig(level="success").level == "SUCCESS"

    def test_invalid_level(self):
        with pytest.raises(ValidationError, match="Unsupported log level"):
            LoggingConfig(level="LOUD")


class TestAppConfig:
    """Tests for AppConfig loading."""

    def test_defaults(self):
        config = AppConfig()
        assert config.lark_webhook is None
        assert config.logging.level == "INFO"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            """
logging:
  level: DEBUG
lark_webhook:
  url: https://example.com/hook
  secret: abc
  title: Bot
  types: [error, info]
""",
            encoding="utf-8",
        )

        config = AppConfig.from_yaml(path)

        assert config.logging.level == "DEBUG"
        assert config.lark_webhook is not None
        assert config.lark_webhook.title == "Bot"
        assert config.lark_webhook.types == ["error", "info"]

    def test_from_yaml_expands_env_vars(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TEST_LARK_SECRET", "from-env")
        path = tmp_path / "config.yaml"
        path.write_text(
            "lark_webhook:\n  url: https://example.com/hook\n  secret: ${TEST_LARK_SECRET}\n",
            encoding="utf-8",
        )

        config = AppConfig.from_yaml(path)

        assert config.lark_webhook.secret == "from-env"

    def test_from_yaml_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        config = AppConfig.from_yaml(path)

        assert config.lark_webhook is None

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_invalid(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("lark_webhook: [unclosed", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.from_yaml(path)

    def test_from_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps({"lark_webhook": {"url": "https://example.com/hook", "secret": "abc"}}),
            encoding="utf-8",
        )

        config = AppConfig.from_json(path)

        assert config.lark_webhook.url == "https://example.com/hook"

    def test_from_json_invalid(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON"):
            AppConfig.from_json(path)

    def test_to_dict(self):
        config = AppConfig(lark_webhook={"url": "https://example.com/hook", "secret": "abc"})
        data = config.to_dict()
        assert data["lark_webhook"]["types"] == ["error", "warn"]
