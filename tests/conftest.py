"""Test configuration hooks."""

import logging

import pytest

from lark_log_webhook.core import logger as logger_module
from lark_log_webhook.core.config import LarkWebhookConfig
from lark_log_webhook.core.targets import TargetRegistry, default_registry

WEBHOOK_URL = "https://open.feishu.cn/open-apis/bot/v2/hook/test-token"
SECRET = "test-secret"


# Configure anyio to only use asyncio backend (skip trio tests)
@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio to use only asyncio backend."""
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore root logger state and the default registry after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level

    yield

    default_registry.clear()
    default_registry.close()
    root.handlers = original_handlers
    root.setLevel(original_level)
    logger_module._loggers.clear()
    logger_module._configured = False
    logger_module._current_level = logging.INFO


@pytest.fixture
def webhook_config():
    """Provides a basic LarkWebhookConfig."""
    return LarkWebhookConfig(url=WEBHOOK_URL, secret=SECRET)


@pytest.fixture
def registry():
    """Provides a TargetRegistry bridged to the root logger."""
    reg = TargetRegistry()
    yield reg
    reg.clear()
    reg.close()
