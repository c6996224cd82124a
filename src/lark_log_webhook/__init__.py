"""Lark Log Webhook.

Forward log records to a Lark (Feishu) webhook as signed interactive cards:
- Level filtering per configured log type
- HMAC-SHA256 request signing
- ANSI-free, fenced card rendering
- Plugin lifecycle with guaranteed teardown

Example:
    ```python
    import logging

    from lark_log_webhook import LarkWebhookConfig, WebhookLogSink

    sink = WebhookLogSink(
        LarkWebhookConfig(url="https://open.feishu.cn/...", secret="...", title="Bot")
    )
    sink.activate()
    logging.getLogger("scheduler").error("job failed")
    ```
"""

from importlib.metadata import PackageNotFoundError, version

from .core import (
    AppConfig,
    LarkWebhookConfig,
    LoggingConfig,
    LogRecord,
    TargetRegistry,
    default_registry,
    get_logger,
    setup_logging,
)
from .plugins import BasePlugin, LarkWebhookLogPlugin, PluginManager, PluginMetadata
from .sink import LOGGER_NAME, WebhookLogSink

__all__ = [
    "__version__",
    "AppConfig",
    "LarkWebhookConfig",
    "LoggingConfig",
    "LogRecord",
    "TargetRegistry",
    "default_registry",
    "WebhookLogSink",
    "LOGGER_NAME",
    "BasePlugin",
    "PluginMetadata",
    "PluginManager",
    "LarkWebhookLogPlugin",
    "get_logger",
    "setup_logging",
]

try:  # pragma: no cover - best-effort during development
    __version__ = version("lark-log-webhook")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
