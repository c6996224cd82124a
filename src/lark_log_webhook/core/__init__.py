"""Core modules for Lark Log Webhook.

This package contains the core functionality including:
- Configuration management
- Logging utilities
- The process-wide log target registry
- Webhook signing, card rendering and the HTTP client
"""

from .card import CardBuilder, build_log_card, strip_ansi
from .client import LarkWebhookClient, MessageType, WebhookResponse
from .config import LOG_TYPES, AppConfig, LarkWebhookConfig, LoggingConfig, LogType
from .logger import (
    SUCCESS,
    TYPE_LEVELS,
    get_logger,
    level_to_type,
    log_success,
    setup_logging,
)
from .signature import generate_sign, verify_sign
from .targets import (
    LogRecord,
    LogTarget,
    RegistryHandler,
    TargetHandle,
    TargetRegistry,
    default_registry,
)

__all__ = [
    # Configuration
    "AppConfig",
    "LarkWebhookConfig",
    "LoggingConfig",
    "LogType",
    "LOG_TYPES",
    # Logging
    "SUCCESS",
    "TYPE_LEVELS",
    "get_logger",
    "level_to_type",
    "log_success",
    "setup_logging",
    # Targets
    "LogRecord",
    "LogTarget",
    "RegistryHandler",
    "TargetHandle",
    "TargetRegistry",
    "default_registry",
    # Delivery
    "CardBuilder",
    "build_log_card",
    "strip_ansi",
    "LarkWebhookClient",
    "MessageType",
    "WebhookResponse",
    "generate_sign",
    "verify_sign",
]
