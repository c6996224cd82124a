"""Plugin system for Lark Log Webhook.

This package provides:
- Base plugin class with scoped effects
- Plugin manager driving the enable/disable lifecycle
- The Lark webhook log forwarding plugin
"""

from .base import BasePlugin, PluginMetadata
from .lark_webhook import LarkWebhookLogPlugin
from .manager import PluginManager

__all__ = [
    "BasePlugin",
    "PluginMetadata",
    "PluginManager",
    "LarkWebhookLogPlugin",
]
