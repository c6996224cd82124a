"""Plugin forwarding log records to a Lark webhook."""

from __future__ import annotations

from ..core.config import AppConfig
from ..core.targets import TargetRegistry
from ..sink import WebhookLogSink
from .base import BasePlugin, PluginMetadata


class LarkWebhookLogPlugin(BasePlugin):
    """Registers a :class:`WebhookLogSink` for as long as the plugin is enabled."""

    def __init__(self, config: AppConfig, registry: TargetRegistry | None = None):
        super().__init__(config, registry)
        self.sink: WebhookLogSink | None = None

    def metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name="lark-webhook",
            version="1.0.0",
            description="Forward log records to a Lark webhook",
        )

    def on_enable(self) -> None:
        if self.config.lark_webhook is None:
            raise ValueError("lark_webhook configuration is required")

        sink = WebhookLogSink(self.config.lark_webhook)
        self.effect(lambda: sink.activate(self.registry).unregister)
        self.sink = sink
        self.logger.info(
            "Forwarding %s logs to Lark webhook", ", ".join(self.config.lark_webhook.types)
        )

    def on_disable(self) -> None:
        self.sink = None
