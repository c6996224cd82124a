"""Webhook log sink.

Bridges the log target registry to a Lark webhook: every accepted record is
rendered as an interactive card, signed and posted once. Delivery failures are
logged on the sink's own logger, which the sink never forwards.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Coroutine
from typing import Any

from .core.card import build_log_card
from .core.client import LarkWebhookClient, MessageType
from .core.config import LarkWebhookConfig
from .core.logger import get_logger, log_exception
from .core.signature import generate_sign
from .core.targets import LogRecord, TargetHandle, TargetRegistry, default_registry

LOGGER_NAME = "lark_webhook"

# Loggers used while delivering; forwarding them would trigger another delivery.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


class WebhookLogSink:
    """Log target that forwards records to a Lark webhook.

    Example:
        ```python
        from lark_log_webhook import LarkWebhookConfig, WebhookLogSink

        sink = WebhookLogSink(LarkWebhookConfig(url="https://...", secret="s3cr3t"))
        sink.activate()
        logging.getLogger("app").error("disk full")
        ...
        sink.deactivate()
        ```
    """

    def __init__(
        self,
        config: LarkWebhookConfig,
        client: LarkWebhookClient | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the sink.

        Args:
            config: Webhook configuration
            client: HTTP client; built from the configuration when omitted
            clock: Source of the current Unix time in seconds
        """
        self.config = config
        self.client = client or LarkWebhookClient(
            config.url, timeout=config.timeout, headers=config.headers
        )
        self.clock = clock
        self.logger = get_logger(LOGGER_NAME)
        self._handle: TargetHandle | None = None

    @property
    def name(self) -> str:
        """Full name of the sink's own logger."""
        return self.logger.name

    @property
    def active(self) -> bool:
        return self._handle is not None and self._handle.active

    def accepts(self, record: LogRecord) -> bool:
        """Whether a record should be forwarded."""
        if record.name == self.name:
            return False
        if any(
            record.name == source or record.name.startswith(f"{source}.")
            for source in TRANSPORT_LOGGERS
        ):
            return False
        return record.type in self.config.types

    def build_payload(self, record: LogRecord, timestamp: str, sign: str) -> dict[str, Any]:
        """Build the webhook request body for a record."""
        return {
            "timestamp": timestamp,
            "sign": sign,
            "msg_type": MessageType.INTERACTIVE,
            "card": build_log_card(record, self.config.title),
        }

    def record(self, record: LogRecord) -> Coroutine[Any, Any, None] | None:
        """Start forwarding a record.

        Rejected records are dropped here, before any coroutine is created.

        Returns:
            The delivery coroutine, or None if the record is not forwarded
        """
        if not self.accepts(record):
            return None
        return self.deliver(record)

    async def deliver(self, record: LogRecord) -> None:
        """Post a record to the webhook.

        Never raises: failures are logged on the sink's own logger.
        """
        try:
            sign, timestamp = generate_sign(self.config.secret, int(self.clock()))
            payload = self.build_payload(record, timestamp, sign)
            response = await self.client.post(payload)
            if not response.ok:
                self.logger.error(response.error_text)
        except Exception as exc:
            log_exception(self.logger, exc, "Failed to forward log record")

    def activate(self, registry: TargetRegistry | None = None) -> TargetHandle:
        """Register the sink so that it receives every emitted record.

        Raises:
            RuntimeError: If the sink is already active
        """
        if self.active:
            raise RuntimeError("Webhook log sink is already active")
        self._handle = (registry or default_registry).register(self)
        return self._handle

    def deactivate(self) -> bool:
        """Remove the sink from the registry it was activated on.

        Returns:
            True if the sink was removed by this call
        """
        handle, self._handle = self._handle, None
        if handle is None:
            return False
        return handle.unregister()

    def __repr__(self) -> str:
        return f"<WebhookLogSink types={self.config.types!r}>"
