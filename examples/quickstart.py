"""Quick start example for Lark Log Webhook.

This example demonstrates how to:
1. Configure logging and the webhook sink
2. Forward error and warning records to a Lark group
3. Tear the sink down again
"""

import logging

from lark_log_webhook import LarkWebhookConfig, WebhookLogSink, default_registry, setup_logging
from lark_log_webhook.core import log_success


def main() -> None:
    setup_logging()

    sink = WebhookLogSink(
        LarkWebhookConfig(
            url="https://open.feishu.cn/open-apis/bot/v2/hook/YOUR_WEBHOOK_TOKEN",
            secret="YOUR_SECRET",
            title="Quickstart",
            types=["error", "warn", "success"],
        )
    )
    sink.activate()

    logger = logging.getLogger("quickstart")
    logger.setLevel(logging.DEBUG)

    logger.info("Not forwarded: info is not in the configured types")
    logger.warning("Disk usage above 80%")
    log_success(logger, "Nightly backup finished")

    try:
        1 / 0
    except ZeroDivisionError:
        logger.exception("Report generation failed")

    # Deliveries run in the background; wait for them before exiting
    default_registry.drain_sync(timeout=30)
    sink.deactivate()
    default_registry.close()


if __name__ == "__main__":
    main()
