"""CLI commands: init, sign, test."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ..core import (
    TYPE_LEVELS,
    AppConfig,
    LarkWebhookConfig,
    LoggingConfig,
    default_registry,
    generate_sign,
    setup_logging,
)
from ..plugins import LarkWebhookLogPlugin, PluginManager

console = Console()

DEFAULT_WEBHOOK_URL = "https://open.feishu.cn/open-apis/bot/v2/hook/YOUR_WEBHOOK_TOKEN"


def cmd_init(args: argparse.Namespace) -> int:
    """Handle init command.

    Args:
        args: Parsed arguments

    Returns:
        Exit code
    """
    output_path = Path(args.output)

    if output_path.exists() and not args.force:
        response = input(f"{output_path} already exists. Overwrite? (y/N): ")
        if response.lower() != "y":
            print("Cancelled.")
            return 0

    # Plain models: environment overrides must not end up in the generated file
    default_config = {
        "logging": LoggingConfig().model_dump(),
        "lark_webhook": LarkWebhookConfig(
            url=DEFAULT_WEBHOOK_URL,
            secret="${LARK_WEBHOOK_SECRET}",
        ).model_dump(),
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(default_config, f, default_flow_style=False, allow_unicode=True)

    print(f"✓ Configuration file created: {output_path}")
    print("\nNext steps:")
    print(f"1. Edit {output_path} and add your webhook URL")
    print("2. Export LARK_WEBHOOK_SECRET with the bot's signing secret")
    print(f"3. Send a test record: lark-log-webhook test --config {output_path}")

    return 0


def cmd_sign(args: argparse.Namespace) -> int:
    """Handle sign command."""
    sign, timestamp = generate_sign(args.secret, args.timestamp)

    table = Table(title="Webhook signature", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("timestamp", timestamp)
    table.add_row("sign", sign)
    console.print(table)
    return 0


def cmd_test(args: argparse.Namespace) -> int:
    """Handle test command.

    Enables the webhook plugin, emits one record through the standard logging
    machinery and waits for its delivery before tearing the plugin down.
    """
    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Error: Configuration file not found: {config_path}")
        print("Run 'lark-log-webhook init' to create a default configuration.")
        return 1

    try:
        config = AppConfig.from_yaml(config_path)
    except (ValueError, ValidationError) as e:
        print(f"✗ Invalid configuration: {e}")
        return 1

    if config.lark_webhook is None:
        print("✗ No 'lark_webhook' section in configuration")
        return 1

    setup_logging(config.logging)

    if "${" in config.lark_webhook.secret:
        console.print(
            "[yellow]The webhook secret still contains an unexpanded "
            f"variable ({config.lark_webhook.secret}); set it in the environment "
            "or the request will be rejected.[/]"
        )

    if args.level not in config.lark_webhook.types:
        console.print(
            f"[yellow]Log type '{args.level}' is not in the configured types "
            f"({', '.join(config.lark_webhook.types)}); nothing will be sent.[/]"
        )

    manager = PluginManager(config, default_registry)
    manager.register(LarkWebhookLogPlugin)
    if not manager.enable_plugin("lark-webhook"):
        print("✗ Failed to enable the Lark webhook plugin")
        return 1

    try:
        source = logging.getLogger(args.source)
        source.setLevel(logging.DEBUG)
        source.log(TYPE_LEVELS[args.level], args.message)
        delivered = default_registry.drain_sync(timeout=args.timeout)
    finally:
        manager.disable_all()
        default_registry.close()

    if not delivered:
        print(f"✗ Delivery did not finish within {args.timeout}s")
        return 1

    print("✓ Test record processed")
    return 0
