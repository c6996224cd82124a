"""CLI argument parser."""

from __future__ import annotations

import argparse

from .. import __version__
from ..core.config import LOG_TYPES


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Returns:
        ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="lark-log-webhook",
        description="Forward log records to a Lark webhook as signed interactive cards",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate default config
  lark-log-webhook init -o config.yaml

  # Send a test record through the configured webhook
  lark-log-webhook test -c config.yaml --level error -m "Something broke"

  # Compute a request signature
  lark-log-webhook sign --secret my-secret --timestamp 1700000000
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s v{__version__}",
        help="Show program's version number and exit",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Init command
    init_parser = subparsers.add_parser("init", help="Generate default configuration")
    init_parser.add_argument(
        "-o",
        "--output",
        default="config.yaml",
        help="Output config file path (default: config.yaml)",
    )
    init_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite an existing file without asking",
    )

    # Sign command
    sign_parser = subparsers.add_parser("sign", help="Compute a webhook request signature")
    sign_parser.add_argument("--secret", required=True, help="Webhook signing secret")
    sign_parser.add_argument(
        "--timestamp",
        type=int,
        default=None,
        help="Unix timestamp in seconds (default: now)",
    )

    # Test command
    test_parser = subparsers.add_parser("test", help="Forward one test record to the webhook")
    test_parser.add_argument(
        "-c",
        "--config",
        default="config.yaml",
        help="Path to configuration file (default: config.yaml)",
    )
    test_parser.add_argument(
        "-l",
        "--level",
        choices=LOG_TYPES,
        default="error",
        help="Log type of the test record (default: error)",
    )
    test_parser.add_argument(
        "-m",
        "--message",
        default="Test message from lark-log-webhook",
        help="Content of the test record",
    )
    test_parser.add_argument(
        "-s",
        "--source",
        default="lark_log.cli",
        help="Logger name the test record is emitted from",
    )
    test_parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=30.0,
        help="Seconds to wait for delivery (default: 30)",
    )

    return parser
