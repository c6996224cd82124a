"""Interactive card construction for forwarded log records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.ansi import re_ansi

if TYPE_CHECKING:
    from .targets import LogRecord


class CardBuilder:
    """Helper class for building Lark interactive cards.

    Example:
        ```python
        card = (
            CardBuilder()
            .set_header("Alerts", template="red")
            .add_markdown("**disk full**")
            .build()
        )
        ```
    """

    def __init__(self) -> None:
        self._elements: list[dict[str, Any]] = []
        self._header: dict[str, Any] | None = None

    def set_header(self, title: str | None = None, template: str = "blue") -> CardBuilder:
        """Set the card header.

        Args:
            title: Plain-text title; the ``title`` key is omitted when empty
            template: Header colour template (red, yellow, blue, ...)

        Returns:
            Self for chaining
        """
        header: dict[str, Any] = {"template": template}
        if title:
            header["title"] = {"content": title, "tag": "plain_text"}
        self._header = header
        return self

    def add_markdown(self, content: str) -> CardBuilder:
        """Add a markdown element."""
        self._elements.append({"tag": "markdown", "content": content})
        return self

    def build(self) -> dict[str, Any]:
        """Build the card dictionary."""
        card: dict[str, Any] = {"elements": list(self._elements)}
        if self._header is not None:
            card["header"] = self._header
        return card


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text, leaving every other character."""
    return re_ansi.sub("", text)


def fence(text: str) -> str:
    """Wrap text in a fenced markdown code block."""
    return f"```\n{text}\n```"


def build_log_card(record: LogRecord, title: str = "") -> dict[str, Any]:
    """Render a log record as an interactive card.

    Args:
        record: Record to render
        title: Configured title; empty means no header title

    Returns:
        Card dictionary ready to be sent as ``card`` in a webhook payload
    """
    return (
        CardBuilder()
        .add_markdown(fence(strip_ansi(record.content)))
        .set_header(
            f"{title} ({record.name})" if title else None,
            template="red" if record.type == "error" else "yellow",
        )
        .build()
    )
