"""Async HTTP client for Lark webhooks.

A single request is made per call: no retries, no connection reuse between
calls. Transport, HTTP status and decoding errors propagate to the caller.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field


class MessageType:
    """Lark message types."""

    INTERACTIVE = "interactive"


class WebhookResponse(BaseModel):
    """Decoded webhook response.

    Lark answers ``{"code": 0, "msg": "success"}`` on success and a non-zero
    ``code`` with an explanatory ``msg`` otherwise. Both fields are optional.
    """

    model_config = ConfigDict(extra="allow")

    code: int | str | None = Field(default=None, description="Application error code")
    msg: str | None = Field(default=None, description="Application error message")

    @property
    def ok(self) -> bool:
        """True when no error code was reported."""
        return not self.code

    @property
    def error_text(self) -> str:
        return f"[{self.code}] {self.msg}"


class LarkWebhookClient:
    """Client posting JSON payloads to a Lark webhook.

    Example:
        ```python
        client = LarkWebhookClient("https://open.feishu.cn/open-apis/bot/v2/hook/xxx")
        response = await client.post({"msg_type": "text", "content": {"text": "hi"}})
        if not response.ok:
            print(response.error_text)
        ```
    """

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            url: Webhook URL
            timeout: Request timeout in seconds; None keeps the httpx default
            headers: Extra headers sent with every request
        """
        self.url = url
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json", **(headers or {})}

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"headers": self.headers}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return kwargs

    async def post(self, payload: dict[str, Any]) -> WebhookResponse:
        """POST a payload and decode the response.

        Args:
            payload: JSON body

        Returns:
            Decoded response

        Raises:
            httpx.HTTPError: If the request fails or returns an error status
            ValueError: If the response body is not a JSON object
        """
        async with httpx.AsyncClient(**self._client_kwargs()) as client:
            response = await client.post(self.url, json=payload)
            response.raise_for_status()
            data = response.json()

        if not isinstance(data, dict):
            raise ValueError(f"Unexpected webhook response: {data!r}")

        return WebhookResponse.model_validate(data)
