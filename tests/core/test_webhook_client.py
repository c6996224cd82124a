"""Tests for the async webhook client."""

import json

import httpx
import pytest
from pytest_httpx import HTTPXMock

from lark_log_webhook.core.client import LarkWebhookClient, WebhookResponse

pytestmark = pytest.mark.anyio

URL = "https://example.com/webhook"


class TestWebhookResponse:
    """Tests for WebhookResponse."""

    def test_success_codes(self):
        assert WebhookResponse().ok
        assert WebhookResponse(code=0, msg="success").ok
        assert WebhookResponse(code="").ok

    def test_error_code(self):
        response = WebhookResponse(code=19021, msg="sign match fail or timestamp is not valid")
        assert not response.ok
        assert response.error_text.startswith("[19021] sign match fail")

    def test_extra_fields_kept(self):
        response = WebhookResponse.model_validate({"code": 0, "data": {}, "StatusCode": 0})
        assert response.model_extra == {"data": {}, "StatusCode": 0}


class TestLarkWebhookClient:
    """Tests for LarkWebhookClient."""

    async def test_post_sends_json(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(json={"code": 0, "msg": "success"})
        client = LarkWebhookClient(URL, headers={"X-Trace": "1"})

        response = await client.post({"msg_type": "text", "content": {"text": "hi"}})

        assert response.ok
        request = httpx_mock.get_requests()[0]
        assert request.method == "POST"
        assert request.url == URL
        assert request.headers["X-Trace"] == "1"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"msg_type": "text", "content": {"text": "hi"}}

    async def test_post_returns_error_code(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(json={"code": 19021, "msg": "bad signature"})

        response = await LarkWebhookClient(URL).post({})

        assert response.code == 19021
        assert response.msg == "bad signature"

    async def test_http_error_raises(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(status_code=500)

        with pytest.raises(httpx.HTTPStatusError):
            await LarkWebhookClient(URL).post({})

    async def test_transport_error_raises(self, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        with pytest.raises(httpx.ConnectError):
            await LarkWebhookClient(URL).post({})

    async def test_non_object_response_raises(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(json=["not", "an", "object"])

        with pytest.raises(ValueError, match="Unexpected webhook response"):
            await LarkWebhookClient(URL).post({})

    def test_timeout_only_passed_when_configured(self):
        assert "timeout" not in LarkWebhookClient(URL)._client_kwargs()
        assert LarkWebhookClient(URL, timeout=3.0)._client_kwargs()["timeout"] == 3.0
