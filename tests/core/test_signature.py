"""Tests for webhook signature generation."""

import base64
import hashlib
import hmac
from unittest.mock import patch

from lark_log_webhook.core.signature import generate_sign, verify_sign

# base64(HMAC-SHA256(key="1700000000\ntest-secret", msg=""))
REFERENCE_SIGN = "mbm4Y4oluIPQ00qlBIhX8vAZ0EKv3nw0LuTb91jPL84="


class TestGenerateSign:
    """Tests for generate_sign."""

    def test_reference_vector(self):
        sign, timestamp = generate_sign("test-secret", 1700000000)
        assert timestamp == "1700000000"
        assert sign == REFERENCE_SIGN

    def test_string_timestamp(self):
        sign, timestamp = generate_sign("test-secret", "1700000000")
        assert timestamp == "1700000000"
        assert sign == REFERENCE_SIGN

    def test_key_is_timestamp_and_secret(self):
        """The composite string is the HMAC key and the message is empty."""
        sign, _ = generate_sign("another", 1234567890)

        expected = base64.b64encode(
            hmac.new(b"1234567890\nanother", b"", digestmod=hashlib.sha256).digest()
        ).decode("utf-8")
        assert sign == expected

        wrong = base64.b64encode(
            hmac.new(b"another", b"1234567890\nanother", digestmod=hashlib.sha256).digest()
        ).decode("utf-8")
        assert sign != wrong

    def test_uses_current_time(self):
        with patch("lark_log_webhook.core.signature.time.time", return_value=1700000000.9):
            sign, timestamp = generate_sign("test-secret")

        assert timestamp == "1700000000"
        assert sign == REFERENCE_SIGN


class TestVerifySign:
    """Tests for verify_sign."""

    def test_valid_signature(self):
        assert verify_sign("test-secret", 1700000000, REFERENCE_SIGN, now=1700000100)

    def test_wrong_secret(self):
        assert not verify_sign("other", 1700000000, REFERENCE_SIGN, now=1700000000)

    def test_expired_signature(self):
        assert not verify_sign("test-secret", 1700000000, REFERENCE_SIGN, now=1700003601)

    def test_future_signature_outside_window(self):
        assert not verify_sign("test-secret", 1700000000, REFERENCE_SIGN, now=1699990000)

    def test_invalid_timestamp(self):
        assert not verify_sign("test-secret", "not-a-number", REFERENCE_SIGN)
