"""Tests for the exceptions module."""

import json

from anthroq.core.exceptions import (
    ArgumentParseError,
    ConfigurationError,
    DownstreamError,
    InternalError,
    MissingCredentialError,
    ProxyError,
)


class TestProxyError:

    def test_creates_error_with_message(self):
        error = ProxyError("test error message")
        assert error.message == "test error message"
        assert str(error) == "test error message"
        assert error.status_code == 500

    def test_configuration_error_is_proxy_error(self):
        assert isinstance(ConfigurationError("bad"), ProxyError)


class TestMissingCredentialError:

    def test_payload_echoes_headers(self):
        error = MissingCredentialError({"x-trace": "abc"})

        payload = error.to_payload()

        assert error.status_code == 401
        assert payload["error"] == "Missing API key"
        assert payload["kind"] == "missing_credential"
        assert "x-api-key" in payload["message"]
        assert payload["debug"] == {"headers": {"x-trace": "abc"}}

    def test_payload_without_diagnostics(self):
        payload = MissingCredentialError({"x-trace": "abc"}).to_payload(include_diagnostics=False)

        assert "debug" not in payload


class TestDownstreamError:

    def test_status_mirrors_downstream(self):
        error = DownstreamError(429, "rate limited")

        assert error.status_code == 429
        assert error.to_payload() == {
            "error": "Groq API request failed",
            "kind": "downstream_error",
            "details": "rate limited",
            "status": 429,
        }

    def test_class_default_status_untouched(self):
        DownstreamError(503, "x")
        assert ProxyError.status_code == 500


class TestInternalError:

    def test_wrap_keeps_cause_and_stack(self):
        try:
            json.loads("not json")
        except ValueError as exc:
            error = InternalError.wrap(exc)

        payload = error.to_payload()

        assert error.status_code == 500
        assert payload["error"] == "Internal server error"
        assert payload["kind"] == "internal_error"
        assert "Expecting value" in payload["message"]
        assert "JSONDecodeError" in payload["stack"]

    def test_wrap_uses_class_name_for_empty_message(self):
        assert InternalError.wrap(KeyError()).message == "KeyError"

    def test_stack_hidden_without_diagnostics(self):
        payload = InternalError("boom").to_payload(include_diagnostics=False)

        assert "stack" not in payload
        assert payload["message"] == "boom"


class TestArgumentParseError:

    def test_is_internal_error_with_own_kind(self):
        error = ArgumentParseError("c1", "{bad", cause=ValueError("bad json"))

        assert isinstance(error, InternalError)
        assert error.status_code == 500
        assert error.kind == "argument_parse_error"
        assert "'c1'" in error.message
        assert error.to_payload()["kind"] == "argument_parse_error"
