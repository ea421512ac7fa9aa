"""Tests for the Anthropic provider."""

import logging

import pytest

from polychat import NoError, ParseFailure, VendorError
from polychat.providers.anthropic import AnthropicMessagesProvider


@pytest.fixture
def provider():
    return AnthropicMessagesProvider(api_key="sk-ant-123")


class TestPreprocessPayload:
    def test_extracts_system_and_trims(self, provider):
        payload = {
            "messages": [
                {"role": "system", "content": " Be brief. "},
                {"role": "user", "content": " Hello! "},
            ],
            "model": "claude-3-haiku-20240307",
            "seed": 3,
        }
        result = provider.preprocess_payload(payload)
        assert result == {
            "messages": [{"role": "user", "content": "Hello!"}],
            "model": "claude-3-haiku-20240307",
            "system": "Be brief.",
            "max_tokens": 8192,
        }

    def test_explicit_max_tokens(self, provider):
        result = provider.preprocess_payload(
            {"messages": [{"role": "user", "content": "x"}], "max_tokens": 100}
        )
        assert result["max_tokens"] == 100
        assert "system" not in result


class TestTransportConfig:
    def test_headers(self, provider):
        config = provider.transport_config()
        assert config.endpoint == "https://api.anthropic.com/v1/messages"
        assert config.headers == {
            "x-api-key": "sk-ant-123",
            "anthropic-version": "2023-06-01",
        }


class TestParseFragment:
    def test_text_delta(self, provider):
        line = (
            '{"type":"content_block_delta","index":0,'
            '"delta":{"type":"text_delta","text":"Hello"}}'
        )
        assert provider.parse_fragment(line) == "Hello"

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "event: content_block_delta",
            '{"type":"message_start","message":{"id":"msg_1"}}',
            '{"type":"content_block_delta","index":0,'
            '"delta":{"type":"input_json_delta","partial_json":"{\\"q\\""}}',
            "content_block_delta text_delta not json",
        ],
    )
    def test_non_text_lines(self, provider, line):
        assert provider.parse_fragment(line) is None


class TestOnRequestExit:
    def test_logs_error_envelope(self, provider, caplog):
        body = (
            '{"type":"error","error":{"type":"authentication_error",'
            '"message":"invalid x-api-key"}}'
        )
        with caplog.at_level(logging.ERROR):
            status = provider.on_request_exit(body)
        assert [r.getMessage() for r in caplog.records] == [
            "ANTHROPIC - type: authentication_error message:invalid x-api-key"
        ]
        assert status == VendorError(
            message="invalid x-api-key", status="authentication_error"
        )

    def test_streamed_body_without_error_frame(self, provider, caplog):
        assert isinstance(provider.on_request_exit("event: ping\ndata: {}"), ParseFailure)
        assert provider.on_request_exit('{"type":"message"}') == NoError()
        assert caplog.records == []

    def test_sse_error_frame(self, provider, caplog):
        body = "\n".join(
            [
                "event: message_start",
                'data: {"type":"message_start","message":{"id":"msg_1"}}',
                "",
                "event: error",
                'data: {"type":"error","error":{"type":"overloaded_error","message":"Overloaded"}}',
            ]
        )
        with caplog.at_level(logging.ERROR):
            status = provider.on_request_exit(body)
        assert [r.getMessage() for r in caplog.records] == [
            "ANTHROPIC - type: overloaded_error message:Overloaded"
        ]
        assert status == VendorError(message="Overloaded", status="overloaded_error")

    def test_only_first_error_frame_is_reported(self, provider, caplog):
        body = (
            'data: {"type":"error","error":{"type":"overloaded_error","message":"a"}}\n'
            'data: {"type":"error","error":{"type":"api_error","message":"b"}}'
        )
        with caplog.at_level(logging.ERROR):
            status = provider.on_request_exit(body)
        assert len(caplog.records) == 1
        assert status.message == "a"


class TestCheck:
    def test_models(self, provider):
        assert provider.check("claude-3-5-sonnet-20240620") is True
        assert provider.check("gpt-4o") is False
