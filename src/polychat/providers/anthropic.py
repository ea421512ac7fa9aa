"""Anthropic provider implementation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import msgspec

from ..payload import filter_payload, strip_contents
from ..provider import BaseProvider
from ..types import (
    DecodeError,
    ExitStatus,
    FragmentResult,
    Message,
    NoContent,
    NoError,
    ParseFailure,
    TextDelta,
    TransportConfig,
    VendorError,
)

logger = logging.getLogger(__name__)

API_VERSION = "2023-06-01"
DEFAULT_MAX_TOKENS = 8192

# https://docs.anthropic.com/en/api/messages
API_PARAMETERS = frozenset(
    {
        "messages",
        "model",
        "system",
        "max_tokens",
        "metadata",
        "stop_sequences",
        "stream",
        "temperature",
        "top_k",
        "top_p",
        "tools",
        "tool_choice",
    }
)


# ---------------------------------------------------------------------------
# Wire shapes (only the fields we read)
# ---------------------------------------------------------------------------


class _TextDelta(msgspec.Struct):
    type: str | None = None
    text: str | None = None


class _Event(msgspec.Struct):
    type: str | None = None
    delta: _TextDelta | None = None


class _ApiError(msgspec.Struct):
    type: str | None = None
    message: str | None = None


class _ErrorEnvelope(msgspec.Struct):
    error: _ApiError | None = None


_event_decoder = msgspec.json.Decoder(_Event)
_error_decoder = msgspec.json.Decoder(_ErrorEnvelope)


class AnthropicMessagesProvider(BaseProvider):
    """Provider for the Anthropic Messages API."""

    provider_name = "anthropic"
    default_endpoint = "https://api.anthropic.com/v1/messages"

    @staticmethod
    def _extract_system(messages: list[Message]) -> tuple[str | None, list[Message]]:
        """Separate system messages (Anthropic uses a top-level param)."""
        system_text: str | None = None
        rest: list[Message] = []
        for message in messages:
            if message["role"] == "system":
                system_text = message["content"]
            else:
                rest.append(message)
        return system_text, rest

    def preprocess_payload(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        payload = dict(payload)
        system_text, rest = self._extract_system(
            strip_contents(payload.get("messages", []))
        )
        payload["messages"] = rest
        if system_text is not None:
            payload["system"] = system_text
        payload.setdefault("max_tokens", DEFAULT_MAX_TOKENS)
        return filter_payload(API_PARAMETERS, payload)

    def transport_config(self) -> TransportConfig:
        return TransportConfig(
            endpoint=self.endpoint,
            headers={
                "x-api-key": str(self.api_key),
                "anthropic-version": API_VERSION,
            },
        )

    def parse_fragment_result(self, line: str) -> FragmentResult:
        if "content_block_delta" not in line or "text_delta" not in line:
            return NoContent()
        try:
            event = _event_decoder.decode(line)
        except msgspec.MsgspecError as exc:
            return DecodeError(reason=str(exc))

        delta = event.delta
        if delta is None or delta.type != "text_delta" or delta.text is None:
            return NoContent()
        return TextDelta(text=delta.text)

    def on_request_exit(self, body: str) -> ExitStatus:
        envelope = self._decode_error_envelope(_error_decoder, body)
        if isinstance(envelope, ParseFailure):
            return envelope

        error = envelope.error
        if error is None:
            return NoError()
        logger.error(
            "%s - type: %s message:%s", self.name.upper(), error.type, error.message
        )
        return VendorError(message=error.message, status=error.type)
