"""OpenAI / OpenAI-compatible provider implementation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import msgspec

from ..payload import filter_payload, strip_contents
from ..provider import BaseProvider
from ..types import (
    DecodeError,
    FragmentResult,
    NoContent,
    TextDelta,
    TransportConfig,
)

# https://platform.openai.com/docs/api-reference/chat/create
API_PARAMETERS = frozenset(
    {
        # required
        "messages",
        "model",
        # optional
        "frequency_penalty",
        "logit_bias",
        "logprobs",
        "top_logprobs",
        "max_tokens",
        "presence_penalty",
        "seed",
        "stop",
        "stream",
        "temperature",
        "top_p",
        "tools",
        "tool_choice",
    }
)

# "chat.completion" also covers "chat.completion.chunk".
_COMPLETION_MARKER = "chat.completion"


# ---------------------------------------------------------------------------
# Wire shapes (only the fields we read)
# ---------------------------------------------------------------------------


class _Delta(msgspec.Struct):
    content: str | None = None


class _Choice(msgspec.Struct):
    delta: _Delta | None = None


class _Chunk(msgspec.Struct):
    choices: list[_Choice] = msgspec.field(default_factory=list)


_decoder = msgspec.json.Decoder(_Chunk)


class OpenAIChatCompletionProvider(BaseProvider):
    """Provider for the OpenAI chat completions API."""

    provider_name = "openai"
    default_endpoint = "https://api.openai.com/v1/chat/completions"

    def preprocess_payload(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Trim message contents and drop fields the API does not accept."""
        payload = dict(payload)
        payload["messages"] = strip_contents(payload.get("messages", []))
        return filter_payload(API_PARAMETERS, payload)

    def transport_config(self) -> TransportConfig:
        return TransportConfig(
            endpoint=self.endpoint,
            headers={"authorization": f"Bearer {self.api_key}"},
        )

    def parse_fragment_result(self, line: str) -> FragmentResult:
        if _COMPLETION_MARKER not in line:
            return NoContent()
        try:
            chunk = _decoder.decode(line)
        except msgspec.MsgspecError as exc:
            return DecodeError(reason=str(exc))

        if not chunk.choices:
            return NoContent()
        delta = chunk.choices[0].delta
        if delta is None or delta.content is None:
            return NoContent()
        return TextDelta(text=delta.content)

