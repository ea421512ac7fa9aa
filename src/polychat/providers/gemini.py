"""Google Gemini provider implementation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import msgspec

from ..models import resolve_model
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

# Generic option name -> generationConfig field
GENERATION_CONFIG_FIELDS = {
    "temperature": "temperature",
    "top_p": "topP",
    "top_k": "topK",
    "max_tokens": "maxOutputTokens",
    "stop": "stopSequences",
}


# ---------------------------------------------------------------------------
# Wire shapes (only the fields we read)
# ---------------------------------------------------------------------------


class _Part(msgspec.Struct):
    text: str | None = None


class _Content(msgspec.Struct):
    parts: list[_Part] = msgspec.field(default_factory=list)


class _Candidate(msgspec.Struct):
    content: _Content | None = None


class _Chunk(msgspec.Struct):
    candidates: list[_Candidate] = msgspec.field(default_factory=list)


class _ApiError(msgspec.Struct):
    code: int | None = None
    message: str | None = None
    status: str | None = None


class _ErrorEnvelope(msgspec.Struct):
    error: _ApiError | None = None


_chunk_decoder = msgspec.json.Decoder(_Chunk)
_error_decoder = msgspec.json.Decoder(_ErrorEnvelope)


class GeminiProvider(BaseProvider):
    """Provider for the Gemini ``generateContent`` REST API.

    The model is part of the URL path, so :meth:`set_model` must run before
    :meth:`transport_config` for every request.
    """

    provider_name = "gemini"
    default_endpoint = "https://generativelanguage.googleapis.com/v1beta/models/"

    def set_model(self, spec: Any) -> None:
        self.current_model = resolve_model(spec)

    # ------------------------------------------------------------------
    # Payload conversion: generic messages -> Gemini contents
    # ------------------------------------------------------------------

    @staticmethod
    def _convert_messages(
        messages: list[Message],
    ) -> tuple[str | None, list[dict[str, Any]]]:
        """Split off the system prompt and convert the rest to ``contents``.

        - {"role": "system", ...}    -> system instruction (last one wins)
        - {"role": "assistant", ...} -> {"role": "model", "parts": [...]}
        - {"role": "user", ...}      -> {"role": "user", "parts": [...]}
        """
        system_text: str | None = None
        contents: list[dict[str, Any]] = []
        for message in messages:
            role = message["role"]
            if role == "system":
                system_text = message["content"]
                continue
            contents.append(
                {
                    "role": "model" if role == "assistant" else role,
                    "parts": [{"text": message["content"]}],
                }
            )
        return system_text, contents

    @staticmethod
    def _generation_config(payload: Mapping[str, Any]) -> dict[str, Any]:
        config: dict[str, Any] = {}
        for option, field in GENERATION_CONFIG_FIELDS.items():
            if option not in payload:
                continue
            value = payload[option]
            if option == "stop" and isinstance(value, str):
                value = [value]
            config[field] = value
        return config

    def preprocess_payload(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        system_text, contents = self._convert_messages(payload.get("messages", []))

        result: dict[str, Any] = {}
        if system_text is not None:
            result["systemInstruction"] = {"parts": {"text": system_text}}
        result["contents"] = contents

        generation_config = self._generation_config(payload)
        if generation_config:
            result["generationConfig"] = generation_config
        return result

    def transport_config(self) -> TransportConfig:
        if self.current_model is None:
            logger.error("%s: transport_config called before set_model", self.name)
        return TransportConfig(
            endpoint=f"{self.endpoint}{self.current_model}:streamGenerateContent?alt=sse",
            headers={"x-goog-api-key": str(self.api_key)},
        )

    # ------------------------------------------------------------------
    # Response parsing
    # ------------------------------------------------------------------

    def parse_fragment_result(self, line: str) -> FragmentResult:
        if not line.strip():
            return NoContent()
        try:
            chunk = _chunk_decoder.decode(line)
        except msgspec.MsgspecError as exc:
            return DecodeError(reason=str(exc))

        if not chunk.candidates:
            return NoContent()
        content = chunk.candidates[0].content
        if content is None or not content.parts:
            return NoContent()
        text = content.parts[0].text
        if text is None:
            return NoContent()
        return TextDelta(text=text)

    def on_request_exit(self, body: str) -> ExitStatus:
        """Log the vendor's error envelope, if the body carries one.

        The envelope is found either as the whole body or as one SSE
        ``data:`` line of a streamed body.  A body that yields neither is
        reported as :class:`ParseFailure` and, like a clean body, is not
        logged.
        """
        envelope = self._decode_error_envelope(_error_decoder, body)
        if isinstance(envelope, ParseFailure):
            return envelope

        error = envelope.error
        if error is None:
            return NoError()
        logger.error(
            "%s - code: %s message:%s status:%s",
            self.name.upper(),
            error.code,
            error.message,
            error.status,
        )
        return VendorError(code=error.code, message=error.message, status=error.status)
