"""ChatClient – drives a provider and an external transport."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any, Protocol

import msgspec

from .errors import CredentialError, UnsupportedModelError
from .models import resolve_model
from .payload import strip_sse_prefix
from .provider import Provider
from .types import Message, StreamResult, TransportConfig

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """The executor that actually performs the HTTP call.

    ``stream`` yields raw output lines as they arrive.  Cancelling the
    request is the transport's job; if it stops yielding, the client simply
    finishes with whatever text it has.
    """

    def stream(self, config: TransportConfig, body: bytes) -> AsyncIterator[str]: ...


class ChatClient:
    """Uniform chat entry point.

    Wraps one :class:`Provider` and one :class:`Transport`, exposing a
    ``stream()`` method that yields plain text deltas and populates a
    *store* dict with ``"text"`` and ``"exit"`` once the stream is
    exhausted.

    ``set_model``, ``preprocess_payload`` and ``transport_config`` run back
    to back with no ``await`` between them, so requests sharing one event
    loop cannot swap each other's model.  A client shared across threads
    needs its own lock, or one provider instance per thread.
    """

    def __init__(
        self,
        provider: Provider,
        transport: Transport,
        default_model: Any,
    ) -> None:
        self.provider = provider
        self.transport = transport
        self.default_model = default_model

    async def stream(
        self,
        messages: list[Message],
        *,
        model: Any = None,
        **options: Any,
    ) -> StreamResult:
        """Start a streaming chat request.

        Raises :class:`CredentialError` or :class:`UnsupportedModelError`
        before anything is sent.
        """
        provider = self.provider
        spec = model if model is not None else self.default_model

        if not provider.verify():
            raise CredentialError(f"{provider.name}: invalid api key")
        if not provider.check(spec):
            try:
                model_name = resolve_model(spec)
            except TypeError:
                model_name = repr(spec)
            raise UnsupportedModelError(provider.name, model_name)

        model_name = resolve_model(spec)
        provider.set_model(spec)
        payload = provider.preprocess_payload(
            {
                **options,
                "messages": messages,
                "model": model_name,
                "stream": True,
            }
        )
        config = provider.transport_config()

        body = msgspec.json.encode(payload)
        logger.debug(
            "dispatching %s request to %s (%d bytes)",
            provider.name,
            config.endpoint,
            len(body),
        )

        store: dict = {}
        iterator = self._iterate(config, body, store)
        return iterator, store

    async def _iterate(
        self,
        config: TransportConfig,
        body: bytes,
        store: dict,
    ) -> AsyncIterator[str]:
        raw_lines: list[str] = []
        text_parts: list[str] = []

        async for line in self.transport.stream(config, body):
            raw_lines.append(line)
            text = self.provider.parse_fragment(strip_sse_prefix(line))
            if text:
                text_parts.append(text)
                yield text

        store["text"] = "".join(text_parts)
        store["exit"] = self.provider.on_request_exit("\n".join(raw_lines))
