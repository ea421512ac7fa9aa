"""Provider protocol -- the contract every vendor adapter must satisfy."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Protocol

import msgspec

from .models import ModelRegistry, default_registry
from .payload import strip_sse_prefix
from .types import (
    ExitStatus,
    FragmentResult,
    NoError,
    ParseFailure,
    TextDelta,
    TransportConfig,
)

logger = logging.getLogger(__name__)


class Provider(Protocol):
    """Unified interface for vendor adapters.

    An adapter never performs I/O.  For each request the caller:

    1. calls :meth:`set_model` (a no-op for vendors that carry the model in
       the body),
    2. turns the generic payload into the vendor's wire shape with
       :meth:`preprocess_payload`,
    3. hands :meth:`transport_config` to the external executor,
    4. feeds every output line to :meth:`parse_fragment`,
    5. calls :meth:`on_request_exit` once with the full body.

    :meth:`verify` and :meth:`check` are health checks the caller runs
    before dispatch.
    """

    @property
    def name(self) -> str:
        """Vendor identifier (e.g. ``"openai"``, ``"gemini"``)."""
        ...

    endpoint: str
    api_key: Any
    current_model: str | None

    def set_model(self, spec: Any) -> None: ...

    def preprocess_payload(self, payload: Mapping[str, Any]) -> dict[str, Any]: ...

    def transport_config(self) -> TransportConfig: ...

    def verify(self) -> bool: ...

    def parse_fragment_result(self, line: str) -> FragmentResult: ...

    def parse_fragment(self, line: str) -> str | None: ...

    def check(self, spec: Any) -> bool: ...

    def on_request_exit(self, body: str) -> ExitStatus: ...


class BaseProvider:
    """Behaviour shared by the built-in adapters.

    Subclasses set ``provider_name`` and ``default_endpoint`` and implement
    :meth:`preprocess_payload`, :meth:`transport_config` and
    :meth:`parse_fragment_result`.
    """

    provider_name: ClassVar[str]
    default_endpoint: ClassVar[str]

    def __init__(
        self,
        endpoint: str | None = None,
        api_key: Any = None,
        *,
        registry: ModelRegistry | None = None,
    ) -> None:
        self.endpoint = endpoint or self.default_endpoint
        # Anything that is not a str is an unresolved credential marker.
        self.api_key = api_key
        self.current_model: str | None = None
        self._registry = registry if registry is not None else default_registry()

    @property
    def name(self) -> str:
        return self.provider_name

    def __repr__(self) -> str:
        return f"{type(self).__name__}(endpoint={self.endpoint!r})"

    def set_model(self, spec: Any) -> None:
        """Vendors that carry the model in the body ignore this."""

    def verify(self) -> bool:
        if not isinstance(self.api_key, str):
            logger.error(
                "api_key for %s is still an unresolved command: %r",
                self.name,
                self.api_key,
            )
            return False
        if not self.api_key.strip():
            logger.error("Error with api key %s %r", self.name, self.api_key)
            return False
        return True

    def check(self, spec: Any) -> bool:
        return self._registry.supports(self.name, spec)

    def parse_fragment_result(self, line: str) -> FragmentResult:
        raise NotImplementedError

    def parse_fragment(self, line: str) -> str | None:
        """Text carried by *line*, or ``None`` for anything else."""
        result = self.parse_fragment_result(line)
        if isinstance(result, TextDelta):
            return result.text
        return None

    def on_request_exit(self, body: str) -> ExitStatus:
        return NoError()

    @staticmethod
    def _decode_error_envelope(decoder: msgspec.json.Decoder, body: str) -> Any:
        """Decode *body* into an envelope with an ``error`` field.

        A plain JSON body is decoded whole.  Otherwise the body is scanned
        line by line (SSE ``data:`` prefixes removed) and the first line
        carrying an error wins.  Returns :class:`ParseFailure` when neither
        yields an envelope with an error.
        """
        try:
            return decoder.decode(body)
        except msgspec.MsgspecError as exc:
            failure = ParseFailure(reason=str(exc))

        for line in body.splitlines():
            line = strip_sse_prefix(line)
            if not line.startswith("{"):
                continue
            try:
                envelope = decoder.decode(line)
            except msgspec.MsgspecError:
                continue
            if envelope.error is not None:
                return envelope
        return failure
