"""Core types for polychat.

Messages and payloads are plain dicts (they go straight onto the wire).
Parse results, exit statuses and transport configuration use msgspec
structs so callers can pattern-match on them.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any, Literal, TypedDict

import msgspec


# ---------------------------------------------------------------------------
# Messages & payloads
# ---------------------------------------------------------------------------

Role = Literal["system", "user", "assistant"]


class Message(TypedDict):
    """One conversation turn."""

    role: Role
    content: str


class ChatPayload(TypedDict, total=False):
    """Vendor-agnostic request body.

    Only ``messages`` is structural; everything else is an option that each
    provider filters against its own allow-list.
    """

    messages: list[Message]
    model: str
    temperature: float
    top_p: float
    top_k: int
    max_tokens: int
    stream: bool
    stop: str | list[str]
    seed: int
    tools: list[dict[str, Any]]
    tool_choice: str | dict[str, Any]


def system(content: str) -> Message:
    """Create a system message."""
    return {"role": "system", "content": content}


def user(content: str) -> Message:
    """Create a user message."""
    return {"role": "user", "content": content}


def assistant(content: str) -> Message:
    """Create an assistant message."""
    return {"role": "assistant", "content": content}


# ---------------------------------------------------------------------------
# Model spec
# ---------------------------------------------------------------------------


class ModelSpec(msgspec.Struct, frozen=True):
    """A model reference remembered together with the shape it came in.

    ``kind`` is ``"literal"`` for a bare model name and ``"structured"``
    for anything that carried the name in a ``model`` field.
    """

    kind: Literal["literal", "structured"]
    value: str


# ---------------------------------------------------------------------------
# Fragment parse results
# ---------------------------------------------------------------------------


class TextDelta(msgspec.Struct, frozen=True):
    """Incremental text extracted from a fragment (may be empty)."""

    text: str


class NoContent(msgspec.Struct, frozen=True):
    """The fragment is well-formed but carries no text (keep-alive, role
    delta, non-content event, ...)."""


class DecodeError(msgspec.Struct, frozen=True):
    """The fragment looked like content but could not be decoded."""

    reason: str


FragmentResult = TextDelta | NoContent | DecodeError


# ---------------------------------------------------------------------------
# Exit-time status
# ---------------------------------------------------------------------------


class NoError(msgspec.Struct, frozen=True):
    """The full body decoded and carried no error envelope."""


class ParseFailure(msgspec.Struct, frozen=True):
    """The full body could not be decoded; reported as success by default."""

    reason: str


class VendorError(msgspec.Struct, frozen=True):
    """An error envelope returned by the vendor."""

    code: int | str | None = None
    message: str | None = None
    status: str | None = None


ExitStatus = NoError | ParseFailure | VendorError


# ---------------------------------------------------------------------------
# Transport configuration
# ---------------------------------------------------------------------------


class TransportConfig(msgspec.Struct, frozen=True):
    """Where and how the external executor should send the request."""

    endpoint: str
    headers: dict[str, str] = msgspec.field(default_factory=dict)

    def args(self) -> list[str]:
        """Ordered, command-line-like argument list for the executor.

        Example::

            ["https://api.openai.com/v1/chat/completions",
             "-H", "authorization: Bearer sk-..."]
        """
        result = [self.endpoint]
        for name, value in self.headers.items():
            result.extend(["-H", f"{name}: {value}"])
        return result


# ---------------------------------------------------------------------------
# Type alias for the stream return
# ---------------------------------------------------------------------------

Store = dict
"""Mutable dict populated after the stream is exhausted.

Expected keys (set by :class:`~polychat.client.ChatClient`):
    ``"text"``  – accumulated response text
    ``"exit"``  – :data:`ExitStatus` from the provider's exit check
"""

StreamResult = tuple[AsyncIterator[str], Store]
"""Return type of ``ChatClient.stream()``."""
