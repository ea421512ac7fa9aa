"""Payload helpers shared by every provider."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from typing import Any

from .types import Message


def filter_payload(
    allowed: Collection[str], payload: Mapping[str, Any]
) -> dict[str, Any]:
    """Return a new dict holding only the keys of *payload* found in *allowed*.

    Values are copied by reference and the payload's key order is kept.
    """
    return {key: value for key, value in payload.items() if key in allowed}


def strip_contents(messages: Iterable[Message]) -> list[Message]:
    """Copy *messages*, trimming surrounding whitespace from text content."""
    result: list[Message] = []
    for message in messages:
        content = message.get("content")
        if isinstance(content, str):
            message = {**message, "content": content.strip()}
        else:
            message = dict(message)  # type: ignore[assignment]
        result.append(message)
    return result


_SSE_DATA_PREFIX = "data:"


def strip_sse_prefix(line: str) -> str:
    """Remove a leading ``data:`` field name from a server-sent event line."""
    if line.startswith(_SSE_DATA_PREFIX):
        return line[len(_SSE_DATA_PREFIX) :].lstrip()
    return line
