"""Built-in providers and the name -> adapter registry."""

from __future__ import annotations

from typing import Any

from ..errors import UnknownProviderError
from ..models import ModelRegistry
from ..provider import BaseProvider
from .anthropic import AnthropicMessagesProvider
from .gemini import GeminiProvider
from .openai import OpenAIChatCompletionProvider

PROVIDERS: dict[str, type[BaseProvider]] = {
    OpenAIChatCompletionProvider.provider_name: OpenAIChatCompletionProvider,
    GeminiProvider.provider_name: GeminiProvider,
    AnthropicMessagesProvider.provider_name: AnthropicMessagesProvider,
}


def create_provider(
    name: str,
    api_key: Any,
    endpoint: str | None = None,
    *,
    registry: ModelRegistry | None = None,
) -> BaseProvider:
    """Construct the adapter registered under *name*.

    *endpoint* defaults to the vendor's public API.
    """
    try:
        cls = PROVIDERS[name]
    except KeyError:
        raise UnknownProviderError(name) from None
    return cls(endpoint, api_key, registry=registry)


__all__ = [
    "OpenAIChatCompletionProvider",
    "GeminiProvider",
    "AnthropicMessagesProvider",
    "PROVIDERS",
    "create_provider",
]
