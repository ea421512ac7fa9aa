"""polychat -- one chat contract over many vendor APIs.

Public API re-exports for convenient access::

    import polychat

    provider = polychat.create_provider("openai", api_key="sk-...")
    client = polychat.ChatClient(provider, transport, default_model="gpt-4o")
    messages = [
        polychat.system("You are helpful."),
        polychat.user("What is 2+2?"),
    ]
    stream, store = await client.stream(messages)
"""

from .client import ChatClient, Transport
from .config import ProviderConfig, load_providers
from .errors import (
    ConfigError,
    CredentialError,
    PolychatError,
    UnknownProviderError,
    UnsupportedModelError,
)
from .models import ModelRegistry, default_registry, resolve_model, to_model_spec
from .payload import filter_payload, strip_contents, strip_sse_prefix
from .provider import BaseProvider, Provider
from .types import (
    ChatPayload,
    DecodeError,
    ExitStatus,
    FragmentResult,
    Message,
    ModelSpec,
    NoContent,
    NoError,
    ParseFailure,
    Store,
    StreamResult,
    TextDelta,
    TransportConfig,
    VendorError,
    # Helper functions for constructing messages
    assistant,
    system,
    user,
)

from . import providers
from .providers import PROVIDERS, create_provider

__all__ = [
    # Client
    "ChatClient",
    "Transport",
    # Provider protocol & registry
    "Provider",
    "BaseProvider",
    "PROVIDERS",
    "create_provider",
    # Configuration
    "ProviderConfig",
    "load_providers",
    # Models
    "ModelRegistry",
    "ModelSpec",
    "default_registry",
    "resolve_model",
    "to_model_spec",
    # Payload helpers
    "filter_payload",
    "strip_contents",
    "strip_sse_prefix",
    # Message types & helpers
    "Message",
    "ChatPayload",
    "system",
    "user",
    "assistant",
    # Parse results
    "FragmentResult",
    "TextDelta",
    "NoContent",
    "DecodeError",
    # Exit statuses
    "ExitStatus",
    "NoError",
    "ParseFailure",
    "VendorError",
    # Transport
    "TransportConfig",
    "Store",
    "StreamResult",
    # Errors
    "PolychatError",
    "CredentialError",
    "UnsupportedModelError",
    "UnknownProviderError",
    "ConfigError",
    # Providers sub-package
    "providers",
]
