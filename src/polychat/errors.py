"""Exceptions raised by the dispatch and configuration layers.

Provider adapters never raise from their parse/verify/check paths; they
degrade to ``None`` / ``False`` instead.
"""

from __future__ import annotations


class PolychatError(Exception):
    """Base class for all polychat errors."""


class CredentialError(PolychatError):
    """The provider's credential is missing, blank or unresolved."""


class UnsupportedModelError(PolychatError):
    """The requested model is not in the provider's registry."""

    def __init__(self, provider: str, model: str) -> None:
        super().__init__(f"{provider}: unsupported model {model!r}")
        self.provider = provider
        self.model = model


class UnknownProviderError(PolychatError, KeyError):
    """No adapter is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown provider: {self.name!r}"


class ConfigError(PolychatError):
    """A configuration file is malformed."""
