"""Provider configuration files.

A config file is a YAML list of provider entries::

    - provider: openai
      api_key: sk-...
    - provider: gemini
      endpoint: https://generativelanguage.googleapis.com/v1beta/models/
      api_key: [pass, show, gemini]    # still to be resolved by the host

``api_key`` is passed to the adapter untouched; anything that is not a
string is treated as an unresolved credential by :meth:`Provider.verify`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import msgspec
import yaml

from .errors import ConfigError
from .models import ModelRegistry
from .provider import BaseProvider
from .providers import create_provider


class ProviderConfig(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    """One configured vendor endpoint + credential pair."""

    provider: str
    api_key: Any = None
    endpoint: str | None = None


def parse_providers(data: Any) -> list[ProviderConfig]:
    if not isinstance(data, list):
        raise ConfigError("provider config must be a list of provider entries")
    try:
        return msgspec.convert(data, type=list[ProviderConfig])
    except msgspec.ValidationError as exc:
        raise ConfigError(f"invalid provider config: {exc}") from exc


def load_providers(
    path: str | Path,
    *,
    registry: ModelRegistry | None = None,
) -> dict[str, BaseProvider]:
    """Read *path* and build one adapter per entry, keyed by provider name."""
    with Path(path).open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    providers: dict[str, BaseProvider] = {}
    for entry in parse_providers(data):
        if entry.provider in providers:
            raise ConfigError(f"provider {entry.provider!r} configured twice")
        providers[entry.provider] = create_provider(
            entry.provider,
            entry.api_key,
            entry.endpoint,
            registry=registry,
        )
    return providers
