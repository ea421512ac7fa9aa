"""ModelRegistry – which model identifiers each provider recognises.

Registries are data, not code: the defaults ship as ``models.yaml`` inside
the package and a host can layer its own file on top with
:meth:`ModelRegistry.merge`.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable, Mapping
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .types import ModelSpec


# ---------------------------------------------------------------------------
# Model spec resolution
# ---------------------------------------------------------------------------


def to_model_spec(spec: Any) -> ModelSpec:
    """Normalise the accepted model argument shapes into a :class:`ModelSpec`.

    Accepts a bare string, a :class:`ModelSpec`, a mapping with a
    ``"model"`` key, or any object exposing a ``.model`` attribute.
    """
    if isinstance(spec, ModelSpec):
        return spec
    if isinstance(spec, str):
        return ModelSpec(kind="literal", value=spec)
    if isinstance(spec, Mapping):
        value = spec.get("model")
    else:
        value = getattr(spec, "model", None)
    if not isinstance(value, str):
        raise TypeError(f"cannot resolve a model name from {spec!r}")
    return ModelSpec(kind="structured", value=value)


def resolve_model(spec: Any) -> str:
    """Return the model name carried by *spec*."""
    return to_model_spec(spec).value


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class ModelRegistry:
    """Per-provider sets of recognised model identifiers."""

    def __init__(self, models: Mapping[str, Iterable[str]] | None = None) -> None:
        self._models: dict[str, frozenset[str]] = {
            provider: frozenset(ids) for provider, ids in (models or {}).items()
        }

    # ------------------------------------------------------------------
    # YAML loading
    # ------------------------------------------------------------------

    @classmethod
    def from_yaml(cls, path: str | Path) -> ModelRegistry:
        with Path(path).open("r", encoding="utf-8") as f:
            return cls.from_data(yaml.safe_load(f))

    @classmethod
    def from_data(cls, data: Any) -> ModelRegistry:
        """Build a registry from the parsed YAML document.

        The document is a list of ``{provider: <name>, models: [<id>, ...]}``
        entries; repeated providers are unioned.
        """
        if not isinstance(data, list):
            raise ConfigError("model registry must be a list of provider entries")

        models: dict[str, set[str]] = {}
        for entry in data:
            if not isinstance(entry, dict) or "provider" not in entry:
                raise ConfigError(f"invalid model registry entry: {entry!r}")
            ids = entry.get("models") or []
            if not isinstance(ids, list):
                raise ConfigError(
                    f"models for {entry['provider']!r} must be a list"
                )
            models.setdefault(str(entry["provider"]), set()).update(
                str(model_id) for model_id in ids
            )
        return cls(models)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def models(self, provider: str) -> frozenset[str]:
        return self._models.get(provider, frozenset())

    def providers(self) -> list[str]:
        return sorted(self._models)

    def supports(self, provider: str, model: Any) -> bool:
        """Whether *model* is registered for *provider*.

        Unknown providers and unresolvable specs are simply unsupported.
        """
        try:
            name = resolve_model(model)
        except TypeError:
            return False
        return name in self.models(provider)

    def merge(self, other: ModelRegistry) -> ModelRegistry:
        """Return a new registry holding the union of both."""
        merged: dict[str, set[str]] = {
            provider: set(ids) for provider, ids in self._models.items()
        }
        for provider, ids in other._models.items():
            merged.setdefault(provider, set()).update(ids)
        return ModelRegistry(merged)


@functools.cache
def default_registry() -> ModelRegistry:
    """The registry bundled with the package."""
    text = resources.files(__package__).joinpath("models.yaml").read_text(
        encoding="utf-8"
    )
    return ModelRegistry.from_data(yaml.safe_load(text))
