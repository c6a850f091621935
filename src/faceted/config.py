"""Configuration: resolve once, freeze, then flow.

Settings are resolved at the entry point from defaults, the environment and
explicit overrides, validated by a pydantic schema, and frozen. Nothing
mutates configuration afterwards.

Precedence (lowest to highest):
1. ``Settings`` defaults
2. environment (``FACETED_*``; a project ``.env`` is loaded first)
3. ``overrides`` passed to ``resolve_config``
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from faceted.errors import ConfigurationError
from faceted.types import ComposeOptions

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_CONTEXT_MAX_CHARS = 2000

_ENV_PREFIX = "FACETED_"
_ENV_FIELDS = ("context_max_chars", "facet_dirs", "base_dir")


class Settings(BaseModel):
    """Schema for configuration fields, defaults and validation."""

    context_max_chars: int = Field(default=DEFAULT_CONTEXT_MAX_CHARS, ge=0)
    facet_dirs: tuple[Path, ...] = Field(default=())
    base_dir: Path = Field(default=Path("."))

    model_config = {"extra": "forbid"}

    @field_validator("facet_dirs", mode="before")
    @classmethod
    def split_facet_dirs(cls, v: Any) -> Any:
        """Accept an ``os.pathsep``-separated string as well as a sequence."""
        if isinstance(v, str):
            return tuple(part for part in v.split(os.pathsep) if part.strip())
        if isinstance(v, Path):
            return (v,)
        return v


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration payload handed to the pipeline."""

    context_max_chars: int
    facet_dirs: tuple[Path, ...]
    base_dir: Path

    @property
    def compose_options(self) -> ComposeOptions:
        return ComposeOptions(context_max_chars=self.context_max_chars)


def _env_layer(environ: Mapping[str, str]) -> dict[str, Any]:
    layer: dict[str, Any] = {}
    for name in _ENV_FIELDS:
        value = environ.get(f"{_ENV_PREFIX}{name.upper()}")
        if value is not None and value.strip() != "":
            layer[name] = value.strip()
    return layer


def resolve_config(overrides: Mapping[str, Any] | None = None) -> FrozenConfig:
    """Resolve configuration into a ``FrozenConfig``.

    Raises:
        ConfigurationError: When a value fails validation or an override
            names an unknown field.
    """
    load_dotenv()
    merged: dict[str, Any] = _env_layer(os.environ)
    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        first = e.errors()[0]
        loc = first.get("loc") or ("<root>",)
        field = str(loc[0])
        env_key = f"{_ENV_PREFIX}{field.upper()}"
        raise ConfigurationError(
            f"Invalid configuration for {field!r}: {first.get('msg', e)}",
            hint=f"Check the {field} override or the {env_key} environment variable.",
        ) from e

    return FrozenConfig(
        context_max_chars=settings.context_max_chars,
        facet_dirs=settings.facet_dirs,
        base_dir=settings.base_dir,
    )
