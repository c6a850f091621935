"""Core data types for facet composition.

All types are immutable. A ``FacetSet`` is built once per prompt-build request
and discarded after ``compose`` returns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from faceted.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable

FacetKind = Literal[
    "persona",
    "policy",
    "knowledge",
    "instruction",
    "additional_instruction",
]

#: Facet kinds in placement order.
FACET_KINDS: tuple[FacetKind, ...] = (
    "persona",
    "policy",
    "knowledge",
    "instruction",
    "additional_instruction",
)


@dataclass(frozen=True, slots=True)
class FacetContent:
    """A resolved facet body.

    ``source_path`` is set only when the body was read from a file; inline
    content never carries one.
    """

    body: str
    source_path: str | None = None


def _as_tuple(items: Iterable[FacetContent] | None) -> tuple[FacetContent, ...]:
    if items is None:
        return ()
    return tuple(items)


@dataclass(frozen=True, slots=True)
class FacetSet:
    """Resolved facets for one prompt.

    Sequences keep caller order; the composer joins them in that order.
    """

    persona: FacetContent | None = None
    policies: tuple[FacetContent, ...] = ()
    knowledge: tuple[FacetContent, ...] = ()
    instruction: FacetContent | None = None
    additional_instructions: tuple[FacetContent, ...] = ()

    def __post_init__(self) -> None:
        """Normalize list inputs to tuples so the set stays immutable."""
        object.__setattr__(self, "policies", _as_tuple(self.policies))
        object.__setattr__(self, "knowledge", _as_tuple(self.knowledge))
        object.__setattr__(
            self, "additional_instructions", _as_tuple(self.additional_instructions)
        )

    def is_empty(self) -> bool:
        return not (
            self.persona
            or self.policies
            or self.knowledge
            or self.instruction
            or self.additional_instructions
        )


@dataclass(frozen=True, slots=True)
class ComposeOptions:
    """Options for ``compose``.

    ``context_max_chars`` applies independently to the joined policy block and
    the joined knowledge block. Persona and instruction are never trimmed.
    """

    context_max_chars: int

    def __post_init__(self) -> None:
        """Reject limits that cannot be a character count."""
        v = self.context_max_chars
        if isinstance(v, bool) or not isinstance(v, int):
            raise ConfigurationError(
                f"context_max_chars must be an int, got {type(v).__name__}",
                hint="Pass ComposeOptions(context_max_chars=2000).",
            )
        if v < 0:
            raise ConfigurationError(
                f"context_max_chars must be >= 0, got {v}",
                hint="Use 0 to keep only notices, or a positive character budget.",
            )


@dataclass(frozen=True, slots=True)
class ComposedPrompt:
    """Final two-part prompt ready for a chat model."""

    system_prompt: str = ""
    user_message: str = ""


@dataclass(frozen=True, slots=True)
class TrimResult:
    content: str
    truncated: bool
