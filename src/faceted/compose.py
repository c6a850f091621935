"""Facet composition: the placement rule.

    system prompt:  persona only                      (WHO)
    user message:   policy, knowledge, instruction,   (HOW / WHAT TO KNOW /
                    additional instructions            WHAT TO DO)

Policy and knowledge are advisory and carry conflict notices; instructions
are the operative directive and are passed through unmodified.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from faceted.truncation import prepare_knowledge_content, prepare_policy_content
from faceted.types import ComposedPrompt

if TYPE_CHECKING:
    from collections.abc import Sequence

    from faceted.types import ComposeOptions, FacetContent, FacetSet

log = logging.getLogger(__name__)

FACET_SEPARATOR = "\n\n---\n\n"
_PART_SEPARATOR = "\n\n"


def _non_empty(facets: Sequence[FacetContent]) -> list[FacetContent]:
    return [f for f in facets if f.body]


def _join_bodies(facets: Sequence[FacetContent]) -> str:
    return FACET_SEPARATOR.join(f.body for f in facets)


def _single_source_path(facets: Sequence[FacetContent]) -> str | None:
    """Source path of a lone facet; a joined block has no single source."""
    if len(facets) == 1:
        return facets[0].source_path
    return None


def compose(facets: FacetSet, options: ComposeOptions) -> ComposedPrompt:
    """Compose facets into an LLM-ready prompt.

    - persona -> ``system_prompt``
    - policy / knowledge / instruction / additional instructions ->
      ``user_message``, in that order, separated by blank lines

    Policies and knowledge items are each joined into one block before
    ``options.context_max_chars`` is applied to that block.
    """
    system_prompt = facets.persona.body if facets.persona else ""
    limit = options.context_max_chars

    user_parts: list[str] = []

    policies = _non_empty(facets.policies)
    if policies:
        user_parts.append(
            prepare_policy_content(
                _join_bodies(policies),
                limit,
                _single_source_path(policies),
            )
        )

    knowledge = _non_empty(facets.knowledge)
    if knowledge:
        user_parts.append(
            prepare_knowledge_content(
                _join_bodies(knowledge),
                limit,
                _single_source_path(knowledge),
            )
        )

    if facets.instruction and facets.instruction.body:
        user_parts.append(facets.instruction.body)

    user_parts.extend(f.body for f in facets.additional_instructions if f.body)

    user_message = _PART_SEPARATOR.join(user_parts)
    log.debug(
        "composed prompt: persona=%s policies=%d knowledge=%d instruction=%s "
        "additional=%d system_len=%d user_len=%d",
        facets.persona is not None,
        len(policies),
        len(knowledge),
        facets.instruction is not None,
        len(facets.additional_instructions),
        len(system_prompt),
        len(user_message),
    )
    return ComposedPrompt(system_prompt=system_prompt, user_message=user_message)
