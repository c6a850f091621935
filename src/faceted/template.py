"""Minimal template engine for Markdown prompt templates.

Supports:
- ``{{#if name}}...{{else}}...{{/if}}`` conditional blocks (no nesting)
- ``{{name}}`` substitution

Conditionals are processed before substitution, so placeholders inside the
chosen branch are still filled in.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

_IF_BLOCK_RE = re.compile(
    r"\{\{#if\s+(\w+)\}\}(.*?)\{\{/if\}\}", re.DOTALL | re.ASCII
)
_VAR_RE = re.compile(r"\{\{(\w+)\}\}", re.ASCII)
_ELSE = "{{else}}"


def _is_truthy(value: str | bool | None) -> bool:
    return value is not None and value is not False and value != ""


def _as_text(value: str | bool | None) -> str:
    if value is None or value is False:
        return ""
    if value is True:
        return "true"
    return value


def process_conditionals(template: str, variables: Mapping[str, str | bool]) -> str:
    """Resolve ``{{#if}}`` blocks; the first ``{{/if}}`` closes a block."""

    def _replace(match: re.Match[str]) -> str:
        name, body = match.group(1), match.group(2)
        then_part, sep, else_part = body.partition(_ELSE)
        if _is_truthy(variables.get(name)):
            return then_part
        return else_part if sep else ""

    return _IF_BLOCK_RE.sub(_replace, template)


def substitute_variables(template: str, variables: Mapping[str, str | bool]) -> str:
    """Replace ``{{name}}`` placeholders; unbound and ``False`` render empty."""
    return _VAR_RE.sub(lambda m: _as_text(variables.get(m.group(1))), template)


def render_template(template: str, variables: Mapping[str, str | bool]) -> str:
    """Render conditionals, then substitute variables."""
    return substitute_variables(process_conditionals(template, variables), variables)
