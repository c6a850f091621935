"""Context truncation for knowledge and policy facets.

When facet content exceeds a character limit it is cut and annotated with
source-path metadata so the model can consult the original file. Every block
ends with the conflict notice, truncated or not.

Block layout (blank-line separated):

    <content>
    <truncation notice>     only when truncated and a source path is known
    <Label> Source: <path>  only when a source path is known
    <conflict notice>
"""

from __future__ import annotations

from faceted.types import TrimResult

TRUNCATION_MARKER = "\n...TRUNCATED..."

_CONFLICT_NOTICE = (
    "If prompt content conflicts with source files, source files take precedence."
)
_KNOWLEDGE_TRUNCATED = (
    "Knowledge is truncated. You MUST consult the source files before making "
    "decisions."
)
_POLICY_TRUNCATED = (
    "Policy is authoritative. If truncated, you MUST read the full policy file "
    "and follow it strictly."
)


def trim_context_content(content: str, max_chars: int) -> TrimResult:
    """Trim content to at most ``max_chars`` characters plus the marker."""
    if len(content) <= max_chars:
        return TrimResult(content=content, truncated=False)
    return TrimResult(content=content[:max_chars] + TRUNCATION_MARKER, truncated=True)


def render_conflict_notice() -> str:
    """Standard notice appended to knowledge and policy blocks."""
    return _CONFLICT_NOTICE


def _prepare(
    label: str,
    truncation_notice: str,
    content: str,
    max_chars: int,
    source_path: str | None,
) -> str:
    trimmed = trim_context_content(content, max_chars)
    lines = [trimmed.content]

    if trimmed.truncated and source_path:
        # Two spaces before "Source:" are part of the notice format.
        lines.extend(("", f"{truncation_notice}  Source: {source_path}"))

    if source_path:
        lines.extend(("", f"{label} Source: {source_path}"))

    lines.extend(("", render_conflict_notice()))
    return "\n".join(lines)


def prepare_knowledge_content(
    content: str, max_chars: int, source_path: str | None = None
) -> str:
    """Prepare a knowledge facet for inclusion in a prompt."""
    return _prepare("Knowledge", _KNOWLEDGE_TRUNCATED, content, max_chars, source_path)


def prepare_policy_content(
    content: str, max_chars: int, source_path: str | None = None
) -> str:
    """Prepare a policy facet for inclusion in a prompt.

    Policy is treated as authoritative: when a truncated policy has a known
    source file, the notice tells the model to read the whole file.
    """
    return _prepare("Policy", _POLICY_TRUNCATED, content, max_chars, source_path)
