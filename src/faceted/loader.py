"""Build a ``FacetSet`` from facet references.

The resolver returns bare text; this module follows the same lookup order but
keeps the file path whenever a body was read from disk, so the composer can
attribute policy and knowledge blocks to their source.

Named facets are searched in ``{facet_dir}/{kind}`` for each facet directory,
the same layout ``FileDataEngine`` serves.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from faceted.resolve import (
    FACET_SUFFIX,
    is_resource_path,
    resolve_facet_path,
    resolve_resource_path,
)
from faceted.template import render_template
from faceted.types import FacetContent, FacetSet

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from faceted.data_engine import DataEngine
    from faceted.types import FacetKind

log = logging.getLogger(__name__)


def _read_file(path: str) -> FacetContent | None:
    body = Path(path).read_text(encoding="utf-8")
    if not body:
        log.debug("facet file %s is empty; skipping", path)
        return None
    return FacetContent(body=body, source_path=os.path.abspath(path))


def load_facet(
    ref: str,
    base_dir: str | Path,
    candidate_dirs: Sequence[str | Path] | None = None,
    *,
    resolved_map: Mapping[str, str] | None = None,
) -> FacetContent | None:
    """Resolve a reference to a ``FacetContent``.

    Mirrors ``resolve_ref_to_content``: mapped content first, then resource
    paths, then named facets, then the reference itself as inline text.
    Returns None when the result is empty.
    """
    mapped = resolved_map.get(ref) if resolved_map else None
    if mapped:
        return FacetContent(body=mapped)

    if is_resource_path(ref):
        if ref.endswith(FACET_SUFFIX):
            resolved = resolve_resource_path(ref, base_dir)
            if Path(resolved).is_file():
                return _read_file(resolved)
        return FacetContent(body=ref) if ref else None

    if candidate_dirs is not None:
        file_path = resolve_facet_path(ref, candidate_dirs)
        if file_path is not None:
            return _read_file(file_path)

    return FacetContent(body=ref) if ref else None


def candidate_dirs_for(
    kind: FacetKind, facet_dirs: Iterable[str | Path]
) -> list[str]:
    """Per-kind candidate directories, in priority order."""
    return [os.path.join(d, kind) for d in facet_dirs]


def _render(
    content: FacetContent | None, variables: Mapping[str, str | bool] | None
) -> FacetContent | None:
    if content is None or variables is None:
        return content
    body = render_template(content.body, variables)
    if not body:
        return None
    return FacetContent(body=body, source_path=content.source_path)


def build_facet_set(
    *,
    base_dir: str | Path,
    facet_dirs: Sequence[str | Path] = (),
    persona: str | None = None,
    policies: Sequence[str] = (),
    knowledge: Sequence[str] = (),
    instruction: str | None = None,
    additional_instructions: Sequence[str] = (),
    variables: Mapping[str, str | bool] | None = None,
    resolved_map: Mapping[str, str] | None = None,
) -> FacetSet:
    """Resolve references into a ``FacetSet``.

    When ``variables`` is given every body is rendered with
    ``render_template`` before composition. References that resolve to
    nothing are dropped.
    """

    def load(kind: FacetKind, ref: str) -> FacetContent | None:
        content = load_facet(
            ref,
            base_dir,
            candidate_dirs_for(kind, facet_dirs),
            resolved_map=resolved_map,
        )
        if content is None:
            log.debug("%s ref %r resolved to nothing; skipping", kind, ref)
        return _render(content, variables)

    def load_many(kind: FacetKind, refs: Sequence[str]) -> tuple[FacetContent, ...]:
        loaded = (load(kind, ref) for ref in refs)
        return tuple(c for c in loaded if c is not None)

    return FacetSet(
        persona=load("persona", persona) if persona is not None else None,
        policies=load_many("policy", policies),
        knowledge=load_many("knowledge", knowledge),
        instruction=(
            load("instruction", instruction) if instruction is not None else None
        ),
        additional_instructions=load_many(
            "additional_instruction", additional_instructions
        ),
    )


async def facet_set_from_engine(
    engine: DataEngine,
    *,
    persona: str | None = None,
    policies: Sequence[str] = (),
    knowledge: Sequence[str] = (),
    instruction: str | None = None,
    additional_instructions: Sequence[str] = (),
    variables: Mapping[str, str | bool] | None = None,
) -> FacetSet:
    """Resolve facet keys through a ``DataEngine`` into a ``FacetSet``.

    Keys the engine does not know are skipped with a warning.
    """

    async def load(kind: FacetKind, key: str) -> FacetContent | None:
        content = await engine.resolve(kind, key)
        if content is None:
            log.warning("%s %r not found; omitting it from the prompt", kind, key)
        elif not content.body:
            log.debug("%s %r is empty; omitting it from the prompt", kind, key)
            return None
        return _render(content, variables)

    async def load_many(
        kind: FacetKind, keys: Sequence[str]
    ) -> tuple[FacetContent, ...]:
        loaded = [await load(kind, key) for key in keys]
        return tuple(c for c in loaded if c is not None)

    return FacetSet(
        persona=await load("persona", persona) if persona is not None else None,
        policies=await load_many("policy", policies),
        knowledge=await load_many("knowledge", knowledge),
        instruction=(
            await load("instruction", instruction) if instruction is not None else None
        ),
        additional_instructions=await load_many(
            "additional_instruction", additional_instructions
        ),
    )
