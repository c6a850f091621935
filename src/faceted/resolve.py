"""Facet reference resolution.

Resolves facet names, resource paths and inline content to text. Directory
construction is left to the caller: pass an ordered list of candidate
directories (first match wins) and a base directory for relative paths.

Lookups never raise for "not found"; they return ``None`` (or, for resource
content, the reference itself as inline text). I/O faults on files that do exist,
such as ``PermissionError``, propagate to the caller.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

log = logging.getLogger(__name__)

FACET_SUFFIX = ".md"
_PATH_PREFIXES = ("./", "../", "/", "~")


def is_resource_path(spec: str) -> bool:
    """Return True if ``spec`` looks like a file location rather than a name.

    Paths start with ``./``, ``../``, ``/`` or ``~``, or end with ``.md``.
    """
    return spec.startswith(_PATH_PREFIXES) or spec.endswith(FACET_SUFFIX)


def _read_text(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def resolve_facet_path(name: str, candidate_dirs: Sequence[str | Path]) -> str | None:
    """Return the first ``{dir}/{name}.md`` that exists, scanning in order."""
    for directory in candidate_dirs:
        file_path = os.path.join(directory, f"{name}{FACET_SUFFIX}")
        if Path(file_path).is_file():
            return file_path
    return None


def resolve_facet_by_name(
    name: str, candidate_dirs: Sequence[str | Path]
) -> str | None:
    """Resolve a facet name to its file content via candidate directories."""
    file_path = resolve_facet_path(name, candidate_dirs)
    if file_path is None:
        log.debug("facet %r not found in %d candidate dirs", name, len(candidate_dirs))
        return None
    return _read_text(file_path)


def resolve_resource_path(spec: str, base_dir: str | Path) -> str:
    """Resolve a resource spec to a file path.

    ``./x`` is joined to ``base_dir``; ``/x`` is returned unchanged; anything
    else, ``~``-prefixed specs included, is treated as relative to
    ``base_dir``.
    """
    if spec.startswith("./"):
        return os.path.normpath(os.path.join(base_dir, spec[2:]))
    if spec.startswith("/"):
        return spec
    return os.path.normpath(os.path.join(base_dir, spec))


def resolve_resource_content(spec: str, base_dir: str | Path) -> str:
    """Return file content for an existing ``.md`` spec, else ``spec`` itself.

    The same field may carry a path or raw text; anything that does not name
    an existing Markdown file is treated as inline content.
    """
    if spec.endswith(FACET_SUFFIX):
        resolved = resolve_resource_path(spec, base_dir)
        if Path(resolved).is_file():
            return _read_text(resolved)
        log.debug("resource %r not found at %s; treating as inline", spec, resolved)
    return spec


def resolve_ref_to_content(
    ref: str,
    resolved_map: Mapping[str, str] | None,
    base_dir: str | Path,
    candidate_dirs: Sequence[str | Path] | None = None,
) -> str | None:
    """Resolve a reference to content.

    Lookup order:
    1. a non-empty entry for ``ref`` in ``resolved_map``
    2. resource-path resolution when ``ref`` looks like a path
    3. facet-name lookup in ``candidate_dirs`` when given
    4. ``ref`` as inline content
    """
    mapped = resolved_map.get(ref) if resolved_map else None
    if mapped:
        log.debug("ref %r resolved from map", ref)
        return mapped

    if is_resource_path(ref):
        return resolve_resource_content(ref, base_dir)

    if candidate_dirs is not None:
        facet_content = resolve_facet_by_name(ref, candidate_dirs)
        if facet_content is not None:
            return facet_content

    return resolve_resource_content(ref, base_dir)


def resolve_ref_list(
    refs: str | Sequence[str] | None,
    resolved_map: Mapping[str, str] | None,
    base_dir: str | Path,
    candidate_dirs: Sequence[str | Path] | None = None,
) -> list[str] | None:
    """Resolve one or more references, dropping those with empty content.

    Returns ``None`` when ``refs`` is ``None`` or nothing resolved to content.
    """
    if refs is None:
        return None
    ref_list = [refs] if isinstance(refs, str) else list(refs)
    contents: list[str] = []
    for ref in ref_list:
        content = resolve_ref_to_content(ref, resolved_map, base_dir, candidate_dirs)
        if content:
            contents.append(content)
    return contents or None


def resolve_section_map(
    raw: Mapping[str, str] | None, base_dir: str | Path
) -> dict[str, str] | None:
    """Resolve each value of a section map to file content or inline text."""
    if not raw:
        return None
    resolved = {
        name: resolve_resource_content(value, base_dir) for name, value in raw.items()
    }
    return resolved or None


def extract_persona_display_name(persona_path: str) -> str:
    """Extract a display name from a persona path (``coder.md`` -> ``coder``)."""
    name = os.path.basename(persona_path)
    if name.endswith(FACET_SUFFIX) and name != FACET_SUFFIX:
        return name[: -len(FACET_SUFFIX)]
    return name
