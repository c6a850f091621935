"""faceted: compose LLM prompts from reusable facets.

Public API:
    - compose(): Place resolved facets into a system prompt and user message
    - build_facet_set(): Resolve facet references from disk into a FacetSet
    - render_template(): Minimal ``{{#if}}`` / ``{{var}}`` template rendering
    - resolve_* helpers: Facet name, resource path and inline content lookup
    - DataEngine: Async facet storage interface and file-backed engines
"""

from __future__ import annotations

import logging

from faceted.compose import FACET_SEPARATOR, compose
from faceted.config import FrozenConfig, Settings, resolve_config
from faceted.data_engine import CompositeDataEngine, DataEngine, FileDataEngine
from faceted.errors import ConfigurationError, FacetedError
from faceted.loader import build_facet_set, facet_set_from_engine, load_facet
from faceted.resolve import (
    extract_persona_display_name,
    is_resource_path,
    resolve_facet_by_name,
    resolve_facet_path,
    resolve_ref_list,
    resolve_ref_to_content,
    resolve_resource_content,
    resolve_resource_path,
    resolve_section_map,
)
from faceted.template import (
    process_conditionals,
    render_template,
    substitute_variables,
)
from faceted.truncation import (
    TRUNCATION_MARKER,
    prepare_knowledge_content,
    prepare_policy_content,
    render_conflict_notice,
    trim_context_content,
)
from faceted.types import (
    FACET_KINDS,
    ComposedPrompt,
    ComposeOptions,
    FacetContent,
    FacetKind,
    FacetSet,
    TrimResult,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("faceted-prompting")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("faceted").addHandler(logging.NullHandler())

__all__ = [
    "FACET_KINDS",
    "FACET_SEPARATOR",
    "TRUNCATION_MARKER",
    "ComposeOptions",
    "ComposedPrompt",
    "CompositeDataEngine",
    "ConfigurationError",
    "DataEngine",
    "FacetContent",
    "FacetKind",
    "FacetSet",
    "FacetedError",
    "FileDataEngine",
    "FrozenConfig",
    "Settings",
    "TrimResult",
    "build_facet_set",
    "compose",
    "extract_persona_display_name",
    "facet_set_from_engine",
    "is_resource_path",
    "load_facet",
    "prepare_knowledge_content",
    "prepare_policy_content",
    "process_conditionals",
    "render_conflict_notice",
    "render_template",
    "resolve_config",
    "resolve_facet_by_name",
    "resolve_facet_path",
    "resolve_ref_list",
    "resolve_ref_to_content",
    "resolve_resource_content",
    "resolve_resource_path",
    "resolve_section_map",
    "substitute_variables",
    "trim_context_content",
]
