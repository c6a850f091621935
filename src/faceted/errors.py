"""Exception hierarchy for faceted.

Absence is not an error here: resolvers report a missing facet as ``None``.
Exceptions are reserved for setup mistakes that can never produce a valid
prompt.
"""

from __future__ import annotations


class FacetedError(Exception):
    """Base exception for all faceted errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(FacetedError):
    """Configuration validation or resolution failed."""
