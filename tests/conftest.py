"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration and shared facet-tree
fixtures. Fixtures here are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
import logging
import os
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "faceted.config.load_dotenv", lambda *_args, **_kwargs: False
        )


@pytest.fixture(autouse=True)
def isolate_faceted_env(request, monkeypatch):
    """Clear FACETED_* env vars so configuration tests start from defaults.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("FACETED_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("asyncio").setLevel(logging.WARNING)


# =============================================================================
# Facet Trees
# =============================================================================


@pytest.fixture
def facet_root(tmp_path: Path) -> Path:
    """A facet tree laid out as ``{root}/{kind}/{key}.md``."""
    root = tmp_path / "facets"
    files = {
        "persona/coder.md": "You are a careful coder.",
        "policy/coding.md": "Follow clean code principles.",
        "policy/review.md": "Review every change.",
        "knowledge/architecture.md": "The system has three layers.",
        "instruction/implement.md": "Implement feature {{feature}}.",
    }
    for rel, body in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
    return root
