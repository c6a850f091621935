"""DataEngine: facet storage behind an async interface.

Composition depends only on ``DataEngine``; callers wire concrete engines.
Methods are coroutines so that engines backed by async I/O (a database, a
remote store) can be used without changes.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from faceted.errors import ConfigurationError
from faceted.resolve import FACET_SUFFIX
from faceted.types import FacetContent

if TYPE_CHECKING:
    from collections.abc import Sequence

    from faceted.types import FacetKind

log = logging.getLogger(__name__)


@runtime_checkable
class DataEngine(Protocol):
    """Minimal storage protocol: resolve one facet, list available keys."""

    async def resolve(self, kind: FacetKind, key: str) -> FacetContent | None:
        """Return the facet for ``kind``/``key``, or None when absent."""
        ...

    async def list(self, kind: FacetKind) -> list[str]:
        """Return the keys available for ``kind``."""
        ...


class FileDataEngine:
    """File-system backed engine using the layout ``{root}/{kind}/{key}.md``."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def __repr__(self) -> str:
        return f"FileDataEngine(root={str(self.root)!r})"

    async def resolve(self, kind: FacetKind, key: str) -> FacetContent | None:
        file_path = self.root / kind / f"{key}{FACET_SUFFIX}"

        def _load() -> FacetContent | None:
            if not file_path.is_file():
                return None
            body = file_path.read_text(encoding="utf-8")
            return FacetContent(body=body, source_path=str(file_path))

        return await asyncio.to_thread(_load)

    async def list(self, kind: FacetKind) -> list[str]:
        dir_path = self.root / kind

        def _scan() -> list[str]:
            if not dir_path.is_dir():
                return []
            return sorted(
                p.stem for p in dir_path.iterdir() if p.suffix == FACET_SUFFIX
            )

        return await asyncio.to_thread(_scan)


class CompositeDataEngine:
    """Chain of engines with first-match-wins resolution.

    ``list`` returns the union of keys across engines, de-duplicated in
    first-seen order.
    """

    def __init__(self, engines: Sequence[DataEngine]) -> None:
        if not engines:
            raise ConfigurationError(
                "CompositeDataEngine requires at least one engine",
                hint="Pass e.g. CompositeDataEngine([FileDataEngine(root)]).",
            )
        self.engines: tuple[DataEngine, ...] = tuple(engines)

    async def resolve(self, kind: FacetKind, key: str) -> FacetContent | None:
        for idx, engine in enumerate(self.engines):
            result = await engine.resolve(kind, key)
            if result is not None:
                log.debug("%s %r resolved by engine %d (%r)", kind, key, idx, engine)
                return result
        return None

    async def list(self, kind: FacetKind) -> list[str]:
        seen: set[str] = set()
        keys: list[str] = []
        for engine in self.engines:
            for key in await engine.list(kind):
                if key not in seen:
                    seen.add(key)
                    keys.append(key)
        return keys
