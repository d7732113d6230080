"""SQL reference catalog.

Read-only lookup over the topic entries parsed from the study guides.

Usage:
    from sqlguide.core.catalog import load_catalog

    catalog = load_catalog()
    entry = catalog.get_by_id("inner-join")
    joins = catalog.list_by_category("Join")
    hits = catalog.search("inner")

The catalog is built once and never mutated. Concurrent readers need
no locking.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator

import structlog

from sqlguide.config.app_config import load_app_config
from sqlguide.core.guide_parser import merge_guides, parse_guide_file
from sqlguide.core.models import (
    Category,
    CatalogError,
    InvalidCategoryError,
    TopicEntry,
    parse_category,
)
from sqlguide.utils.validators import (
    AmbiguousTopicIdError,
    TopicNotFoundError,
    resolve_topic_id,
)

logger = structlog.get_logger(__name__)

__all__ = [
    "AmbiguousTopicIdError",
    "CatalogError",
    "DuplicateTopicError",
    "InvalidCategoryError",
    "ReferenceCatalog",
    "TopicNotFoundError",
    "build_catalog",
    "clear_catalog_cache",
    "load_catalog",
]


class DuplicateTopicError(CatalogError, ValueError):
    """Raised at construction when two entries share an id."""

    def __init__(self, topic_id: str):
        self.topic_id = topic_id
        super().__init__(f"Duplicate topic id '{topic_id}'")


class ReferenceCatalog:
    """Immutable collection of TopicEntry records in authoring order."""

    def __init__(self, entries: Iterable[TopicEntry]):
        ordered: list[TopicEntry] = []
        by_id: dict[str, TopicEntry] = {}
        for entry in entries:
            if entry.id in by_id:
                raise DuplicateTopicError(entry.id)
            by_id[entry.id] = entry
            ordered.append(entry)

        self._entries: tuple[TopicEntry, ...] = tuple(ordered)
        self._by_id = MappingProxyType(by_id)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TopicEntry]:
        return iter(self._entries)

    def __contains__(self, topic_id: object) -> bool:
        return topic_id in self._by_id

    def __repr__(self) -> str:
        return f"ReferenceCatalog(topics={len(self._entries)})"

    @property
    def entries(self) -> tuple[TopicEntry, ...]:
        """All entries in authoring order."""
        return self._entries

    def ids(self) -> list[str]:
        """All topic ids in authoring order."""
        return [entry.id for entry in self._entries]

    def get_by_id(self, topic_id: str) -> TopicEntry:
        """Exact lookup by id.

        Raises:
            TopicNotFoundError: If no entry has that id
        """
        entry = self._by_id.get(topic_id)
        if entry is None:
            logger.debug("topic_not_found", topic_id=topic_id)
            raise TopicNotFoundError(topic_id)
        return entry

    def resolve_id(self, prefix: str) -> str:
        """Resolve an exact id or a unique id prefix.

        Raises:
            TopicNotFoundError: If nothing matches
            AmbiguousTopicIdError: If the prefix matches several ids
        """
        return resolve_topic_id(prefix, self.ids())

    def list_by_category(self, category: Category | str) -> list[TopicEntry]:
        """Entries of a category in authoring order.

        Args:
            category: Category member or its name/value (case-insensitive)

        Returns:
            Matching entries; empty list if the category has none

        Raises:
            InvalidCategoryError: If category is not in the enumeration
        """
        wanted = parse_category(category)
        return [entry for entry in self._entries if entry.category is wanted]

    def search(self, query_text: str) -> list[TopicEntry]:
        """Case-insensitive substring search over titles and memory tricks.

        Exact title matches come first, then the remaining matches in
        authoring order. A blank query matches nothing.
        """
        needle = (query_text or "").strip().casefold()
        if not needle:
            return []

        exact: list[TopicEntry] = []
        partial: list[TopicEntry] = []
        for entry in self._entries:
            title = entry.title.casefold()
            trick = (entry.memory_trick or "").casefold()
            if title == needle:
                exact.append(entry)
            elif needle in title or needle in trick:
                partial.append(entry)

        return exact + partial

    def list_questions(self, category: Category | str | None = None) -> list[TopicEntry]:
        """Entries that carry a common exam question, in authoring order.

        Raises:
            InvalidCategoryError: If category is given and not valid
        """
        entries = self._entries if category is None else self.list_by_category(category)
        return [entry for entry in entries if entry.has_question]

    def category_counts(self) -> dict[Category, int]:
        """Number of entries per category, every category included."""
        counts = {category: 0 for category in Category}
        for entry in self._entries:
            counts[entry.category] += 1
        return counts


def build_catalog(primary: Path, secondary: Path | None = None) -> ReferenceCatalog:
    """Parse the guides and build the catalog.

    Args:
        primary: Authoritative guide
        secondary: Near-duplicate guide used to fill gaps, if any

    Raises:
        FileNotFoundError: If a guide file is missing
        GuideFormatError: If a guide is malformed
        DuplicateTopicError: If ids collide after merging
    """
    primary_drafts = parse_guide_file(primary)
    secondary_drafts = parse_guide_file(secondary) if secondary is not None else None
    catalog = ReferenceCatalog(merge_guides(primary_drafts, secondary_drafts))

    logger.info(
        "catalog_loaded",
        topics=len(catalog),
        primary=primary.name,
        secondary=secondary.name if secondary is not None else None,
    )
    return catalog


# Module-level cache
_cached_catalog: ReferenceCatalog | None = None


def load_catalog(force_reload: bool = False) -> ReferenceCatalog:
    """Build the catalog from the configured guides, once per process.

    Args:
        force_reload: If True, ignore cache and rebuild from the guides.

    Returns:
        The shared ReferenceCatalog.
    """
    global _cached_catalog

    if _cached_catalog is not None and not force_reload:
        return _cached_catalog

    config = load_app_config()
    primary, secondary = config.content.guide_paths()
    _cached_catalog = build_catalog(primary, secondary)
    return _cached_catalog


def clear_catalog_cache() -> None:
    """Clear the catalog cache.

    Useful for testing or when the guides point somewhere else.
    """
    global _cached_catalog
    _cached_catalog = None
