"""Domain models for the SQL reference catalog.

A TopicEntry is one SQL concept from the study guide (a view, a key,
a join variant...). Entries are immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    """Fixed set of topic categories."""

    VIEW = "View"
    CONSTRAINT = "Constraint"
    INDEX = "Index"
    DML = "DML"
    QUERY = "Query"
    JOIN = "Join"
    AGGREGATE = "Aggregate"


class CatalogError(Exception):
    """Base exception for catalog lookups."""

    pass


class InvalidCategoryError(CatalogError, ValueError):
    """Raised when a category is not one of the fixed enumeration."""

    def __init__(self, value: object):
        self.value = value
        valid = ", ".join(c.value for c in Category)
        super().__init__(f"Invalid category '{value}'. Valid categories: {valid}")


def parse_category(value: Category | str) -> Category:
    """Parse a category from its value or name, case-insensitive.

    Args:
        value: Category member or string such as "join", "Join", "JOIN"

    Returns:
        The matching Category

    Raises:
        InvalidCategoryError: If value is not a known category
    """
    if isinstance(value, Category):
        return value
    if not isinstance(value, str):
        raise InvalidCategoryError(value)

    wanted = value.strip().lower()
    for category in Category:
        if wanted in (category.value.lower(), category.name.lower()):
            return category

    raise InvalidCategoryError(value)


@dataclass(frozen=True)
class TopicEntry:
    """One SQL concept described in the guide.

    `example_query` is display text only and is never parsed as SQL.
    Optional fields (the example query included) are None when the guide
    does not provide them. A plain string category is accepted and
    coerced to its Category member.
    """

    id: str
    title: str
    category: Category
    example_query: str | None
    explanation: tuple[str, ...]
    memory_trick: str | None = None
    common_question: str | None = None
    common_answer: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("TopicEntry.id must not be empty")
        if not isinstance(self.category, Category):
            object.__setattr__(self, "category", parse_category(self.category))
        # Paired fields: both or neither
        if (self.common_question is None) != (self.common_answer is None):
            raise ValueError(
                f"Topic '{self.id}': common_question and common_answer must be given together"
            )
        if not isinstance(self.explanation, tuple):
            object.__setattr__(self, "explanation", tuple(self.explanation))

    @property
    def has_question(self) -> bool:
        """True when the entry carries a common exam question."""
        return self.common_question is not None

    def to_dict(self) -> dict:
        """Serialize to a plain dict (category as its value)."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category.value,
            "example_query": self.example_query,
            "explanation": list(self.explanation),
            "memory_trick": self.memory_trick,
            "common_question": self.common_question,
            "common_answer": self.common_answer,
        }
