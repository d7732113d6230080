"""Pydantic schemas for Web API.

Serialization models for topics, categories and health.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


# =============================================================================
# TOPIC SCHEMAS
# =============================================================================


class TopicSummary(BaseModel):
    """Short form of a topic, used in lists and search results."""

    id: str
    title: str
    category: str
    memory_trick: str | None = None


class TopicResponse(BaseModel):
    """Full topic entry."""

    id: str
    title: str
    category: str
    example_query: str | None = None
    explanation: list[str]
    memory_trick: str | None = None
    common_question: str | None = None
    common_answer: str | None = None


class TopicListResponse(BaseModel):
    """Response for a list of topics."""

    topics: list[TopicSummary]
    count: int
    category: str | None = None


class SearchResponse(BaseModel):
    """Ranked search results."""

    query: str
    results: list[TopicSummary]
    count: int
    total: int


# =============================================================================
# CATEGORY SCHEMAS
# =============================================================================


class CategoryCount(BaseModel):
    """A category and how many topics it holds."""

    name: str
    count: int


class CategoryListResponse(BaseModel):
    """Response for the category list."""

    categories: list[CategoryCount]


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    topics: int = 0
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
