"""Topic endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, Query, status

from sqlguide.config.app_config import load_app_config
from sqlguide.core.catalog import InvalidCategoryError, TopicNotFoundError, load_catalog
from sqlguide.core.models import TopicEntry, parse_category
from sqlguide.web.schemas import (
    SearchResponse,
    TopicListResponse,
    TopicResponse,
    TopicSummary,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/topics", tags=["topics"])


def _to_summary(entry: TopicEntry) -> TopicSummary:
    return TopicSummary(
        id=entry.id,
        title=entry.title,
        category=entry.category.value,
        memory_trick=entry.memory_trick,
    )


def _to_response(entry: TopicEntry) -> TopicResponse:
    """Convert TopicEntry to TopicResponse."""
    return TopicResponse(**entry.to_dict())


@router.get("", response_model=TopicListResponse)
async def list_topics(category: str | None = None) -> TopicListResponse:
    """List topics in guide order, optionally for one category."""
    catalog = load_catalog()

    if category is None:
        entries = list(catalog)
        category_name = None
    else:
        try:
            entries = catalog.list_by_category(category)
        except InvalidCategoryError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        category_name = parse_category(category).value

    topics = [_to_summary(e) for e in entries]
    return TopicListResponse(topics=topics, count=len(topics), category=category_name)


@router.get("/search", response_model=SearchResponse)
async def search_topics(
    q: str = Query(..., max_length=200, description="Text to find in titles and memory tricks"),
    limit: int | None = Query(None, ge=1, le=100),
) -> SearchResponse:
    """Ranked, case-insensitive search."""
    results = load_catalog().search(q)
    max_results = limit or load_app_config().search.max_results

    logger.info("topics_search", query=q, total=len(results))

    shown = [_to_summary(e) for e in results[:max_results]]
    return SearchResponse(query=q, results=shown, count=len(shown), total=len(results))


@router.get("/{topic_id}", response_model=TopicResponse)
async def get_topic(topic_id: str) -> TopicResponse:
    """Get a topic by its exact id."""
    try:
        entry = load_catalog().get_by_id(topic_id)
    except TopicNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Topic '{topic_id}' not found",
        )

    return _to_response(entry)
