"""Category endpoints."""

from fastapi import APIRouter

from sqlguide.core.catalog import load_catalog
from sqlguide.web.schemas import CategoryCount, CategoryListResponse

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
async def list_categories() -> CategoryListResponse:
    """List the fixed categories with their topic counts."""
    counts = load_catalog().category_counts()
    return CategoryListResponse(
        categories=[
            CategoryCount(name=category.value, count=count)
            for category, count in counts.items()
        ]
    )
