"""Route handlers for Web API."""

from sqlguide.web.routes.health import router as health_router
from sqlguide.web.routes.categories import router as categories_router
from sqlguide.web.routes.topics import router as topics_router

__all__ = [
    "health_router",
    "categories_router",
    "topics_router",
]
