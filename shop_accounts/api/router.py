"""Main API router"""

from fastapi import APIRouter

from .routes import users, views
from ..core.config import settings

# Main API router
api_router = APIRouter()
api_router.include_router(users.router, prefix="/users", tags=["users"])

# HTML pages are served at the site root
views_router = APIRouter()
views_router.include_router(views.router, tags=["views"])


@api_router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "version": settings.VERSION}
