"""
Top-level API router.

Aggregates the resource routers mounted under ``/api``.  When new
resources are introduced, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import posts

router = APIRouter()

router.include_router(posts.router, prefix="/posts", tags=["posts"])
