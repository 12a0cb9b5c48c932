"""
Top‑level router.

Aggregates the resource routers under ``/api``.  When a new resource
is added, include its router here.
"""

from fastapi import APIRouter, FastAPI

from .endpoints import authors, genres, languages, users

router = APIRouter(prefix="/api")

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(authors.router, prefix="/authors", tags=["authors"])
router.include_router(genres.router, prefix="/genres", tags=["genres"])
router.include_router(languages.router, prefix="/languages", tags=["languages"])


def register_routes(app: FastAPI) -> None:
    app.include_router(router)
