"""
API routes aggregation.
"""

from typing import Callable

from fastapi import APIRouter

from flatstore.api.routes.records import create_record_router
from flatstore.repositories.base import Repository


def provide(repository: Repository) -> Callable[[], Repository]:
    """Dependency returning a fixed repository instance."""
    def get_repository() -> Repository:
        return repository
    return get_repository


def build_router(repositories: dict[str, Repository]) -> APIRouter:
    """Mount one record router per repository, keyed by URL prefix."""
    router = APIRouter()
    for prefix, repository in repositories.items():
        router.include_router(
            create_record_router(provide(repository)),
            prefix=f"/{prefix}",
            tags=[prefix],
        )
    return router


__all__ = ["build_router", "create_record_router", "provide"]
