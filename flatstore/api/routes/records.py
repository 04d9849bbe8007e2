"""
Record routes.

Exposes one repository as a REST resource:
- List (GET "") - sort/filter through query parameters
- Get (GET /{id})
- Create (POST "")
- Replace (PUT /{id})
- Delete (DELETE /{id})

Repository calls do blocking whole-file I/O, so they run in the
threadpool, one at a time per router: a repository is not re-entrant.
"""

import asyncio
from typing import Annotated, Any, Callable, TypeVar

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import QueryParams

from flatstore.repositories.base import Repository
from flatstore.repositories.results import UpdateResult

T = TypeVar("T")


def collect_query_params(query_params: QueryParams) -> dict[str, str | list[str]]:
    """Flatten a query string; keys given more than once become lists."""
    collected: dict[str, list[str]] = {}
    for name, value in query_params.multi_items():
        collected.setdefault(name, []).append(value)
    return {name: values[0] if len(values) == 1 else values for name, values in collected.items()}


UPDATE_ERRORS: dict[UpdateResult, tuple[int, str]] = {
    UpdateResult.INVALID: (status.HTTP_400_BAD_REQUEST, "Invalid record"),
    UpdateResult.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Record not found"),
    UpdateResult.CONFLICT: (status.HTTP_409_CONFLICT, "Key already used by another record"),
    UpdateResult.UNAVAILABLE: (status.HTTP_503_SERVICE_UNAVAILABLE, "Storage unavailable"),
}


def create_record_router(get_repository: Callable[[], Repository]) -> APIRouter:
    """
    Build a router for the repository returned by ``get_repository``.

    Usage:
        bookmarks = Repository(BookmarkModel())
        app.include_router(
            create_record_router(lambda: bookmarks),
            prefix="/api/bookmarks",
        )
    """
    router = APIRouter()
    RepositoryDep = Annotated[Repository, Depends(get_repository)]
    lock = asyncio.Lock()

    async def call(func: Callable[..., T], *args: Any) -> T:
        async with lock:
            return await run_in_threadpool(func, *args)

    @router.get("", response_model=None)
    async def list_records(request: Request, repository: RepositoryDep) -> list[dict[str, Any]] | str:
        """
        List records.

        Query params:
            sort: name | title | category, optionally ",desc"
            Name: wildcard pattern on the name/title field
            Category: wildcard pattern on the category

        Returns the matching records, or the "No search results found."
        message when nothing matches.
        """
        result = await call(repository.get_all, collect_query_params(request.query_params))
        if result.is_ok:
            return result.value
        if result.is_malformed:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.reason)
        return result.reason

    @router.get("/{record_id}")
    async def get_record(record_id: int, repository: RepositoryDep) -> dict[str, Any]:
        """Get record by Id."""
        record = await call(repository.get, record_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return record

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_record(
        record: Annotated[dict[str, Any], Body()],
        repository: RepositoryDep,
    ) -> dict[str, Any]:
        """Create a record; the Id is assigned by the repository."""
        stored = await call(repository.add, record)
        if stored is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid record")
        if stored.get("conflict") is True:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Key already used by another record")
        return stored

    @router.put("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def replace_record(
        record_id: int,
        record: Annotated[dict[str, Any], Body()],
        repository: RepositoryDep,
    ) -> Response:
        """Replace a record. The path Id wins over any Id in the body."""
        result = await call(repository.update, {**record, "Id": record_id})
        if result is not UpdateResult.OK:
            status_code, detail = UPDATE_ERRORS[result]
            raise HTTPException(status_code=status_code, detail=detail)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_record(record_id: int, repository: RepositoryDep) -> Response:
        """Delete record."""
        if not await call(repository.remove, record_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
