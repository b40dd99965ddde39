"""Query Routes — fetch content by hash and search indexed metadata.

Invariants:
    - GET /query/search and POST /query/search share page_request_params,
      resolve_query and execute_search: same inputs, same Page
    - Fetch response body is the stored payload; Content-Type is exactly the
      resolved value (no charset appended)
    - Empty hash reaches fetch_content and is rejected there, not by routing

Design Decisions:
    - Content-Type passed through headers, not media_type: Starlette appends
      "; charset=utf-8" to text/* media types, the stored value must not change
    - fastapi.Query imported as QueryParam: "query" is the domain word here
"""

from fastapi import APIRouter, Body, Depends, Query as QueryParam
from fastapi.responses import Response

from retrieval_gateway.core.domain_types import (
    DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE, SortDirection,
)
from retrieval_gateway.core.page_spec import PageRequest, normalize_page_request
from retrieval_gateway.core.query_resolver import resolve_query
from retrieval_gateway.core.store_protocols import ContentStore
from retrieval_gateway.infrastructure.store_client import get_content_store
from retrieval_gateway.schemas.metadata import Metadata, Page
from retrieval_gateway.schemas.query import SearchQuery
from retrieval_gateway.services.content_fetch import fetch_content
from retrieval_gateway.services.retrieval import execute_search

router = APIRouter(prefix="/query", tags=["query"])


def page_request_params(
    page: int = QueryParam(DEFAULT_PAGE_NUMBER, description="Page number, 0-based"),
    size: int = QueryParam(DEFAULT_PAGE_SIZE, description="Page size"),
    sort: str | None = QueryParam(None, description="Sort attribute"),
    direction: SortDirection = QueryParam(
        SortDirection.ASC, alias="dir", description="Sort direction",
    ),
) -> PageRequest:
    return normalize_page_request(page, size, sort, direction)


@router.get("/fetch/", include_in_schema=False)
async def fetch_without_hash(
    index: str | None = None,
    store: ContentStore = Depends(get_content_store),
):
    """Empty hash path: rejected by fetch_content, the store is never called."""
    await fetch_content(store, index, "")


@router.get("/fetch/{content_hash}")
async def fetch_by_hash(
    content_hash: str,
    index: str | None = None,
    store: ContentStore = Depends(get_content_store),
):
    """Get raw content by hash with its stored (or fallback) content type."""
    content = await fetch_content(store, index, content_hash)
    return Response(
        content=content.payload,
        headers={"content-type": content.content_type},
    )


@router.post("/search", response_model=Page[Metadata])
async def search_by_post(
    body: SearchQuery | None = Body(None),
    index: str | None = None,
    page_request: PageRequest = Depends(page_request_params),
    store: ContentStore = Depends(get_content_store),
):
    """Search with a structured query body (no body = match all)."""
    return await execute_search(store, index, resolve_query(body), page_request)


@router.get("/search", response_model=Page[Metadata])
async def search_by_get(
    query: str | None = None,
    index: str | None = None,
    page_request: PageRequest = Depends(page_request_params),
    store: ContentStore = Depends(get_content_store),
):
    """Search with a JSON-serialized query string (no query = match all)."""
    return await execute_search(store, index, resolve_query(query), page_request)
