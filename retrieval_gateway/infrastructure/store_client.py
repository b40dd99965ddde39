"""HTTP Content Store — httpx client for the remote store/index service.

Invariants:
    - One AsyncClient per process, created on startup and closed on shutdown
    - Timeouts (httpx deadline, 408, 504) → StoreTimeoutError, never NotFoundError
    - 404 on fetch → NotFoundError; 400/422 → ClientInputError (store rejected input)
    - Everything else → BackendError; the httpx exception is always chained
    - Only connection failures are retried; timeouts and HTTP errors are not

Design Decisions:
    - Singleton store_client initialized on startup: FastAPI lifespan manages
      lifecycle, routes reach it through the get_content_store dependency
      (tests override the dependency, no global import side effects)
    - ±25% jitter on backoff: prevents reconnect stampedes after a store restart
    - transport parameter: tests inject httpx.MockTransport, production uses default
"""

import asyncio
import logging
import random
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from retrieval_gateway.core.domain_types import ContentHash, IndexName
from retrieval_gateway.core.errors import (
    BackendError, ClientInputError, ErrorContext, GatewayError,
    NotFoundError, StoreTimeoutError,
)
from retrieval_gateway.core.page_spec import PageRequest
from retrieval_gateway.core.store_protocols import ContentStore
from retrieval_gateway.schemas.metadata import Metadata, MetadataAndPayload, Page
from retrieval_gateway.schemas.query import SearchQuery

logger = logging.getLogger(__name__)

_TIMEOUT_STATUSES = frozenset({408, 504})
_REJECTED_STATUSES = frozenset({400, 422})
_INDEX_DOC_ID_HEADER = "x-index-doc-id"


class HttpContentStore:
    """ContentStore implementation over the store service's HTTP API."""

    def __init__(
        self,
        base_url: str,
        search_path: str = "/query/search",
        fetch_path: str = "/query/fetch/{hash}",
        health_path: str = "/actuator/health",
        timeout_seconds: float = 30.0,
        max_retries: int = 2,
        base_delay_ms: int = 200,
        max_delay_ms: int = 5000,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout_seconds, transport=transport,
        )
        self.search_path = search_path
        self.fetch_path = fetch_path
        self.health_path = health_path
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def search_by_query(
        self,
        index_name: IndexName | None,
        query: SearchQuery | None,
        page_request: PageRequest,
    ) -> Page[Metadata]:
        context = ErrorContext(index_name=index_name)
        response = await self._send(
            "search", "POST", self.search_path,
            params=_page_params(index_name, page_request),
            json=query.model_dump(mode="json") if query is not None else None,
            context=context,
        )
        try:
            return Page[Metadata].model_validate_json(response.content)
        except ValidationError as e:
            raise BackendError(
                "Store returned an invalid page document", "search", context,
            ) from e

    async def fetch_by_hash(
        self, index_name: IndexName | None, content_hash: ContentHash,
    ) -> MetadataAndPayload:
        context = ErrorContext(content_hash=content_hash, index_name=index_name)
        response = await self._send(
            "fetch", "GET",
            self.fetch_path.format(hash=quote(content_hash, safe="")),
            params=_index_param(index_name),
            context=context,
            content_hash=content_hash,
        )
        metadata = Metadata(
            index_name=index_name,
            index_doc_id=response.headers.get(_INDEX_DOC_ID_HEADER),
            content_id=content_hash,
            content_type=response.headers.get("content-type"),
        )
        return MetadataAndPayload(metadata=metadata, payload=response.content)

    async def health_check(self) -> bool:
        """Check store reachability (for the readiness check)."""
        try:
            response = await self.client.get(self.health_path)
            return response.is_success
        except httpx.HTTPError as e:
            logger.error(f"Store health check failed: {e}")
            return False

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _send(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict,
        context: ErrorContext,
        json: dict | None = None,
        content_hash: str | None = None,
    ) -> httpx.Response:
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.request(
                    method, path, params=params, json=json,
                )
            except httpx.TimeoutException as e:
                raise StoreTimeoutError(operation, context) from e
            except httpx.TransportError as e:
                if attempt < self.max_retries:
                    await self._backoff(operation, attempt, e)
                    continue
                raise BackendError(
                    f"Connection error: {e}", operation, context,
                ) from e

            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise _map_status(
                    e.response, operation, context, content_hash,
                ) from e
            return response

    async def _backoff(
        self, operation: str, attempt: int, error: Exception,
    ) -> None:
        """Exponential backoff with ±25% jitter before a reconnect attempt."""
        delay_ms = min(self.base_delay_ms * (2 ** attempt), self.max_delay_ms)
        delay_ms += delay_ms * random.uniform(-0.25, 0.25)
        logger.warning(
            f"Store {operation} connection failed ({error}), "
            f"retrying in {delay_ms:.0f}ms",
            extra={"attempt": attempt + 1},
        )
        await asyncio.sleep(delay_ms / 1000)


def _index_param(index_name: IndexName | None) -> dict:
    return {"index": index_name} if index_name else {}


def _page_params(index_name: IndexName | None, page_request: PageRequest) -> dict:
    params = _index_param(index_name)
    params["page"] = page_request.page_number
    params["size"] = page_request.page_size
    if page_request.sort is not None:
        params["sort"] = page_request.sort.attribute
        params["dir"] = page_request.sort.direction.value
    return params


def _map_status(
    response: httpx.Response,
    operation: str,
    context: ErrorContext,
    content_hash: str | None,
) -> GatewayError:
    status = response.status_code
    if status == 404 and content_hash is not None:
        return NotFoundError(content_hash, context)
    if status in _TIMEOUT_STATUSES:
        return StoreTimeoutError(operation, context)
    if status in _REJECTED_STATUSES:
        return ClientInputError(
            f"Store rejected {operation} request (HTTP {status})",
            context=context,
        )
    return BackendError(f"HTTP {status}", operation, context)


# Singleton (initialized on startup)
store_client: HttpContentStore | None = None


def init_store(base_url: str, **kwargs) -> HttpContentStore:
    global store_client
    store_client = HttpContentStore(base_url, **kwargs)
    return store_client


async def close_store() -> None:
    global store_client
    if store_client is not None:
        await store_client.aclose()
        store_client = None


def get_content_store() -> ContentStore:
    """FastAPI dependency for the process-wide store client."""
    if not store_client:
        raise RuntimeError("Content store not initialized")
    return store_client
