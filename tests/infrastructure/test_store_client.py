"""HTTP Content Store tests — wire format and error mapping via httpx.MockTransport.

Tests cover:
    - Search sends page/size/sort/dir/index params and the query as JSON body
    - No sort → no sort/dir params; no query → no body
    - Fetch quotes the hash, reads payload and Content-Type header
    - Missing Content-Type header → metadata.content_type None
    - 404 → NotFoundError, 408/504/httpx timeout → StoreTimeoutError,
      400/422 → ClientInputError, other → BackendError (cause chained)
    - Connection errors retried up to max_retries, then BackendError
    - Invalid page document → BackendError
    - health_check reports 2xx as healthy, transport failure as unhealthy
"""

import json

import httpx
import pytest

import retrieval_gateway.infrastructure.store_client as store_module
from retrieval_gateway.core.domain_types import SortDirection
from retrieval_gateway.core.errors import (
    BackendError, ClientInputError, NotFoundError, StoreTimeoutError,
)
from retrieval_gateway.core.page_spec import PageRequest, Sort
from retrieval_gateway.infrastructure.store_client import (
    HttpContentStore, close_store, get_content_store, init_store,
)
from retrieval_gateway.schemas.query import SearchQuery

PAGE_DOC = {
    "items": [{"content_id": "Qm1", "content_type": "image/png", "metadata": {"status": "done"}}],
    "page_number": 0, "page_size": 20, "total_elements": 1, "total_pages": 1,
}


def _store(handler, **kwargs) -> HttpContentStore:
    kwargs.setdefault("base_delay_ms", 0)
    return HttpContentStore(
        "http://store.test", transport=httpx.MockTransport(handler), **kwargs,
    )


async def test_search_wire_format():
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json=PAGE_DOC)

    store = _store(handler)
    page = await store.search_by_query(
        "docs",
        SearchQuery(key="status", value="done"),
        PageRequest(1, 10, Sort("title", SortDirection.DESC)),
    )

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/query/search"
    assert dict(request.url.params) == {
        "index": "docs", "page": "1", "size": "10", "sort": "title", "dir": "DESC",
    }
    assert json.loads(request.content) == {
        "key": "status", "operation": "equals", "value": "done",
    }
    assert page.total_elements == 1
    assert page.items[0].content_id == "Qm1"
    await store.aclose()


async def test_search_without_sort_or_query():
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json=PAGE_DOC)

    store = _store(handler)
    await store.search_by_query(None, None, PageRequest())

    request = seen[0]
    assert dict(request.url.params) == {"page": "0", "size": "20"}
    assert request.content == b""


async def test_search_invalid_page_document_is_backend_error():
    store = _store(lambda request: httpx.Response(200, json={"nope": True}))

    with pytest.raises(BackendError):
        await store.search_by_query(None, None, PageRequest())


async def test_fetch_reads_payload_and_headers():
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(
            200, content=b"\x01\x02",
            headers={"content-type": "image/png", "x-index-doc-id": "doc-7"},
        )

    store = _store(handler)
    result = await store.fetch_by_hash("files", "Qm/odd")

    assert seen[0].url.raw_path == b"/query/fetch/Qm%2Fodd?index=files"
    assert result.payload == b"\x01\x02"
    assert result.metadata.content_type == "image/png"
    assert result.metadata.index_doc_id == "doc-7"
    assert result.metadata.content_id == "Qm/odd"


async def test_fetch_without_content_type_header():
    store = _store(lambda request: httpx.Response(200, content=b"\x01"))

    result = await store.fetch_by_hash(None, "Qm1")

    assert result.metadata.content_type is None


async def test_fetch_404_is_not_found():
    store = _store(lambda request: httpx.Response(404))

    with pytest.raises(NotFoundError) as exc_info:
        await store.fetch_by_hash(None, "QmMissing")

    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)


async def test_search_404_is_backend_error():
    store = _store(lambda request: httpx.Response(404))

    with pytest.raises(BackendError):
        await store.search_by_query("nope", None, PageRequest())


@pytest.mark.parametrize("status", [408, 504])
async def test_timeout_statuses(status):
    store = _store(lambda request: httpx.Response(status))

    with pytest.raises(StoreTimeoutError):
        await store.fetch_by_hash(None, "Qm1")


async def test_httpx_timeout_is_store_timeout_and_not_retried():
    calls = []

    def handler(request: httpx.Request):
        calls.append(request)
        raise httpx.ReadTimeout("too slow", request=request)

    store = _store(handler, max_retries=3)

    with pytest.raises(StoreTimeoutError) as exc_info:
        await store.fetch_by_hash(None, "Qm1")

    assert len(calls) == 1
    assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)


@pytest.mark.parametrize("status", [400, 422])
async def test_rejected_request_is_client_input_error(status):
    store = _store(lambda request: httpx.Response(status))

    with pytest.raises(ClientInputError):
        await store.search_by_query(None, None, PageRequest(-1, 0))


async def test_server_error_is_backend_error():
    store = _store(lambda request: httpx.Response(500))

    with pytest.raises(BackendError) as exc_info:
        await store.fetch_by_hash(None, "Qm1")

    assert "HTTP 500" in exc_info.value.message


async def test_connection_error_retried_then_succeeds():
    calls = []

    def handler(request: httpx.Request):
        calls.append(request)
        if len(calls) < 3:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, content=b"ok")

    store = _store(handler, max_retries=2)
    result = await store.fetch_by_hash(None, "Qm1")

    assert result.payload == b"ok"
    assert len(calls) == 3


async def test_connection_error_exhausts_retries():
    calls = []

    def handler(request: httpx.Request):
        calls.append(request)
        raise httpx.ConnectError("refused", request=request)

    store = _store(handler, max_retries=1)

    with pytest.raises(BackendError) as exc_info:
        await store.fetch_by_hash(None, "Qm1")

    assert len(calls) == 2
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


async def test_health_check():
    healthy = _store(lambda request: httpx.Response(200, json={"status": "UP"}))
    down = _store(lambda request: httpx.Response(503))

    def refuse(request: httpx.Request):
        raise httpx.ConnectError("refused", request=request)

    unreachable = _store(refuse)

    assert await healthy.health_check() is True
    assert await down.health_check() is False
    assert await unreachable.health_check() is False


async def test_singleton_lifecycle():
    original = store_module.store_client
    try:
        created = init_store("http://store.test")
        assert get_content_store() is created
        await close_store()
        assert store_module.store_client is None
        with pytest.raises(RuntimeError):
            get_content_store()
    finally:
        store_module.store_client = original
