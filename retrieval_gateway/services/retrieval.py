"""Retrieval Gateway — runs one search against the backing store.

Invariants:
    - Query and PageRequest forwarded verbatim; the Page comes back unmodified
    - One execute_search for both transports (GET string, POST body)
    - index_name None is passed through; the store picks its default index
"""

import logging

from retrieval_gateway.core.domain_types import index_or_default
from retrieval_gateway.core.errors import ErrorContext
from retrieval_gateway.core.page_spec import PageRequest
from retrieval_gateway.core.store_protocols import ContentStore
from retrieval_gateway.schemas.metadata import Metadata, Page
from retrieval_gateway.schemas.query import SearchQuery
from retrieval_gateway.services.store_call import guard_store_call

logger = logging.getLogger(__name__)


async def execute_search(
    store: ContentStore,
    index_name: str | None,
    query: SearchQuery | None,
    page_request: PageRequest,
) -> Page[Metadata]:
    """Search indexed metadata; common to both search routes."""
    logger.debug(
        "Executing search",
        extra={
            "index_name": index_name,
            "page_number": page_request.page_number,
            "page_size": page_request.page_size,
        },
    )
    return await guard_store_call(
        store.search_by_query(index_or_default(index_name), query, page_request),
        "search",
        ErrorContext(index_name=index_name),
    )
