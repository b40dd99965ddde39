"""Content Fetch Gateway — fetches a payload by hash and labels its media type.

Invariants:
    - Blank hash rejected with ClientInputError before the store is called
    - Store returning nothing is NotFoundError, never empty bytes
    - Payload bytes returned exactly as stored
    - The logged content type is the same value the response header carries

Design Decisions:
    - Content type resolved once into FetchedContent; the route only copies it
      to the header, so header and log cannot disagree
"""

import logging

from retrieval_gateway.core.content_type import resolve_content_type
from retrieval_gateway.core.domain_types import ContentHash, index_or_default
from retrieval_gateway.core.errors import (
    ClientInputError, ErrorContext, NotFoundError,
)
from retrieval_gateway.core.store_protocols import ContentStore
from retrieval_gateway.schemas.metadata import FetchedContent
from retrieval_gateway.services.store_call import guard_store_call

logger = logging.getLogger(__name__)


async def fetch_content(
    store: ContentStore,
    index_name: str | None,
    content_hash: str | None,
) -> FetchedContent:
    """Fetch raw content by hash with its resolved content type."""
    context = ErrorContext(content_hash=content_hash, index_name=index_name)
    if not content_hash or not content_hash.strip():
        raise ClientInputError("Content hash is required", "hash", context)

    result = await guard_store_call(
        store.fetch_by_hash(
            index_or_default(index_name), ContentHash(content_hash),
        ),
        "fetch",
        context,
    )
    if result is None:
        raise NotFoundError(content_hash, context)

    content_type = resolve_content_type(result.metadata)
    logger.info(
        f"Fetched content {content_hash} ({len(result.payload)} bytes)",
        extra={
            "content_hash": content_hash,
            "index_name": index_name,
            "content_type": content_type,
        },
    )
    return FetchedContent(payload=result.payload, content_type=content_type)
