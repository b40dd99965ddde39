"""Boundary Protocols — contract between the gateway core and the backing store.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Store failures surface as GatewayError subclasses (NotFoundError,
      StoreTimeoutError, BackendError, ClientInputError)
    - Implementations are long-lived and shared read-only across requests

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no base class
    - Async in Protocol: implementations do network IO; the pure functions that
      shape requests stay synchronous in core/
"""

from typing import Protocol

from retrieval_gateway.core.domain_types import ContentHash, IndexName
from retrieval_gateway.core.page_spec import PageRequest
from retrieval_gateway.schemas.metadata import Metadata, MetadataAndPayload, Page
from retrieval_gateway.schemas.query import SearchQuery


class ContentStore(Protocol):
    """Content-addressed store with a metadata search index — implemented by shell."""
    async def search_by_query(
        self,
        index_name: IndexName | None,
        query: SearchQuery | None,
        page_request: PageRequest,
    ) -> Page[Metadata]: ...
    async def fetch_by_hash(
        self, index_name: IndexName | None, content_hash: ContentHash,
    ) -> MetadataAndPayload | None: ...
    async def health_check(self) -> bool: ...
