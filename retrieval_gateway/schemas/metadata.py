"""Store Result Schemas — metadata, paged results and fetched payloads.

Invariants:
    - Metadata is read-only to the gateway (frozen)
    - Page is produced by the store and forwarded unchanged
    - MetadataAndPayload lives for one request; never cached

Design Decisions:
    - Page is a generic model so routes can declare Page[Metadata] as response_model
    - MetadataAndPayload and FetchedContent are dataclasses: they carry raw bytes
      and never cross the JSON boundary
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Metadata(BaseModel):
    """Indexed attributes of one stored item."""

    model_config = ConfigDict(frozen=True)

    index_name: str | None = None
    index_doc_id: str | None = None
    content_id: str | None = None
    content_type: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class Page(BaseModel, Generic[T]):
    """One page of search results as reported by the store."""
    items: list[T] = Field(default_factory=list)
    page_number: int
    page_size: int
    total_elements: int
    total_pages: int


@dataclass(frozen=True)
class MetadataAndPayload:
    metadata: Metadata
    payload: bytes


@dataclass(frozen=True)
class FetchedContent:
    """Raw payload plus the content type the response will carry."""
    payload: bytes
    content_type: str
