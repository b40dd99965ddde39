"""Content-Type Resolution — picks the media type a fetched payload is served with.

Invariants:
    - Stored content type wins when present and non-blank
    - Otherwise DEFAULT_CONTENT_TYPE, the one fallback literal in the codebase
    - The resolved value is used for both the response header and the log line
"""

from retrieval_gateway.schemas.metadata import Metadata

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def resolve_content_type(metadata: Metadata) -> str:
    if metadata.content_type and metadata.content_type.strip():
        return metadata.content_type
    return DEFAULT_CONTENT_TYPE
