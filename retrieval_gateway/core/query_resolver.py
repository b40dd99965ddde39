"""Query Resolver — reduces either search transport to one canonical SearchQuery.

Invariants:
    - SearchQuery in → same object out (identity, not a copy)
    - str in → decoded SearchQuery, or MalformedQueryError with the cause chained
    - JSON null in → None, the same "no filter" a POST body of null gives
    - None in → None ("no filter": every indexed item matches)
    - Never defaults a bad query to "match all"

Design Decisions:
    - JSON decoding through a SearchQuery | None adapter: the string form goes
      through the exact schema the POST body does, so the two cannot drift
    - Empty string is malformed rather than "no filter": the caller sent a
      query parameter, just not a valid one
"""

from pydantic import TypeAdapter, ValidationError

from retrieval_gateway.schemas.query import SearchQuery
from retrieval_gateway.core.errors import MalformedQueryError

_QUERY_OR_NULL = TypeAdapter(SearchQuery | None)


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


def decode_query(raw: str) -> SearchQuery | None:
    """Decode the serialized (JSON) query form; JSON null means no filter."""
    try:
        return _QUERY_OR_NULL.validate_json(raw)
    except ValidationError as e:
        raise MalformedQueryError(_describe(e)) from e


def resolve_query(raw: SearchQuery | str | None) -> SearchQuery | None:
    """Resolve a structured, serialized or absent query to its canonical form."""
    if raw is None or isinstance(raw, SearchQuery):
        return raw
    return decode_query(raw)
