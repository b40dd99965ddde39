"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ContentHash is opaque: never parsed, split or normalized
    - IndexName None means "the store's default index", resolved by the store
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and query strings without custom encoders
    - Case-insensitive enum lookup via _missing_: clients send "asc" as often as "ASC"
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ContentHash = NewType("ContentHash", str)
IndexName = NewType("IndexName", str)


def index_or_default(raw: str | None) -> IndexName | None:
    """Absent or empty index → None, the store's default index."""
    return IndexName(raw) if raw else None


# ─── Pagination Defaults ─────────────────────────────────────────

DEFAULT_PAGE_NUMBER = 0
DEFAULT_PAGE_SIZE = 20


# ─── Enums ───────────────────────────────────────────────────────

class _CaseInsensitiveEnum(str, Enum):
    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class SortDirection(_CaseInsensitiveEnum):
    """Sort order applied by the store when a sort attribute is given."""
    ASC = "ASC"
    DESC = "DESC"


class QueryOperation(_CaseInsensitiveEnum):
    """Predicate operations understood by the search index."""
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    IN = "in"
    FULL_TEXT = "full_text"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    QUERY_STRING = "query_string"
