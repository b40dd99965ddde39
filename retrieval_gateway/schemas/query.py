"""Search Query Schema — the canonical structured predicate.

Invariants:
    - Unknown fields rejected (extra="forbid"): a typo is a malformed query,
      not a silently broader search
    - operation "in" takes a list value; every other operation a scalar
    - A body posted as JSON and the same JSON sent as a query string validate
      to equal SearchQuery objects

Design Decisions:
    - frozen=True: resolved queries are passed around, never mutated
    - Scalar union left open (str | int | float | bool): the index decides
      how to compare, this layer only checks the shape
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from retrieval_gateway.core.domain_types import QueryOperation

Scalar = str | int | float | bool


class SearchQuery(BaseModel):
    """Structured predicate matched against indexed metadata."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    key: str = Field(min_length=1)
    operation: QueryOperation = QueryOperation.EQUALS
    value: Scalar | list[Scalar]

    @model_validator(mode="after")
    def check_value_shape(self):
        if self.operation is QueryOperation.IN:
            if not isinstance(self.value, list):
                raise ValueError("operation 'in' requires a list value")
        elif isinstance(self.value, list):
            raise ValueError(
                f"operation '{self.operation.value}' requires a scalar value",
            )
        return self
