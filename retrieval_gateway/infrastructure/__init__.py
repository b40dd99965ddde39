"""Infrastructure Layer — backing store client and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external calls wrapped with timeout/error mapping

Design Decisions:
    - Resilient wrapper over the raw HTTP client (single responsibility)
"""
