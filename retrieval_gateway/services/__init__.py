"""Services Layer — the awaiting shell around core/: search and fetch orchestration.

Invariants:
    - Services take the store as an argument (no module-level handles)
    - No retries, no caching, no post-processing of store results

Design Decisions:
    - Plain async functions over service classes: nothing to hold between calls
"""
