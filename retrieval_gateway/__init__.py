"""Retrieval Gateway Package — content fetch and metadata search over a content-addressed store.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
