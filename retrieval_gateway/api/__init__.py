"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Errors leave as structured JSON envelopes; content leaves as raw bytes

Design Decisions:
    - Thin routes delegate to services (functional core, imperative shell)
"""
