"""Core Layer — pure request-shaping logic, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: services/ does the awaiting,
      core/ decides what to ask for and how to label what comes back
"""
