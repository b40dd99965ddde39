"""Pydantic Schemas — canonical query and store result shapes.

Invariants:
    - Schemas validate at system boundary (request bodies, store responses)
    - Domain types from core/ used for enum fields

Design Decisions:
    - One canonical SearchQuery shared by both search transports
"""
