"""Pydantic Schemas — ingestion and request/response validation.

Invariants:
    - Schemas validate at system boundary (source payloads, query params, responses)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Schemas convert into core dataclasses; core never sees pydantic models
"""
