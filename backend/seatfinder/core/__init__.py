"""Core Layer — pure catalogue pipeline, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - All pipeline functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the same resolve() feeds
      the JSON API and the export renderers
"""
