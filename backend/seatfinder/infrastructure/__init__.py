"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - All external calls wrapped with timeout/error mapping
    - Failures surface as SeatFinderError subclasses (core/errors.py)

Design Decisions:
    - Thin wrappers over raw clients, one per collaborator
"""
