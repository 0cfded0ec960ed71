"""Services Layer — catalogue views and export rendering.

Invariants:
    - Services orchestrate IO around the pure core (fetch → resolve → apply)
    - Rendering consumes ResultSet only, never raw records

Design Decisions:
    - One file per concern for locality
"""
