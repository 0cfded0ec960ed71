"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (exports return files)

Design Decisions:
    - Thin routes delegate to core/ and services/
"""
