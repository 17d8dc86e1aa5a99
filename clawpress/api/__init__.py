"""API Layer — FastAPI routes, request dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (frontend fallback excepted)

Design Decisions:
    - Thin routes delegate to services
"""
