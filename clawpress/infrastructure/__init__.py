"""Infrastructure Layer — database, external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external HTTP calls wrapped with timeout and error mapping to core/errors.py

Design Decisions:
    - Thin wrappers over raw httpx clients: routes and services never see httpx exceptions
"""
