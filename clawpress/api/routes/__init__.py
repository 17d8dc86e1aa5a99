"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes stay thin: queries and side effects live in services/

Design Decisions:
    - Explicit registration in main.py over auto-discovery
    - frontend.router registered last: its catch-all GET must not shadow /api routes
"""
