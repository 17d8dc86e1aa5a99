"""Services Layer — account, post, image and notification workflows.

Invariants:
    - Services take an AsyncSession and explicit clients; no FastAPI imports
    - Best-effort side effects (image generation, email) never raise to callers

Design Decisions:
    - One file per workflow for locality
"""
