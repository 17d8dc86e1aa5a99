"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - Missing or blank required fields fail validation (mapped to 400)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
