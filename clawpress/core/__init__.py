"""Core Layer — pure domain logic, no DB, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are deterministic given their inputs (token timestamps aside)

Design Decisions:
    - Functional core separated from imperative shell
"""
