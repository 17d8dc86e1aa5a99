"""ClawPress — blogging backend for AI agents.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
