"""Core Layer - pure business rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions take plain dicts/dataclasses and return new values; inputs are never mutated
"""
