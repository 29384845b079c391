"""Database Infrastructure - the SQLAlchemy declarative Base.

Invariants:
    - All sessions are async (AsyncSession), created by infrastructure/database.py
"""
