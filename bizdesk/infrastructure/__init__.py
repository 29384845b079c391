"""Infrastructure Layer - database engine, logging setup, document rendering.

Invariants:
    - Infrastructure never computes business values; it persists or renders them
"""
