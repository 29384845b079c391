"""Services Layer - database orchestration around the pure core.

Invariants:
    - Services own the transaction: each public coroutine commits once
    - Business arithmetic lives in core/; services only fetch, call core, persist
"""
