"""BizDesk Application Package - business rules backend for the admin panel.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
