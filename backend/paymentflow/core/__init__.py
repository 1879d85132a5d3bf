"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, schemas/, or infrastructure/
    - All pipeline functions are pure and deterministic (today is a parameter)

Design Decisions:
    - Functional core separated from imperative shell (impureim sandwich)
"""
