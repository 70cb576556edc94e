"""Core Layer — pure domain logic: types, records, validators, store contracts.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Validators are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell
"""
