"""Core Layer — pure domain logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the write kernel's
      transitions live here, its file handle lives in infrastructure/
"""
