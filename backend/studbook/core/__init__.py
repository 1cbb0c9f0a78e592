"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (ids come from an injected generator)
    - Inputs are never mutated: every operation returns a new PartitionSnapshot

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
