"""Services Layer — async orchestration of the pure core against a Repository.

Invariants:
    - Services own IO ordering and logging; business rules stay in core/

Design Decisions:
    - Imperative shell of the impureim sandwich: load, call core, persist
"""
