"""Infrastructure Layer — IO adapters: database, repository, id generation, logging.

Invariants:
    - Implements the Protocols declared in core/repository_protocols.py
    - Maps every SQLAlchemy failure to core DatabaseError

Design Decisions:
    - Shell side of the impureim sandwich: all IO lives here or in services/
"""
