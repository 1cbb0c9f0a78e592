"""Id Generation — default IdGenerator for production use.

Invariants:
    - Ids look like "<prefix>-<32 hex chars>" and are never reused within a process

Design Decisions:
    - uuid4 over timestamp+random: no collisions when several clones are created
      inside the same millisecond
"""

import uuid


class UuidIdGenerator:
    """IdGenerator backed by uuid4."""

    def __call__(self, prefix: str) -> str:
        return f"{prefix}-{uuid.uuid4().hex}"
