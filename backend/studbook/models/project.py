"""Project ORM — persists a partition.

Invariants:
    - id is a caller-supplied string primary key (e.g. "p-…")
    - position stores snapshot order; rows are always loaded ORDER BY position

Design Decisions:
    - No ORM relationships to species/individuals: the engine works on full snapshots,
      and deletes are ordered by the service rather than cascaded by the DB
"""

from sqlalchemy import String, Text, Integer
from sqlalchemy.orm import Mapped, mapped_column

from studbook.db.base import Base


class ProjectRow(Base):
    """Partition row."""
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
