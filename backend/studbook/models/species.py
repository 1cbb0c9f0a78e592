"""Species ORM — persists a species record scoped to one project.

Invariants:
    - project_id references projects.id (no ON DELETE CASCADE: purge order is explicit)
    - scientific_name is the dedup key for selective transfer (exact, case-sensitive)
    - attributes holds every descriptive field the engine treats as opaque

Design Decisions:
    - JSON column for attributes: record-entry forms evolve without migrations
"""

from sqlalchemy import String, Integer, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from studbook.db.base import Base


class SpeciesRow(Base):
    """Species row."""
    __tablename__ = "species"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("projects.id"), nullable=False, index=True,
    )
    scientific_name: Mapped[str] = mapped_column(String(300), nullable=False)
    common_name: Mapped[str] = mapped_column(String(300), nullable=False, default="")
    attributes: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
