"""Individual ORM — persists one organism.

Invariants:
    - species_id references species.id; project_id references projects.id
    - project_id is denormalized and must equal the species' project_id

Design Decisions:
    - project_id denormalized: partition listings filter without a join, at the cost of
      the PARTITION_MISMATCH invariant the validator checks
"""

from sqlalchemy import String, Integer, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from studbook.db.base import Base


class IndividualRow(Base):
    """Individual row."""
    __tablename__ = "individuals"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("projects.id"), nullable=False, index=True,
    )
    species_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("species.id"), nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(300), nullable=False, default="")
    attributes: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
