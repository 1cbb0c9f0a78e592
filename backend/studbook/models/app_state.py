"""App State ORM — key/value row for process-wide pointers (the active partition)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from studbook.db.base import Base

ACTIVE_PARTITION_KEY = "active_partition"


class AppStateRow(Base):
    """Single key/value setting."""
    __tablename__ = "app_state"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str | None] = mapped_column(String(64), nullable=True)
