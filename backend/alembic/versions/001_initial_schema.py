"""Initial schema — projects, species, individuals, app_state.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

Foreign keys carry no ON DELETE CASCADE: purge deletes individuals, then species,
then the project, in that order, from the service layer.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "species",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("project_id", sa.String(64), sa.ForeignKey("projects.id"), nullable=False),
        sa.Column("scientific_name", sa.String(300), nullable=False),
        sa.Column("common_name", sa.String(300), nullable=False, server_default=""),
        sa.Column("attributes", sa.JSON, nullable=False),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index("ix_species_project_id", "species", ["project_id"])

    op.create_table(
        "individuals",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("project_id", sa.String(64), sa.ForeignKey("projects.id"), nullable=False),
        sa.Column("species_id", sa.String(64), sa.ForeignKey("species.id"), nullable=False),
        sa.Column("name", sa.String(300), nullable=False, server_default=""),
        sa.Column("attributes", sa.JSON, nullable=False),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index("ix_individuals_project_id", "individuals", ["project_id"])
    op.create_index("ix_individuals_species_id", "individuals", ["species_id"])

    op.create_table(
        "app_state",
        sa.Column("key", sa.String(64), primary_key=True),
        sa.Column("value", sa.String(64), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("app_state")
    op.drop_index("ix_individuals_species_id", "individuals")
    op.drop_index("ix_individuals_project_id", "individuals")
    op.drop_table("individuals")
    op.drop_index("ix_species_project_id", "species")
    op.drop_table("species")
    op.drop_table("projects")
