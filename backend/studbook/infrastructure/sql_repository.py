"""SQL Repository — SQLAlchemy implementation of the core Repository protocol.

Invariants:
    - load_* return records ordered by position (= snapshot order)
    - save_* are bulk replaces: rows whose id is absent from the list are deleted,
      the rest are upserted with position = list index
    - Each save commits on its own; a failure rolls back only that step and raises
      DatabaseError naming the collection

Design Decisions:
    - One commit per collection (not one transaction for the whole operation): mirrors
      a backing store that cannot be transactional across entity types, so the service
      owns write ordering and PersistenceFailure reporting
    - Row <-> record mapping kept here: the core never sees ORM objects
"""

import logging

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from studbook.core.domain_types import ProjectId, SpeciesId, IndividualId
from studbook.core.errors import DatabaseError
from studbook.core.records import Project, Species, Individual
from studbook.models.project import ProjectRow
from studbook.models.species import SpeciesRow
from studbook.models.individual import IndividualRow
from studbook.models.app_state import AppStateRow, ACTIVE_PARTITION_KEY

logger = logging.getLogger(__name__)


class SqlAlchemyRepository:
    """Repository over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    # ─── Projects ────────────────────────────────────────────────

    async def load_projects(self) -> list[Project]:
        result = await self._db.execute(
            select(ProjectRow).order_by(ProjectRow.position),
        )
        return [
            Project(id=ProjectId(r.id), name=r.name, description=r.description or "")
            for r in result.scalars().all()
        ]

    async def save_projects(self, projects: list[Project]) -> None:
        await self._replace(ProjectRow, [
            ProjectRow(
                id=p.id, name=p.name, description=p.description, position=n,
            )
            for n, p in enumerate(projects)
        ], "projects")

    # ─── Species ─────────────────────────────────────────────────

    async def load_species(self) -> list[Species]:
        result = await self._db.execute(
            select(SpeciesRow).order_by(SpeciesRow.position),
        )
        return [
            Species(
                id=SpeciesId(r.id),
                project_id=ProjectId(r.project_id),
                scientific_name=r.scientific_name,
                common_name=r.common_name or "",
                attributes=dict(r.attributes or {}),
            )
            for r in result.scalars().all()
        ]

    async def save_species(self, species: list[Species]) -> None:
        await self._replace(SpeciesRow, [
            SpeciesRow(
                id=s.id, project_id=s.project_id,
                scientific_name=s.scientific_name, common_name=s.common_name,
                attributes=dict(s.attributes), position=n,
            )
            for n, s in enumerate(species)
        ], "species")

    # ─── Individuals ─────────────────────────────────────────────

    async def load_individuals(self) -> list[Individual]:
        result = await self._db.execute(
            select(IndividualRow).order_by(IndividualRow.position),
        )
        return [
            Individual(
                id=IndividualId(r.id),
                project_id=ProjectId(r.project_id),
                species_id=SpeciesId(r.species_id),
                name=r.name or "",
                attributes=dict(r.attributes or {}),
            )
            for r in result.scalars().all()
        ]

    async def save_individuals(self, individuals: list[Individual]) -> None:
        await self._replace(IndividualRow, [
            IndividualRow(
                id=i.id, project_id=i.project_id, species_id=i.species_id,
                name=i.name, attributes=dict(i.attributes), position=n,
            )
            for n, i in enumerate(individuals)
        ], "individuals")

    # ─── Active partition ────────────────────────────────────────

    async def get_active_partition(self) -> str | None:
        row = await self._db.get(AppStateRow, ACTIVE_PARTITION_KEY)
        return row.value if row else None

    async def set_active_partition(self, project_id: str | None) -> None:
        try:
            await self._db.merge(
                AppStateRow(key=ACTIVE_PARTITION_KEY, value=project_id),
            )
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(f"Failed to save active partition: {e}")
            raise DatabaseError("Active partition write failed", "save active_partition")

    # ─── Helpers ─────────────────────────────────────────────────

    async def _replace(self, model, rows: list, collection: str) -> None:
        """Bulk replace one table with `rows`, committed as a single step."""
        ids = [r.id for r in rows]
        try:
            if ids:
                await self._db.execute(delete(model).where(model.id.not_in(ids)))
            else:
                await self._db.execute(delete(model))
            for row in rows:
                await self._db.merge(row)
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(f"Bulk replace of {collection} failed: {e}")
            raise DatabaseError(f"Bulk replace of {collection} failed", f"save {collection}")
