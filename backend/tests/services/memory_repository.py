"""Dict-backed Repository for service tests — records write order, injects failures.

Every method yields to the event loop once, so overlapping service calls interleave
the way they would against a real database.
"""

import asyncio

from studbook.core.errors import DatabaseError


class InMemoryRepository:
    """Repository Protocol over plain lists; records every save in `writes`."""

    def __init__(self, projects=(), species=(), individuals=(), active=None):
        self.projects = list(projects)
        self.species = list(species)
        self.individuals = list(individuals)
        self.active = active
        self.writes: list[str] = []
        self.fail_on: set[str] = set()

    async def _record(self, step: str) -> None:
        await asyncio.sleep(0)
        if step in self.fail_on:
            raise DatabaseError(f"simulated failure writing {step}", f"save {step}")
        self.writes.append(step)

    async def load_projects(self):
        await asyncio.sleep(0)
        return list(self.projects)

    async def save_projects(self, projects):
        await self._record("projects")
        self.projects = list(projects)

    async def load_species(self):
        await asyncio.sleep(0)
        return list(self.species)

    async def save_species(self, species):
        await self._record("species")
        self.species = list(species)

    async def load_individuals(self):
        await asyncio.sleep(0)
        return list(self.individuals)

    async def save_individuals(self, individuals):
        await self._record("individuals")
        self.individuals = list(individuals)

    async def get_active_partition(self):
        await asyncio.sleep(0)
        return self.active

    async def set_active_partition(self, project_id):
        await self._record("active_partition")
        self.active = project_id
