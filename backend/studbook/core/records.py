"""Records & Snapshots — immutable in-memory view of the three record collections.

Invariants:
    - Project, Species, Individual are frozen: changes go through dataclasses.replace
    - PartitionSnapshot holds tuples; tuple order IS snapshot order (tie-breaks rely on it)
    - attributes carries every descriptive field the engine does not interpret

Design Decisions:
    - Frozen dataclasses over ORM objects: the core never sees a DB row (ADR: functional core)
    - attributes as a plain dict: the engine relocates records, it never edits descriptions,
      so the open-ended field set of the record-entry forms stays opaque here
"""

from dataclasses import dataclass, field
from typing import Any

from studbook.core.domain_types import ProjectId, SpeciesId, IndividualId


@dataclass(frozen=True)
class Project:
    """Partition boundary."""
    id: ProjectId
    name: str
    description: str = ""


@dataclass(frozen=True)
class Species:
    """Species record scoped to exactly one project."""
    id: SpeciesId
    project_id: ProjectId
    scientific_name: str
    common_name: str = ""
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Individual:
    """Individual organism — belongs to one species and, transitively, one project."""
    id: IndividualId
    project_id: ProjectId
    species_id: SpeciesId
    name: str = ""
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PartitionSnapshot:
    """Full copy of the three collections, as loaded from a Repository."""
    projects: tuple[Project, ...] = ()
    species: tuple[Species, ...] = ()
    individuals: tuple[Individual, ...] = ()

    @classmethod
    def of(cls, projects=(), species=(), individuals=()) -> "PartitionSnapshot":
        """Build a snapshot from any iterables (lists from the Repository)."""
        return cls(tuple(projects), tuple(species), tuple(individuals))

    def project_ids(self) -> set[ProjectId]:
        return {p.id for p in self.projects}

    def has_project(self, project_id: str) -> bool:
        return any(p.id == project_id for p in self.projects)

    def species_by_id(self) -> dict[SpeciesId, Species]:
        """First occurrence wins, matching snapshot-order lookups."""
        index: dict[SpeciesId, Species] = {}
        for s in self.species:
            index.setdefault(s.id, s)
        return index

    def individuals_by_id(self) -> dict[IndividualId, Individual]:
        index: dict[IndividualId, Individual] = {}
        for i in self.individuals:
            index.setdefault(i.id, i)
        return index

    def species_in(self, project_id: str) -> list[Species]:
        return [s for s in self.species if s.project_id == project_id]

    def individuals_in(self, project_id: str) -> list[Individual]:
        return [i for i in self.individuals if i.project_id == project_id]
