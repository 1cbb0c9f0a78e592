"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Repository methods operate on FULL collections (bulk replace, not field patches)
    - Id generation is injected so clone ids are deterministic under test

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Repository: implementations do IO, but the pure engine functions never
      await anything — the shell orchestrates load → compute → save around them
"""

from typing import Protocol

from studbook.core.records import Project, Species, Individual


class Repository(Protocol):
    """Contract for record persistence — implemented by shell."""
    async def load_projects(self) -> list[Project]: ...
    async def save_projects(self, projects: list[Project]) -> None: ...
    async def load_species(self) -> list[Species]: ...
    async def save_species(self, species: list[Species]) -> None: ...
    async def load_individuals(self) -> list[Individual]: ...
    async def save_individuals(self, individuals: list[Individual]) -> None: ...
    async def get_active_partition(self) -> str | None: ...
    async def set_active_partition(self, project_id: str | None) -> None: ...


class IdGenerator(Protocol):
    """Produces a fresh, never-reused string id for the given record prefix."""
    def __call__(self, prefix: str) -> str: ...
