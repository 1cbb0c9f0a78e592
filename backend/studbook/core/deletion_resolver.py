"""Deletion Resolver — plans and executes partition deletion (purge or transfer-delete).

Invariants:
    - plan() and execute() are PURE: no IO, inputs never mutated
    - execute() checks, in order: project exists → last-partition guard → transfer target
      exists and differs. All raise before any record is touched
    - The last remaining project can NEVER be deleted, in either mode
    - Dependents are transitive: individuals of the project OR of its species
    - The returned active partition id never dangles: deleting (or holding an unknown)
      active id falls back to the first remaining project in snapshot order

Design Decisions:
    - Transfer-delete is a plain project_id reassignment, NOT the deduplicating selective
      transfer — duplicates in the target are accepted so deletion stays a predictable
      bulk operation
    - Purge and TransferTo as frozen dataclasses: the target id travels with the mode,
      so "transfer without a target" is unrepresentable
"""

from dataclasses import dataclass, replace

from studbook.core.domain_types import ProjectId, DeletionStrategy, Operation
from studbook.core.errors import (
    InvalidReferenceError, LastProjectViolationError, ErrorContext,
)
from studbook.core.hierarchy_validator import ensure_integrity
from studbook.core.records import PartitionSnapshot, Species, Individual


@dataclass(frozen=True)
class Purge:
    """Discard every dependent record along with the project."""
    strategy: DeletionStrategy = DeletionStrategy.PURGE


@dataclass(frozen=True)
class TransferTo:
    """Reassign every dependent record to target_project_id, then drop the project."""
    target_project_id: ProjectId
    strategy: DeletionStrategy = DeletionStrategy.TRANSFER


DeletionMode = Purge | TransferTo


@dataclass(frozen=True)
class DeletionPlan:
    """What deleting a project would touch — shown to the user before confirming."""
    project_id: ProjectId
    dependent_species_count: int
    dependent_individual_count: int
    suggested_target: ProjectId | None
    is_active: bool = False
    is_only_project: bool = False

    @property
    def has_dependents(self) -> bool:
        return self.dependent_species_count > 0 or self.dependent_individual_count > 0


@dataclass(frozen=True)
class DeletionResult:
    """New snapshot plus the (possibly reassigned) active partition pointer."""
    snapshot: PartitionSnapshot
    new_active_partition_id: ProjectId | None
    mode: DeletionStrategy
    species_affected: int = 0
    individuals_affected: int = 0


def _dependents(
    snapshot: PartitionSnapshot, project_id: str,
) -> tuple[list[Species], list[Individual]]:
    species = snapshot.species_in(project_id)
    species_ids = {s.id for s in species}
    individuals = [
        i for i in snapshot.individuals
        if i.project_id == project_id or i.species_id in species_ids
    ]
    return species, individuals


def _require_project(
    snapshot: PartitionSnapshot, project_id: str, ctx: ErrorContext,
) -> None:
    if not snapshot.has_project(project_id):
        raise InvalidReferenceError("Project", project_id, context=ctx)


def plan(
    snapshot: PartitionSnapshot,
    project_id: ProjectId,
    active_partition_id: str | None = None,
) -> DeletionPlan:
    """Count dependents and suggest the first other project as transfer target."""
    _require_project(
        snapshot, project_id,
        ErrorContext(operation=Operation.DELETE_PROJECT.value, project_id=project_id),
    )
    species, individuals = _dependents(snapshot, project_id)
    others = [p.id for p in snapshot.projects if p.id != project_id]
    return DeletionPlan(
        project_id=project_id,
        dependent_species_count=len(species),
        dependent_individual_count=len(individuals),
        suggested_target=others[0] if others else None,
        is_active=active_partition_id == project_id,
        is_only_project=not others,
    )


def execute(
    snapshot: PartitionSnapshot,
    project_id: ProjectId,
    mode: DeletionMode,
    active_partition_id: str | None,
) -> DeletionResult:
    """Delete a project, purging or relocating its dependents. Pure."""
    ctx = ErrorContext(operation=Operation.DELETE_PROJECT.value, project_id=project_id)
    _require_project(snapshot, project_id, ctx)

    remaining = tuple(p for p in snapshot.projects if p.id != project_id)
    if not remaining:
        raise LastProjectViolationError(project_id, ctx)

    if isinstance(mode, TransferTo):
        if mode.target_project_id == project_id:
            raise InvalidReferenceError(
                "Transfer target", mode.target_project_id,
                "is the project being deleted", context=ctx,
            )
        _require_project(snapshot, mode.target_project_id, ctx)

    species, individuals = _dependents(snapshot, project_id)
    species_ids = {s.id for s in species}
    individual_ids = {i.id for i in individuals}

    if isinstance(mode, TransferTo):
        target = mode.target_project_id
        new_species = tuple(
            replace(s, project_id=target) if s.id in species_ids else s
            for s in snapshot.species
        )
        new_individuals = tuple(
            replace(i, project_id=target) if i.id in individual_ids else i
            for i in snapshot.individuals
        )
    else:
        new_species = tuple(s for s in snapshot.species if s.id not in species_ids)
        new_individuals = tuple(
            i for i in snapshot.individuals if i.id not in individual_ids
        )

    result = PartitionSnapshot(remaining, new_species, new_individuals)
    ensure_integrity(snapshot, result, Operation.DELETE_PROJECT.value)

    remaining_ids = {p.id for p in remaining}
    new_active = active_partition_id
    if new_active not in remaining_ids:
        new_active = remaining[0].id

    return DeletionResult(
        snapshot=result,
        new_active_partition_id=new_active,
        mode=mode.strategy,
        species_affected=len(species),
        individuals_affected=len(individuals),
    )
