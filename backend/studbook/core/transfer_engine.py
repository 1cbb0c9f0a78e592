"""Transfer Engine — moves species and individuals between project partitions.

Invariants:
    - Both operations are PURE: inputs are never mutated, a new snapshot is returned
    - Preconditions (no-op, empty selection, unknown project) are raised before any
      record is touched
    - Unresolvable or out-of-partition ids are skipped silently and reported back in
      skipped_ids, never raised (partial-selection tolerance)
    - group_transfer never deduplicates; selective_transfer always does
    - Source species are never deleted, even when left with zero individuals
    - The result passes ensure_integrity or the whole call raises IntegrityFaultError

Design Decisions:
    - Dedup match is exact and case-sensitive on scientific_name; when the target already
      holds several matches, the FIRST in snapshot order wins. Known ambiguity — a
      pre-existing data-quality issue, deliberately not "fixed" here
    - Dedup search runs over the working species list, so a clone created for one group
      is reused by a later group with the same scientific name
"""

from dataclasses import dataclass, field, replace

from studbook.core.domain_types import (
    ProjectId, SpeciesId, IndividualId, Operation, SPECIES_ID_PREFIX,
)
from studbook.core.errors import (
    NoOpTransferError, EmptySelectionError, InvalidReferenceError,
    IntegrityFaultError, ErrorContext,
)
from studbook.core.hierarchy_validator import ensure_integrity
from studbook.core.records import PartitionSnapshot, Species, Individual
from studbook.core.repository_protocols import IdGenerator


@dataclass(frozen=True)
class TransferResult:
    """New snapshot plus counts for caller reporting."""
    snapshot: PartitionSnapshot
    species_moved: int = 0
    individuals_moved: int = 0
    created_species_ids: list[str] = field(default_factory=list)
    reused_species_ids: list[str] = field(default_factory=list)
    skipped_ids: list[str] = field(default_factory=list)


def check_transfer_preconditions(
    snapshot: PartitionSnapshot,
    source_project_id: str,
    target_project_id: str,
    selection: set[str],
    operation: Operation,
) -> None:
    """Shared guard for both transfer modes. First failure wins."""
    ctx = ErrorContext(operation=operation.value, project_id=source_project_id)
    if source_project_id == target_project_id:
        raise NoOpTransferError(source_project_id, ctx)
    if not selection:
        raise EmptySelectionError(ctx)
    for project_id in (source_project_id, target_project_id):
        if not snapshot.has_project(project_id):
            raise InvalidReferenceError("Project", project_id, context=ctx)


def group_transfer(
    snapshot: PartitionSnapshot,
    source_project_id: ProjectId,
    target_project_id: ProjectId,
    species_ids: set[SpeciesId],
) -> TransferResult:
    """Relocate whole species (and every individual of them) verbatim."""
    check_transfer_preconditions(
        snapshot, source_project_id, target_project_id, species_ids,
        Operation.GROUP_TRANSFER,
    )

    matched = {
        s.id for s in snapshot.species
        if s.id in species_ids and s.project_id == source_project_id
    }
    skipped = sorted(species_ids - matched)

    new_species = tuple(
        replace(s, project_id=target_project_id) if s.id in matched else s
        for s in snapshot.species
    )
    individuals_moved = 0
    new_individuals: list[Individual] = []
    for i in snapshot.individuals:
        if i.species_id in matched:
            new_individuals.append(replace(i, project_id=target_project_id))
            individuals_moved += 1
        else:
            new_individuals.append(i)

    result = replace(
        snapshot, species=new_species, individuals=tuple(new_individuals),
    )
    ensure_integrity(
        snapshot, result, Operation.GROUP_TRANSFER.value,
    )
    return TransferResult(
        snapshot=result,
        species_moved=len(matched),
        individuals_moved=individuals_moved,
        skipped_ids=skipped,
    )


def find_target_species(
    species: list[Species], target_project_id: str, scientific_name: str,
) -> Species | None:
    """First species in the target partition with exactly this scientific name."""
    for s in species:
        if s.project_id == target_project_id and s.scientific_name == scientific_name:
            return s
    return None


def _group_by_species(
    individuals: list[Individual],
) -> dict[SpeciesId, list[Individual]]:
    groups: dict[SpeciesId, list[Individual]] = {}
    for i in individuals:
        groups.setdefault(i.species_id, []).append(i)
    return groups


def selective_transfer(
    snapshot: PartitionSnapshot,
    source_project_id: ProjectId,
    target_project_id: ProjectId,
    individual_ids: set[IndividualId],
    id_generator: IdGenerator,
) -> TransferResult:
    """Relocate hand-picked individuals, merging into matching target species."""
    check_transfer_preconditions(
        snapshot, source_project_id, target_project_id, individual_ids,
        Operation.SELECTIVE_TRANSFER,
    )

    selected = [
        i for i in snapshot.individuals
        if i.id in individual_ids and i.project_id == source_project_id
    ]
    species_index = snapshot.species_by_id()
    working_species = list(snapshot.species)
    known_species_ids = {s.id for s in snapshot.species}

    reassignment: dict[IndividualId, SpeciesId] = {}
    created: list[str] = []
    reused: list[str] = []

    for source_species_id, group in _group_by_species(selected).items():
        source_species = species_index.get(source_species_id)
        if source_species is None:
            continue

        target = find_target_species(
            working_species, target_project_id, source_species.scientific_name,
        )
        if target is not None:
            if target.id not in reused and target.id not in created:
                reused.append(target.id)
        else:
            new_id = SpeciesId(id_generator(SPECIES_ID_PREFIX))
            if new_id in known_species_ids:
                raise IntegrityFaultError(
                    Operation.SELECTIVE_TRANSFER.value, [],
                    ErrorContext(
                        operation=Operation.SELECTIVE_TRANSFER.value,
                        affected_ids=[new_id],
                        debug_info={"reason": "generated species id already in use"},
                    ),
                )
            target = replace(
                source_species, id=new_id, project_id=target_project_id,
                attributes=dict(source_species.attributes),
            )
            working_species.append(target)
            known_species_ids.add(new_id)
            created.append(new_id)

        for i in group:
            reassignment[i.id] = target.id

    new_individuals = tuple(
        replace(i, project_id=target_project_id, species_id=reassignment[i.id])
        if i.id in reassignment and i.project_id == source_project_id else i
        for i in snapshot.individuals
    )
    result = replace(
        snapshot, species=tuple(working_species), individuals=new_individuals,
    )
    ensure_integrity(
        snapshot, result, Operation.SELECTIVE_TRANSFER.value,
    )
    return TransferResult(
        snapshot=result,
        species_moved=0,
        individuals_moved=len(reassignment),
        created_species_ids=created,
        reused_species_ids=reused,
        skipped_ids=sorted(set(individual_ids) - set(reassignment)),
    )
