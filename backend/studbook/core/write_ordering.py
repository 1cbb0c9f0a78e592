"""Write Ordering — which collections to persist, and in which order, after an operation.

Invariants:
    - plan_writes is PURE: compares two snapshots, returns collection names
    - Relocating/creating writes referenced records first (species → individuals → projects)
    - Purging removes referencing records first (individuals → species → projects)
    - Collections that did not change are never written

Design Decisions:
    - Ordering lives in the core, not the repository: the store is not transactional
      across entity types, so the order is what keeps a half-finished write-back from
      leaving dangling references (ADR: PersistenceFailure names the committed steps)
"""

from studbook.core.domain_types import Collection
from studbook.core.records import PartitionSnapshot


TRANSFER_WRITE_ORDER: tuple[Collection, ...] = (
    Collection.SPECIES, Collection.INDIVIDUALS, Collection.PROJECTS,
)
PURGE_WRITE_ORDER: tuple[Collection, ...] = (
    Collection.INDIVIDUALS, Collection.SPECIES, Collection.PROJECTS,
)


def _records(snapshot: PartitionSnapshot, collection: Collection) -> tuple:
    if collection == Collection.PROJECTS:
        return snapshot.projects
    if collection == Collection.SPECIES:
        return snapshot.species
    return snapshot.individuals


def plan_writes(
    before: PartitionSnapshot,
    after: PartitionSnapshot,
    order: tuple[Collection, ...] = TRANSFER_WRITE_ORDER,
) -> list[Collection]:
    """Collections whose content changed, in persistence order."""
    return [c for c in order if _records(before, c) != _records(after, c)]
