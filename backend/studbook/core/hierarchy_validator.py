"""Hierarchy Validator — detects Species/Individual invariant violations in a snapshot.

Invariants:
    - validate() is PURE: reports, never repairs
    - Three violation kinds: orphan species (unknown project), orphan individual
      (unknown species), partition mismatch (individual.project_id != species.project_id)
    - An orphan individual is NOT also reported as a mismatch (no species to compare with)
    - Violations are returned in snapshot order: species first, then individuals

Design Decisions:
    - ensure_integrity fails on ANY violation in the result, including ones carried over
      from the input; nothing inconsistent is ever handed back for persistence
    - The before snapshot is only used to tag carried-over violations in debug_info
"""

from dataclasses import dataclass

from studbook.core.domain_types import ViolationKind
from studbook.core.errors import IntegrityFaultError, ErrorContext
from studbook.core.records import PartitionSnapshot


@dataclass(frozen=True)
class Violation:
    """One broken hierarchy invariant, keyed by the offending record id."""
    kind: ViolationKind
    record_id: str


def validate(snapshot: PartitionSnapshot) -> list[Violation]:
    """Return every hierarchy violation in the snapshot. Empty list = consistent."""
    project_ids = snapshot.project_ids()
    species_index = snapshot.species_by_id()
    violations: list[Violation] = []

    for s in snapshot.species:
        if s.project_id not in project_ids:
            violations.append(Violation(ViolationKind.ORPHAN_SPECIES, s.id))

    for i in snapshot.individuals:
        species = species_index.get(i.species_id)
        if species is None:
            violations.append(Violation(ViolationKind.ORPHAN_INDIVIDUAL, i.id))
        elif i.project_id != species.project_id:
            violations.append(Violation(ViolationKind.PARTITION_MISMATCH, i.id))

    return violations


def ensure_integrity(
    before: PartitionSnapshot, after: PartitionSnapshot, operation: str,
) -> None:
    """Post-condition check. Raises IntegrityFaultError unless `after` is clean.

    Violations already present in `before` still fail the check; their ids are
    listed under debug_info["preexisting"] to separate bad input from a logic bug.
    """
    violations = validate(after)
    if not violations:
        return
    existing = set(validate(before))
    raise IntegrityFaultError(
        operation, violations,
        ErrorContext(
            operation=operation,
            debug_info={
                "preexisting": [v.record_id for v in violations if v in existing],
            },
        ),
    )
