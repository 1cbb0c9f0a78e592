"""Deletion Resolver — tests for pure deletion planning and execution.

Tests cover:
    - plan() counts dependents and suggests the first other project
    - Purge removes the project and every dependent, other partitions untouched
    - TransferTo reassigns dependents without dedup, then removes the project
    - Last-partition guard in both modes, before target validation
    - Active pointer reassigned to the first remaining project when needed
"""

import pytest

from studbook.core.deletion_resolver import Purge, TransferTo, plan, execute
from studbook.core.domain_types import DeletionStrategy
from studbook.core.errors import InvalidReferenceError, LastProjectViolationError
from studbook.core.hierarchy_validator import validate
from studbook.core.records import PartitionSnapshot
from tests.builders import project, species, individual


def _three_projects() -> PartitionSnapshot:
    """C has S1 (I1, I2) and S2 (I3); D has S3 'Panthera leo' (I4); E empty."""
    return PartitionSnapshot.of(
        [project("C"), project("D"), project("E")],
        [
            species("S1", "C", "Panthera leo"),
            species("S2", "C", "Canis lupus"),
            species("S3", "D", "Panthera leo"),
        ],
        [
            individual("I1", "C", "S1"),
            individual("I2", "C", "S1"),
            individual("I3", "C", "S2"),
            individual("I4", "D", "S3"),
        ],
    )


# ─── plan ────────────────────────────────────────────────────────

def test_plan_counts_dependents_and_suggests_first_other_project():
    p = plan(_three_projects(), "C", active_partition_id="C")
    assert p.dependent_species_count == 2
    assert p.dependent_individual_count == 3
    assert p.suggested_target == "D"
    assert p.is_active is True
    assert p.is_only_project is False
    assert p.has_dependents is True


def test_plan_suggests_none_when_only_project():
    snap = PartitionSnapshot.of([project("C")], [], [])
    p = plan(snap, "C")
    assert p.suggested_target is None
    assert p.is_only_project is True
    assert p.has_dependents is False


def test_plan_unknown_project_raises():
    with pytest.raises(InvalidReferenceError):
        plan(_three_projects(), "NOPE")


# ─── Purge ───────────────────────────────────────────────────────

def test_purge_removes_project_and_all_dependents():
    result = execute(_three_projects(), "C", Purge(), active_partition_id="D")
    snap = result.snapshot
    assert [p.id for p in snap.projects] == ["D", "E"]
    assert snap.species_in("C") == []
    assert snap.individuals_in("C") == []
    assert [s.id for s in snap.species] == ["S3"]
    assert [i.id for i in snap.individuals] == ["I4"]
    assert result.species_affected == 2
    assert result.individuals_affected == 3
    assert result.mode == DeletionStrategy.PURGE
    assert validate(snap) == []


def test_purge_leaves_active_pointer_when_not_deleted():
    result = execute(_three_projects(), "C", Purge(), active_partition_id="E")
    assert result.new_active_partition_id == "E"


def test_purge_removes_mismatched_individual_of_deleted_species():
    snap = PartitionSnapshot.of(
        [project("C"), project("D")],
        [species("S1", "C", "Panthera leo")],
        [individual("I1", "D", "S1")],
    )
    result = execute(snap, "C", Purge(), active_partition_id="D")
    assert result.snapshot.individuals == ()


# ─── TransferTo ──────────────────────────────────────────────────

def test_transfer_delete_reassigns_without_dedup():
    before = _three_projects()
    result = execute(before, "C", TransferTo("D"), active_partition_id="C")
    snap = result.snapshot
    assert [p.id for p in snap.projects] == ["D", "E"]
    assert len(snap.species_in("D")) == len(before.species_in("D")) + 2
    assert len(snap.individuals_in("D")) == len(before.individuals_in("D")) + 3
    lions = [s.id for s in snap.species_in("D") if s.scientific_name == "Panthera leo"]
    assert lions == ["S1", "S3"]
    assert result.mode == DeletionStrategy.TRANSFER
    assert validate(snap) == []


def test_transfer_delete_of_active_project_moves_pointer():
    result = execute(_three_projects(), "C", TransferTo("D"), active_partition_id="C")
    assert result.new_active_partition_id == "D"


def test_deleting_active_project_picks_first_remaining():
    result = execute(_three_projects(), "D", Purge(), active_partition_id="D")
    assert result.new_active_partition_id == "C"


def test_dangling_active_pointer_is_repaired():
    result = execute(_three_projects(), "E", Purge(), active_partition_id=None)
    assert result.new_active_partition_id == "C"


def test_transfer_to_unknown_target_is_invalid_reference():
    with pytest.raises(InvalidReferenceError) as exc:
        execute(_three_projects(), "C", TransferTo("NOPE"), active_partition_id="C")
    assert exc.value.resource_id == "NOPE"


def test_transfer_to_self_is_invalid_reference():
    with pytest.raises(InvalidReferenceError):
        execute(_three_projects(), "C", TransferTo("C"), active_partition_id="C")


def test_delete_unknown_project_is_invalid_reference():
    with pytest.raises(InvalidReferenceError):
        execute(_three_projects(), "NOPE", Purge(), active_partition_id="C")


# ─── Last-partition guard ────────────────────────────────────────

@pytest.mark.parametrize("mode", [Purge(), TransferTo("ANYWHERE")])
def test_last_project_cannot_be_deleted(mode):
    snap = PartitionSnapshot.of(
        [project("C")], [species("S1", "C", "Panthera leo")],
        [individual("I1", "C", "S1")],
    )
    with pytest.raises(LastProjectViolationError) as exc:
        execute(snap, "C", mode, active_partition_id="C")
    assert exc.value.code == "LAST_PROJECT_VIOLATION"
    assert len(snap.projects) == 1
    assert len(snap.individuals) == 1


def test_execute_does_not_mutate_input():
    snap = _three_projects()
    execute(snap, "C", Purge(), active_partition_id="C")
    assert snap == _three_projects()
