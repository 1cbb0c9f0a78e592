"""Project Catalog — tests for pure project create/update and active pointer resolution."""

import pytest

from studbook.core.errors import InvalidProjectNameError, InvalidReferenceError
from studbook.core.project_catalog import (
    create_project, update_project, resolve_active_partition, select_active_partition,
)
from studbook.core.records import PartitionSnapshot
from tests.builders import SequentialIdGenerator, lion_snapshot


def test_create_project_appends_with_generated_id():
    snap, created = create_project(
        lion_snapshot(), "  Aviary  ", " birds ", SequentialIdGenerator(),
    )
    assert created.id == "p-new-1"
    assert created.name == "Aviary"
    assert created.description == "birds"
    assert [p.id for p in snap.projects] == ["A", "B", "p-new-1"]


def test_create_project_rejects_blank_name():
    with pytest.raises(InvalidProjectNameError) as exc:
        create_project(lion_snapshot(), "   ", "", SequentialIdGenerator())
    assert exc.value.http_status == 400
    assert exc.value.category.value == "validation"


def test_update_project_rejects_blank_name():
    with pytest.raises(InvalidProjectNameError):
        update_project(lion_snapshot(), "A", name="  ")


def test_update_project_keeps_position_and_unset_fields():
    snap, updated = update_project(lion_snapshot(), "A", name="Savanna")
    assert [p.id for p in snap.projects] == ["A", "B"]
    assert updated.name == "Savanna"
    assert updated.description == ""


def test_update_unknown_project_raises():
    with pytest.raises(InvalidReferenceError):
        update_project(lion_snapshot(), "NOPE", name="x")


def test_resolve_active_keeps_existing_pointer():
    assert resolve_active_partition(lion_snapshot(), "B") == "B"


def test_resolve_active_falls_back_to_first_project():
    assert resolve_active_partition(lion_snapshot(), "GONE") == "A"
    assert resolve_active_partition(lion_snapshot(), None) == "A"


def test_resolve_active_with_no_projects_is_none():
    assert resolve_active_partition(PartitionSnapshot(), "A") is None


def test_select_unknown_active_partition_raises():
    with pytest.raises(InvalidReferenceError):
        select_active_partition(lion_snapshot(), "NOPE")
