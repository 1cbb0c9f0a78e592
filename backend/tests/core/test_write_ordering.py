"""Tests for plan_writes — pure persistence ordering, no IO."""

from dataclasses import replace

from studbook.core.deletion_resolver import Purge, execute
from studbook.core.domain_types import Collection
from studbook.core.transfer_engine import selective_transfer
from studbook.core.write_ordering import (
    plan_writes, TRANSFER_WRITE_ORDER, PURGE_WRITE_ORDER,
)
from tests.builders import SequentialIdGenerator, lion_snapshot, project


def test_unchanged_snapshot_needs_no_writes():
    snap = lion_snapshot()
    assert plan_writes(snap, snap) == []


def test_selective_transfer_writes_species_before_individuals():
    before = lion_snapshot()
    after = selective_transfer(
        before, "A", "B", {"I1"}, SequentialIdGenerator(),
    ).snapshot
    assert plan_writes(before, after, TRANSFER_WRITE_ORDER) == [
        Collection.SPECIES, Collection.INDIVIDUALS,
    ]


def test_purge_writes_individuals_first_and_projects_last():
    before = lion_snapshot()
    after = execute(before, "A", Purge(), active_partition_id="A").snapshot
    assert plan_writes(before, after, PURGE_WRITE_ORDER) == [
        Collection.INDIVIDUALS, Collection.SPECIES, Collection.PROJECTS,
    ]


def test_project_only_change_writes_projects_only():
    before = lion_snapshot()
    after = replace(before, projects=before.projects + (project("C"),))
    assert plan_writes(before, after) == [Collection.PROJECTS]
