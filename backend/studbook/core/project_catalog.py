"""Project Catalog — pure create/update of partition records and the active pointer.

Invariants:
    - Pure functions over PartitionSnapshot: no IO, inputs never mutated
    - New projects are appended (snapshot order = creation order)
    - Project names are stripped and must be non-empty
    - The active pointer may only be set to an existing project

Design Decisions:
    - Kept apart from DeletionResolver: creating/renaming never touches species or
      individuals, so no integrity check is needed here
"""

from dataclasses import replace

from studbook.core.domain_types import ProjectId, Operation, PROJECT_ID_PREFIX
from studbook.core.errors import (
    InvalidProjectNameError, InvalidReferenceError, ErrorContext,
)
from studbook.core.records import PartitionSnapshot, Project
from studbook.core.repository_protocols import IdGenerator


def create_project(
    snapshot: PartitionSnapshot,
    name: str,
    description: str,
    id_generator: IdGenerator,
) -> tuple[PartitionSnapshot, Project]:
    """Append a new project. Returns (new snapshot, created project)."""
    name = name.strip()
    if not name:
        raise InvalidProjectNameError(
            ErrorContext(operation=Operation.CREATE_PROJECT.value),
        )
    project_id = ProjectId(id_generator(PROJECT_ID_PREFIX))
    if snapshot.has_project(project_id):
        raise InvalidReferenceError(
            "Project", project_id, "already exists",
            context=ErrorContext(operation=Operation.CREATE_PROJECT.value),
        )
    project = Project(id=project_id, name=name, description=description.strip())
    return replace(snapshot, projects=snapshot.projects + (project,)), project


def update_project(
    snapshot: PartitionSnapshot,
    project_id: str,
    name: str | None = None,
    description: str | None = None,
) -> tuple[PartitionSnapshot, Project]:
    """Rename and/or re-describe a project in place (same position)."""
    ctx = ErrorContext(operation=Operation.UPDATE_PROJECT.value, project_id=project_id)
    if not snapshot.has_project(project_id):
        raise InvalidReferenceError("Project", project_id, context=ctx)
    if name is not None and not name.strip():
        raise InvalidProjectNameError(ctx)

    updated: Project | None = None
    projects = []
    for p in snapshot.projects:
        if p.id == project_id and updated is None:
            p = replace(
                p,
                name=name.strip() if name is not None else p.name,
                description=(
                    description.strip() if description is not None else p.description
                ),
            )
            updated = p
        projects.append(p)
    return replace(snapshot, projects=tuple(projects)), updated


def resolve_active_partition(
    snapshot: PartitionSnapshot, active_partition_id: str | None,
) -> ProjectId | None:
    """Active id if it still exists, else the first project, else None."""
    if active_partition_id and snapshot.has_project(active_partition_id):
        return ProjectId(active_partition_id)
    return snapshot.projects[0].id if snapshot.projects else None


def select_active_partition(
    snapshot: PartitionSnapshot, project_id: str,
) -> ProjectId:
    """Validate an explicit switch of the active partition."""
    if not snapshot.has_project(project_id):
        raise InvalidReferenceError(
            "Project", project_id,
            context=ErrorContext(
                operation=Operation.SET_ACTIVE_PARTITION.value, project_id=project_id,
            ),
        )
    return ProjectId(project_id)
