"""Project Routes — partition catalog, active pointer, and deletion.

Invariants:
    - Deletion is two-step: GET deletion-plan (counts + suggested target), then POST delete
    - The last remaining project can never be deleted (409 LAST_PROJECT_VIOLATION)
    - /active is declared before /{project_id} routes so it is never captured as an id

Design Decisions:
    - POST /{id}/delete over DELETE with a body: some proxies drop DELETE bodies
"""

from fastapi import APIRouter, Depends, status

from studbook.api.dependencies import get_partition_service
from studbook.core.deletion_resolver import Purge, TransferTo
from studbook.core.domain_types import DeletionStrategy, ProjectId
from studbook.schemas.partition import (
    ActivePartition, DeletionPlanResponse, DeletionRequest, DeletionResponse,
    ProjectCreate, ProjectResponse, ProjectUpdate,
)
from studbook.services.partition_service import PartitionService

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.get("", response_model=list[ProjectResponse])
async def list_projects(service: PartitionService = Depends(get_partition_service)):
    """All projects in snapshot order."""
    return [
        ProjectResponse(id=p.id, name=p.name, description=p.description)
        for p in await service.list_projects()
    ]


@router.post(
    "", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectCreate, service: PartitionService = Depends(get_partition_service),
):
    project = await service.create_project(body.name, body.description)
    return ProjectResponse(
        id=project.id, name=project.name, description=project.description,
    )


@router.get("/active", response_model=ActivePartition)
async def get_active_partition(
    service: PartitionService = Depends(get_partition_service),
):
    return ActivePartition(project_id=await service.get_active_partition())


@router.put("/active", response_model=ActivePartition)
async def set_active_partition(
    body: ActivePartition, service: PartitionService = Depends(get_partition_service),
):
    """Switch the active partition. Unknown ids → 404."""
    selected = await service.set_active_partition(body.project_id or "")
    return ActivePartition(project_id=selected)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    service: PartitionService = Depends(get_partition_service),
):
    project = await service.update_project(project_id, body.name, body.description)
    return ProjectResponse(
        id=project.id, name=project.name, description=project.description,
    )


@router.get("/{project_id}/deletion-plan", response_model=DeletionPlanResponse)
async def get_deletion_plan(
    project_id: str, service: PartitionService = Depends(get_partition_service),
):
    """Dependent counts and suggested transfer target, shown before confirming."""
    plan = await service.plan_deletion(project_id)
    return DeletionPlanResponse(
        project_id=plan.project_id,
        dependent_species_count=plan.dependent_species_count,
        dependent_individual_count=plan.dependent_individual_count,
        suggested_target=plan.suggested_target,
        is_active=plan.is_active,
        is_only_project=plan.is_only_project,
    )


@router.post("/{project_id}/delete", response_model=DeletionResponse)
async def delete_project(
    project_id: str,
    body: DeletionRequest,
    service: PartitionService = Depends(get_partition_service),
):
    """Purge or transfer-delete a project."""
    if body.mode == DeletionStrategy.TRANSFER:
        mode = TransferTo(ProjectId(body.target_project_id))
    else:
        mode = Purge()
    result = await service.delete_project(project_id, mode)
    return DeletionResponse(
        project_id=project_id,
        mode=result.mode,
        species_affected=result.species_affected,
        individuals_affected=result.individuals_affected,
        new_active_partition_id=result.new_active_partition_id,
    )
