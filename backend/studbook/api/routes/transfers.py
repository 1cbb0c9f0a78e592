"""Transfer Routes — group and selective transfer between partitions.

Invariants:
    - Routes only translate request/response shapes; all rules live in the core
    - Unresolvable ids come back in skipped_ids with 200, not as an error
"""

from fastapi import APIRouter, Depends

from studbook.api.dependencies import get_partition_service
from studbook.core.transfer_engine import TransferResult
from studbook.schemas.partition import (
    GroupTransferRequest, SelectiveTransferRequest, TransferResponse,
)
from studbook.services.partition_service import PartitionService

router = APIRouter(prefix="/api/v1/transfers", tags=["transfers"])


def _to_response(result: TransferResult) -> TransferResponse:
    return TransferResponse(
        species_moved=result.species_moved,
        individuals_moved=result.individuals_moved,
        created_species_ids=result.created_species_ids,
        reused_species_ids=result.reused_species_ids,
        skipped_ids=result.skipped_ids,
    )


@router.post("/group", response_model=TransferResponse)
async def group_transfer(
    body: GroupTransferRequest,
    service: PartitionService = Depends(get_partition_service),
):
    """Relocate whole species and their individuals, no merging."""
    result = await service.group_transfer(
        body.source_project_id, body.target_project_id, set(body.species_ids),
    )
    return _to_response(result)


@router.post("/selective", response_model=TransferResponse)
async def selective_transfer(
    body: SelectiveTransferRequest,
    service: PartitionService = Depends(get_partition_service),
):
    """Relocate hand-picked individuals, reusing or cloning target species."""
    result = await service.selective_transfer(
        body.source_project_id, body.target_project_id, set(body.individual_ids),
    )
    return _to_response(result)
