"""Partition Schemas — Pydantic models for transfer, deletion and project endpoints.

Invariants:
    - Selections are lists of ids; emptiness is NOT rejected here; the engine raises
      EmptySelection so the error shape is the same for API and library callers
    - DeletionRequest cross-validates: transfer requires target_project_id, purge forbids it

Design Decisions:
    - model_validator for cross-field rules, field_validator for strip (side-effect-free)
"""

from pydantic import BaseModel, Field, field_validator, model_validator

from studbook.core.domain_types import DeletionStrategy


class ProjectCreate(BaseModel):
    """New partition — name required, stripped."""
    name: str = Field(min_length=1, max_length=200)
    description: str = Field("", max_length=5_000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ProjectUpdate(BaseModel):
    """Rename / re-describe a partition. Omitted fields stay unchanged."""
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5_000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ProjectResponse(BaseModel):
    id: str
    name: str
    description: str = ""


class ActivePartition(BaseModel):
    project_id: str | None


class GroupTransferRequest(BaseModel):
    """Move whole species (with their individuals) verbatim."""
    source_project_id: str
    target_project_id: str
    species_ids: list[str] = Field(default_factory=list)


class SelectiveTransferRequest(BaseModel):
    """Move hand-picked individuals, merging species by scientific name."""
    source_project_id: str
    target_project_id: str
    individual_ids: list[str] = Field(default_factory=list)


class TransferResponse(BaseModel):
    species_moved: int
    individuals_moved: int
    created_species_ids: list[str] = Field(default_factory=list)
    reused_species_ids: list[str] = Field(default_factory=list)
    skipped_ids: list[str] = Field(default_factory=list)


class DeletionPlanResponse(BaseModel):
    project_id: str
    dependent_species_count: int
    dependent_individual_count: int
    suggested_target: str | None
    is_active: bool
    is_only_project: bool


class DeletionRequest(BaseModel):
    """Purge or transfer-delete a partition."""
    mode: DeletionStrategy
    target_project_id: str | None = None

    @model_validator(mode="after")
    def check_target(self) -> "DeletionRequest":
        if self.mode == DeletionStrategy.TRANSFER and not self.target_project_id:
            raise ValueError("target_project_id is required when mode is 'transfer'")
        if self.mode == DeletionStrategy.PURGE and self.target_project_id:
            raise ValueError("target_project_id must be omitted when mode is 'purge'")
        return self


class DeletionResponse(BaseModel):
    project_id: str
    mode: DeletionStrategy
    species_affected: int
    individuals_affected: int
    new_active_partition_id: str | None
