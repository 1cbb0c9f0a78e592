"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ProjectId, SpeciesId, IndividualId wrap str — never mix them in signatures
    - All valid states encoded as Enums — no raw string matching
    - Collection names are the single source of truth for write ordering

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (API and log extras)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ProjectId = NewType("ProjectId", str)
SpeciesId = NewType("SpeciesId", str)
IndividualId = NewType("IndividualId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Collection(str, Enum):
    """The record collections a Repository persists with bulk-replace semantics."""
    PROJECTS = "projects"
    SPECIES = "species"
    INDIVIDUALS = "individuals"


class ViolationKind(str, Enum):
    """Hierarchy invariant violations reported by the validator."""
    ORPHAN_SPECIES = "orphan_species"
    ORPHAN_INDIVIDUAL = "orphan_individual"
    PARTITION_MISMATCH = "partition_mismatch"


class DeletionStrategy(str, Enum):
    """How a partition's dependent records are resolved on delete."""
    PURGE = "purge"
    TRANSFER = "transfer"


class Operation(str, Enum):
    """Engine operations — used for error context and log extras."""
    GROUP_TRANSFER = "group_transfer"
    SELECTIVE_TRANSFER = "selective_transfer"
    DELETE_PROJECT = "delete_project"
    CREATE_PROJECT = "create_project"
    UPDATE_PROJECT = "update_project"
    SET_ACTIVE_PARTITION = "set_active_partition"


# Id prefixes for generated records
SPECIES_ID_PREFIX: str = "sp"
PROJECT_ID_PREFIX: str = "p"
