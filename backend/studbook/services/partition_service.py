"""Partition Service — load → compute → persist orchestration around the pure engine.

Invariants:
    - Every operation loads a FULL snapshot, calls exactly one pure core function, then
      writes back only the collections that changed, in the core's write order
    - Precondition errors propagate untouched: nothing has been written yet
    - IntegrityFaultError is logged with operation + affected ids and re-raised; the
      computed snapshot is discarded, never persisted
    - A DatabaseError mid write-back becomes PersistenceFailureError naming the steps
      that already committed (no automatic rollback across collections)
    - The active partition pointer is written LAST, after projects

Design Decisions:
    - Class with injected Repository + IdGenerator over module functions: routes build one
      per request around the request's DB session (ADR: dependency injection at the shell)
    - Every mutator holds one write lock (shared per event loop) from load to the last
      write: bulk replace would otherwise let an overlapping call erase a confirmed write
    - The lock is process-local; deploy with a single worker per database
"""

import asyncio
import functools
import logging
import weakref
from contextlib import contextmanager

from studbook.core import deletion_resolver, project_catalog, transfer_engine
from studbook.core.deletion_resolver import DeletionMode, DeletionPlan, DeletionResult, Purge
from studbook.core.domain_types import Collection, Operation, ProjectId
from studbook.core.errors import (
    DatabaseError, IntegrityFaultError, PersistenceFailureError, ErrorContext,
)
from studbook.core.records import PartitionSnapshot, Project
from studbook.core.repository_protocols import Repository, IdGenerator
from studbook.core.transfer_engine import TransferResult
from studbook.core.write_ordering import (
    plan_writes, TRANSFER_WRITE_ORDER, PURGE_WRITE_ORDER,
)
from studbook.infrastructure.id_generation import UuidIdGenerator

logger = logging.getLogger(__name__)

ACTIVE_PARTITION_STEP = "active_partition"

_write_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock]" = (
    weakref.WeakKeyDictionary()
)


def _write_lock() -> asyncio.Lock:
    """The write lock shared by every PartitionService on the running loop."""
    loop = asyncio.get_running_loop()
    lock = _write_locks.get(loop)
    if lock is None:
        lock = _write_locks[loop] = asyncio.Lock()
    return lock


def _serialized(method):
    """Hold the write lock across load, compute and every write of a mutator."""
    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        async with _write_lock():
            return await method(self, *args, **kwargs)
    return wrapper


class PartitionService:
    """Runs engine operations against a Repository."""

    def __init__(
        self, repository: Repository, id_generator: IdGenerator | None = None,
    ):
        self._repo = repository
        self._ids = id_generator or UuidIdGenerator()

    async def load_snapshot(self) -> PartitionSnapshot:
        return PartitionSnapshot.of(
            await self._repo.load_projects(),
            await self._repo.load_species(),
            await self._repo.load_individuals(),
        )

    # ─── Transfers ───────────────────────────────────────────────

    @_serialized
    async def group_transfer(
        self, source_project_id: str, target_project_id: str, species_ids: set[str],
    ) -> TransferResult:
        snapshot = await self.load_snapshot()
        with _log_integrity_fault(Operation.GROUP_TRANSFER, source_project_id):
            result = transfer_engine.group_transfer(
                snapshot, ProjectId(source_project_id),
                ProjectId(target_project_id), set(species_ids),
            )
        await self._persist(
            Operation.GROUP_TRANSFER, snapshot, result.snapshot, TRANSFER_WRITE_ORDER,
            affected_ids=sorted(species_ids),
        )
        logger.info(
            f"Group transfer {source_project_id} -> {target_project_id}: "
            f"{result.species_moved} species, {result.individuals_moved} individuals",
            extra={
                "operation": Operation.GROUP_TRANSFER.value,
                "project_id": source_project_id,
                "target_project_id": target_project_id,
            },
        )
        return result

    @_serialized
    async def selective_transfer(
        self, source_project_id: str, target_project_id: str, individual_ids: set[str],
    ) -> TransferResult:
        snapshot = await self.load_snapshot()
        with _log_integrity_fault(Operation.SELECTIVE_TRANSFER, source_project_id):
            result = transfer_engine.selective_transfer(
                snapshot, ProjectId(source_project_id),
                ProjectId(target_project_id), set(individual_ids), self._ids,
            )
        await self._persist(
            Operation.SELECTIVE_TRANSFER, snapshot, result.snapshot, TRANSFER_WRITE_ORDER,
            affected_ids=sorted(individual_ids),
        )
        logger.info(
            f"Selective transfer {source_project_id} -> {target_project_id}: "
            f"{result.individuals_moved} individuals, "
            f"{len(result.created_species_ids)} species cloned, "
            f"{len(result.reused_species_ids)} reused",
            extra={
                "operation": Operation.SELECTIVE_TRANSFER.value,
                "project_id": source_project_id,
                "target_project_id": target_project_id,
            },
        )
        return result

    # ─── Deletion ────────────────────────────────────────────────

    async def plan_deletion(self, project_id: str) -> DeletionPlan:
        snapshot = await self.load_snapshot()
        active = await self._repo.get_active_partition()
        return deletion_resolver.plan(snapshot, ProjectId(project_id), active)

    @_serialized
    async def delete_project(
        self, project_id: str, mode: DeletionMode,
    ) -> DeletionResult:
        snapshot = await self.load_snapshot()
        active = await self._repo.get_active_partition()
        with _log_integrity_fault(Operation.DELETE_PROJECT, project_id):
            result = deletion_resolver.execute(
                snapshot, ProjectId(project_id), mode, active,
            )

        order = PURGE_WRITE_ORDER if isinstance(mode, Purge) else TRANSFER_WRITE_ORDER
        committed = await self._persist(
            Operation.DELETE_PROJECT, snapshot, result.snapshot, order,
            affected_ids=[project_id],
        )
        if result.new_active_partition_id != active:
            await self._write_step(
                Operation.DELETE_PROJECT, ACTIVE_PARTITION_STEP, committed,
                self._repo.set_active_partition(result.new_active_partition_id),
                affected_ids=[project_id],
            )
        logger.info(
            f"Deleted project {project_id} ({result.mode.value}): "
            f"{result.species_affected} species, "
            f"{result.individuals_affected} individuals affected",
            extra={"operation": Operation.DELETE_PROJECT.value, "project_id": project_id},
        )
        return result

    # ─── Project catalog ─────────────────────────────────────────

    async def list_projects(self) -> list[Project]:
        return await self._repo.load_projects()

    @_serialized
    async def create_project(self, name: str, description: str = "") -> Project:
        snapshot = await self.load_snapshot()
        updated, project = project_catalog.create_project(
            snapshot, name, description, self._ids,
        )
        committed = await self._persist(
            Operation.CREATE_PROJECT, snapshot, updated, TRANSFER_WRITE_ORDER,
            affected_ids=[project.id],
        )
        active = await self._repo.get_active_partition()
        resolved = project_catalog.resolve_active_partition(updated, active)
        if resolved != active:
            await self._write_step(
                Operation.CREATE_PROJECT, ACTIVE_PARTITION_STEP, committed,
                self._repo.set_active_partition(resolved),
                affected_ids=[project.id],
            )
        return project

    @_serialized
    async def update_project(
        self, project_id: str, name: str | None = None, description: str | None = None,
    ) -> Project:
        snapshot = await self.load_snapshot()
        updated, project = project_catalog.update_project(
            snapshot, project_id, name, description,
        )
        await self._persist(
            Operation.UPDATE_PROJECT, snapshot, updated, TRANSFER_WRITE_ORDER,
            affected_ids=[project_id],
        )
        return project

    async def get_active_partition(self) -> str | None:
        """Stored pointer, falling back to the first project when it dangles."""
        snapshot = PartitionSnapshot.of(await self._repo.load_projects())
        return project_catalog.resolve_active_partition(
            snapshot, await self._repo.get_active_partition(),
        )

    @_serialized
    async def set_active_partition(self, project_id: str) -> str:
        snapshot = PartitionSnapshot.of(await self._repo.load_projects())
        selected = project_catalog.select_active_partition(snapshot, project_id)
        await self._write_step(
            Operation.SET_ACTIVE_PARTITION, ACTIVE_PARTITION_STEP, [],
            self._repo.set_active_partition(selected),
            affected_ids=[project_id],
        )
        return selected

    # ─── Write-back ──────────────────────────────────────────────

    async def _persist(
        self,
        operation: Operation,
        before: PartitionSnapshot,
        after: PartitionSnapshot,
        order: tuple[Collection, ...],
        affected_ids: list[str],
    ) -> list[str]:
        """Write changed collections in order. Returns the committed step names."""
        committed: list[str] = []
        savers = {
            Collection.PROJECTS: lambda: self._repo.save_projects(list(after.projects)),
            Collection.SPECIES: lambda: self._repo.save_species(list(after.species)),
            Collection.INDIVIDUALS: lambda: self._repo.save_individuals(
                list(after.individuals),
            ),
        }
        for collection in plan_writes(before, after, order):
            await self._write_step(
                operation, collection.value, committed, savers[collection](),
                affected_ids=affected_ids,
            )
        return committed

    async def _write_step(
        self, operation: Operation, step: str, committed: list[str], write,
        affected_ids: list[str],
    ) -> None:
        try:
            await write
        except DatabaseError as e:
            logger.error(
                f"{operation.value} failed writing {step}: {e.message}",
                extra={
                    "operation": operation.value,
                    "error_code": "PERSISTENCE_FAILURE",
                    "committed_steps": list(committed),
                    "failed_step": step,
                    "affected_ids": affected_ids,
                },
            )
            raise PersistenceFailureError(
                operation.value, list(committed), step,
                ErrorContext(operation=operation.value, affected_ids=affected_ids),
            ) from e
        committed.append(step)


@contextmanager
def _log_integrity_fault(operation: Operation, project_id: str):
    """Log IntegrityFaultError with full detail, then re-raise."""
    try:
        yield
    except IntegrityFaultError as exc:
        logger.error(
            f"Integrity fault in {operation.value}: {exc.message}",
            extra={
                "operation": operation.value,
                "project_id": project_id,
                "error_code": exc.code,
                "affected_ids": exc.context.affected_ids,
            },
        )
        raise

