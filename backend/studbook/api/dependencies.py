"""Route Dependencies — builds a PartitionService around the request's DB session."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studbook.infrastructure.database import get_db
from studbook.infrastructure.sql_repository import SqlAlchemyRepository
from studbook.services.partition_service import PartitionService


async def get_partition_service(
    db: AsyncSession = Depends(get_db),
) -> PartitionService:
    return PartitionService(SqlAlchemyRepository(db))
