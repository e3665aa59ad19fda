import logging
from typing import Any, Dict, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bistro.core.database import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)

# Drivers raise OSError subclasses (e.g. ConnectionRefusedError) when the server is unreachable
DATABASE_ERRORS = (SQLAlchemyError, OSError)

class PersistenceError(Exception):
    pass

class BaseRepository(Generic[ModelType]):
    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def _rollback(self):
        try:
            await self.session.rollback()
        except DATABASE_ERRORS as e:
            # The original failure is what gets reported
            logger.warning(f"Rollback failed: {e}")

    async def get_by_id(self, id: UUID) -> Optional[ModelType]:
        try:
            return await self.session.get(self.model, id)
        except DATABASE_ERRORS as e:
            raise PersistenceError(f"Failed to load {self.model.__name__} {id}: {e}") from e

    async def create(self, data: Dict[str, Any]) -> ModelType:
        instance = self.model(**data)
        self.session.add(instance)
        try:
            await self.session.commit()
            await self.session.refresh(instance)
        except DATABASE_ERRORS as e:
            await self._rollback()
            raise PersistenceError(f"Failed to create {self.model.__name__}: {e}") from e
        return instance

    async def delete(self, id: UUID) -> bool:
        instance = await self.get_by_id(id)
        if instance is None:
            return False
        try:
            await self.session.delete(instance)
            await self.session.commit()
        except DATABASE_ERRORS as e:
            await self._rollback()
            raise PersistenceError(f"Failed to delete {self.model.__name__} {id}: {e}") from e
        return True
