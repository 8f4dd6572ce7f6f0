# bike_inventory/core/crud_base.py

"""
Base classes for the common CRUD (Create, Read, Update, Delete) operations.

- Every default read filters out soft-deleted rows (``deleted_at IS NULL``)
  when the model carries a ``deleted_at`` column.
- Every mutation commits and refreshes; a failed commit is rolled back and
  the error re-raised.
- ``CRUDWithObjectBase`` handles models that own an object-storage
  reference: the prior object is removed only after the commit succeeded.
"""

import logging
from typing import Generic, List, Optional, Type, TypeVar, Any, Dict
from datetime import date, datetime, timedelta, UTC

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from pydantic import BaseModel

from bike_inventory.core.storage import ObjectStorage, UploadedObject

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Defines the base class for every CRUD operation.
    """
    def __init__(self, model: Type[ModelType]):
        self.model = model

    @property
    def soft_deletable(self) -> bool:
        return hasattr(self.model, "deleted_at")

    def _active(self, query, include_deleted: bool = False):
        if self.soft_deletable and not include_deleted:
            query = query.where(self.model.deleted_at.is_(None))
        return query

    async def _commit(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        db.add(db_obj)
        try:
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        # onupdate/server defaults are expired by the commit
        await db.refresh(db_obj)
        return db_obj

    # =========================================================================
    # Reads
    # =========================================================================
    async def get(self, db: AsyncSession, id: Any, *, include_deleted: bool = False) -> Optional[ModelType]:
        """
        Fetches a single record by id; soft-deleted rows are hidden unless asked for.
        """
        db_obj = await db.get(self.model, id)
        if db_obj is None:
            return None
        if self.soft_deletable and not include_deleted and db_obj.deleted_at is not None:
            return None
        return db_obj

    async def get_multi(
        self, db: AsyncSession, *, skip: int = 0, limit: int = 100, **kwargs: Any
    ) -> List[ModelType]:
        """
        Fetches several records. Keyword arguments are applied as equality filters.
        """
        query = self._active(select(self.model))

        for field, value in kwargs.items():
            if hasattr(self.model, field):
                query = query.where(getattr(self.model, field) == value)

        query = query.order_by(self.model.id).offset(skip).limit(limit)
        result = await db.execute(query)
        return result.scalars().all()

    async def get_by_attribute(
        self, db: AsyncSession, *, attribute: str, value: Any, include_deleted: bool = False
    ) -> Optional[ModelType]:
        statement = self._active(select(self.model), include_deleted).where(getattr(self.model, attribute) == value)
        response = await db.execute(statement)
        return response.scalars().first()

    async def get_filtered(
        self,
        db: AsyncSession,
        *,
        filters: Optional[Dict[str, Any]] = None,  # equality filters: {"attribute_name": "value"}
        date_range_field: Optional[str] = None,    # date column used for range search
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        order_by_field: Optional[str] = None,
        order_desc: bool = True,
        skip: int = 0,
        limit: int = 100
    ) -> List[ModelType]:
        """
        Multi-attribute and date-range search over active rows.
        """
        query = self._active(select(self.model))
        conditions = []

        # 1. attribute filters
        if filters:
            for attribute, value in filters.items():
                if hasattr(self.model, attribute):
                    conditions.append(getattr(self.model, attribute) == value)
                else:
                    logger.warning("Model %s has no attribute '%s'", self.model.__name__, attribute)

        # 2. date range
        if date_range_field and hasattr(self.model, date_range_field):
            date_field = getattr(self.model, date_range_field)
            if start_date is not None:
                conditions.append(date_field >= start_date)
            if end_date is not None:
                # include the whole end day
                conditions.append(date_field < end_date + timedelta(days=1))
        elif date_range_field:
            logger.warning("Model %s has no attribute '%s' for date range filtering", self.model.__name__, date_range_field)

        if conditions:
            query = query.where(*conditions)

        # 3. ordering
        if order_by_field and hasattr(self.model, order_by_field):
            column = getattr(self.model, order_by_field)
            query = query.order_by(column.desc() if order_desc else column)
        elif order_by_field:
            logger.warning("Model %s has no attribute '%s' for ordering", self.model.__name__, order_by_field)
        else:
            query = query.order_by(self.model.id.desc())

        # 4. paging
        query = query.offset(skip).limit(limit)

        result = await db.execute(query)
        return result.scalars().all()

    # =========================================================================
    # Writes
    # =========================================================================
    async def create(self, db: AsyncSession, *, obj_in: CreateSchemaType, **extra: Any) -> ModelType:
        """
        Creates a record. ``extra`` holds server-side values (hashes, object references).
        """
        db_obj = self.model.model_validate({**obj_in.model_dump(), **extra})
        return await self._commit(db, db_obj)

    async def update(
        self, db: AsyncSession, *, db_obj: ModelType, obj_in: UpdateSchemaType, **extra: Any
    ) -> ModelType:
        """
        Partial update: only the fields present in the request are written.
        """
        update_data = obj_in.model_dump(exclude_unset=True)
        update_data.update(extra)
        for key, value in update_data.items():
            setattr(db_obj, key, value)
        return await self._commit(db, db_obj)

    async def soft_delete(self, db: AsyncSession, *, db_obj: ModelType, **extra: Any) -> ModelType:
        """
        Marks the record deleted; the row is kept.
        """
        db_obj.deleted_at = datetime.now(UTC)
        for key, value in extra.items():
            setattr(db_obj, key, value)
        return await self._commit(db, db_obj)

    async def restore(self, db: AsyncSession, *, db_obj: ModelType) -> ModelType:
        db_obj.deleted_at = None
        return await self._commit(db, db_obj)


class CRUDWithObjectBase(CRUDBase[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    CRUD for models owning one object-storage reference (logo, picture, ...).

    The new object is uploaded before these methods run; the caller removes it
    if anything here raises. The object a row no longer references is deleted
    only after the commit, through ``ObjectStorage.discard``.
    """
    def __init__(self, model: Type[ModelType], *, object_field: str):
        super().__init__(model)
        self.object_field = object_field

    async def create_with_object(
        self,
        db: AsyncSession,
        *,
        obj_in: CreateSchemaType,
        upload: Optional[UploadedObject] = None,
        **extra: Any,
    ) -> ModelType:
        if upload is not None:
            extra[self.object_field] = upload.location
        return await self.create(db, obj_in=obj_in, **extra)

    async def update_with_object(
        self,
        db: AsyncSession,
        storage: ObjectStorage,
        *,
        db_obj: ModelType,
        obj_in: UpdateSchemaType,
        upload: Optional[UploadedObject] = None,
        **extra: Any,
    ) -> ModelType:
        # 1. remember the current reference before it is overwritten
        previous = getattr(db_obj, self.object_field)
        if upload is not None:
            extra[self.object_field] = upload.location

        # 2. row change + commit (rolled back on failure)
        db_obj = await self.update(db, db_obj=db_obj, obj_in=obj_in, **extra)

        # 3. the replaced object goes only once the new reference is durable
        if upload is not None and previous and previous != upload.location:
            await storage.discard(previous)
        return db_obj

    async def soft_delete_with_object(
        self, db: AsyncSession, storage: ObjectStorage, *, db_obj: ModelType, **extra: Any
    ) -> ModelType:
        previous = getattr(db_obj, self.object_field)
        extra[self.object_field] = None
        db_obj = await self.soft_delete(db, db_obj=db_obj, **extra)
        if previous:
            await storage.discard(previous)
        return db_obj
