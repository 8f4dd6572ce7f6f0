# bike_inventory/core/service_base.py

"""
Generic resource service.

Sits between the routers and the CRUD layer and does, for every resource:

- id validation (``Invalid <resource> ID``) and 404 handling,
- input parsing with the resource's pydantic schemas (first error -> 400),
- reference checks (``Invalid <field>``) and uniqueness among active rows
  (single fields and field groups),
- presigned-URL enrichment of read payloads (never persisted),
- wrapping results in the ``ApiResponse`` envelope.

Mutations that accompany an upload run inside ``ObjectStorage.compensating``
so the new object is removed if validation or the database write fails.
"""

import asyncio
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from fastapi import status
from pydantic import BaseModel, ValidationError
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core.crud_base import CRUDBase, CRUDWithObjectBase
from bike_inventory.core.exceptions import BadRequestError, NotFoundError
from bike_inventory.core.schemas import ApiResponse, MessagePayload
from bike_inventory.core.storage import ObjectStorage, UploadedObject

ReadSchemaType = TypeVar("ReadSchemaType", bound=BaseModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


def first_error_message(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


class ResourceService(Generic[ReadSchemaType, CreateSchemaType, UpdateSchemaType]):
    # field -> CRUD of the referenced resource; the referenced row must be active
    references: Dict[str, CRUDBase] = {}
    # fields unique among active rows
    unique_fields: Tuple[str, ...] = ()
    # field groups unique together among active rows
    unique_together: Tuple[Tuple[str, ...], ...] = ()

    def __init__(
        self,
        crud: CRUDBase,
        *,
        read_schema: Type[ReadSchemaType],
        create_schema: Type[CreateSchemaType],
        update_schema: Type[UpdateSchemaType],
        label: str,
        plural: str,
    ):
        self.crud = crud
        self.read_schema = read_schema
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.label = label
        self.plural = plural

    @property
    def object_field(self) -> Optional[str]:
        return self.crud.object_field if isinstance(self.crud, CRUDWithObjectBase) else None

    @property
    def plural_label(self) -> str:
        return self.plural.replace("_", " ").capitalize()

    # =========================================================================
    # Helpers
    # =========================================================================
    def check_id(self, id: int) -> int:
        if id <= 0:
            raise BadRequestError(f"Invalid {self.label.lower()} ID")
        return id

    def parse(self, schema: Type[BaseModel], data: Dict[str, Any]) -> BaseModel:
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            raise BadRequestError(first_error_message(e))

    async def get_or_404(self, db: AsyncSession, id: int):
        db_obj = await self.crud.get(db, self.check_id(id))
        if db_obj is None:
            raise NotFoundError(f"{self.label} not found")
        return db_obj

    async def ensure_references(self, db: AsyncSession, obj_in: BaseModel) -> None:
        fields_set = obj_in.model_fields_set
        for field, crud in self.references.items():
            value = getattr(obj_in, field, None)
            if field not in fields_set or value is None:
                continue
            if await crud.get(db, value) is None:
                raise BadRequestError(f"Invalid {field}")

    async def ensure_unique(self, db: AsyncSession, obj_in: BaseModel, current: Any = None) -> None:
        for field in self.unique_fields:
            value = getattr(obj_in, field, None)
            if value is None:
                continue
            existing = await self.crud.get_by_attribute(db, attribute=field, value=value)
            if existing is not None and (current is None or existing.id != current.id):
                raise BadRequestError(f"{self.label} with this {field} already exists")

    async def ensure_unique_together(self, db: AsyncSession, obj_in: BaseModel, current: Any = None) -> None:
        fields_set = obj_in.model_fields_set
        for fields in self.unique_together:
            # partial updates: fields not sent keep their stored value
            values = {
                field: getattr(obj_in, field, None) if current is None or field in fields_set else getattr(current, field)
                for field in fields
            }
            if any(value is None for value in values.values()):
                continue
            matches = await self.crud.get_filtered(db, filters=values, limit=1)
            if matches and (current is None or matches[0].id != current.id):
                raise BadRequestError(f"{self.label} with this {' and '.join(fields)} already exists")

    async def validate(self, db: AsyncSession, obj_in: BaseModel, current: Any = None) -> None:
        """Hook for resource-specific rules; runs after parsing, before the write."""
        await self.ensure_references(db, obj_in)
        await self.ensure_unique(db, obj_in, current)
        await self.ensure_unique_together(db, obj_in, current)

    async def prepare_create(self, db: AsyncSession, obj_in: BaseModel) -> Dict[str, Any]:
        """Server-side column values added on create."""
        return {}

    async def prepare_update(self, db: AsyncSession, db_obj: Any, obj_in: BaseModel) -> Dict[str, Any]:
        """Server-side column values added on update."""
        return {}

    async def to_read(
        self, storage: ObjectStorage, db_obj: Any, presigned_url: Optional[str] = None
    ) -> ReadSchemaType:
        read = self.read_schema.model_validate(db_obj)
        field = self.object_field
        if field is None:
            return read
        if presigned_url is None:
            presigned_url = await storage.presign_location(getattr(db_obj, field))
        return read.model_copy(update={f"{field}_presigned_url": presigned_url})

    # =========================================================================
    # Operations
    # =========================================================================
    async def list(self, db: AsyncSession, storage: ObjectStorage, *, skip: int = 0, limit: int = 100) -> ApiResponse:
        db_objs = await self.crud.get_multi(db, skip=skip, limit=limit)
        # one presign per referenced object, in parallel
        records: List[ReadSchemaType] = await asyncio.gather(*(self.to_read(storage, obj) for obj in db_objs))
        return ApiResponse.ok(
            f"{self.plural_label} retrieved successfully",
            {self.plural: list(records)},
        )

    async def get(self, db: AsyncSession, storage: ObjectStorage, id: int) -> ApiResponse:
        db_obj = await self.get_or_404(db, id)
        return ApiResponse.ok(f"{self.label} retrieved successfully", await self.to_read(storage, db_obj))

    async def create(
        self,
        db: AsyncSession,
        storage: ObjectStorage,
        data: Dict[str, Any],
        upload: Optional[UploadedObject] = None,
    ) -> ApiResponse:
        async with storage.compensating(upload):
            obj_in = self.parse(self.create_schema, data)
            await self.validate(db, obj_in)
            extra = await self.prepare_create(db, obj_in)
            if isinstance(self.crud, CRUDWithObjectBase):
                db_obj = await self.crud.create_with_object(db, obj_in=obj_in, upload=upload, **extra)
            else:
                db_obj = await self.crud.create(db, obj_in=obj_in, **extra)

        presigned_url = upload.presigned_url if upload is not None else None
        return ApiResponse.ok(
            f"{self.label} created successfully",
            await self.to_read(storage, db_obj, presigned_url),
            code=status.HTTP_201_CREATED,
        )

    async def update(
        self,
        db: AsyncSession,
        storage: ObjectStorage,
        id: int,
        data: Dict[str, Any],
        upload: Optional[UploadedObject] = None,
    ) -> ApiResponse:
        async with storage.compensating(upload):
            db_obj = await self.get_or_404(db, id)
            obj_in = self.parse(self.update_schema, data)
            await self.validate(db, obj_in, current=db_obj)
            extra = await self.prepare_update(db, db_obj, obj_in)
            if isinstance(self.crud, CRUDWithObjectBase):
                db_obj = await self.crud.update_with_object(
                    db, storage, db_obj=db_obj, obj_in=obj_in, upload=upload, **extra
                )
            else:
                db_obj = await self.crud.update(db, db_obj=db_obj, obj_in=obj_in, **extra)

        presigned_url = upload.presigned_url if upload is not None else None
        return ApiResponse.ok(
            f"{self.label} updated successfully",
            await self.to_read(storage, db_obj, presigned_url),
        )

    async def delete(self, db: AsyncSession, storage: ObjectStorage, id: int) -> ApiResponse:
        db_obj = await self.get_or_404(db, id)
        if isinstance(self.crud, CRUDWithObjectBase):
            await self.crud.soft_delete_with_object(db, storage, db_obj=db_obj)
        else:
            await self.crud.soft_delete(db, db_obj=db_obj)
        message = f"{self.label} soft deleted successfully"
        return ApiResponse.ok(message, MessagePayload(message=message))
