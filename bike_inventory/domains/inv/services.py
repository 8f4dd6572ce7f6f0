# bike_inventory/domains/inv/services.py

"""
Business logic of the 'inv' domain.

Items reference their type, brand, vendor, capacity type and stocking
warehouse; a transfer must come from the warehouse stocking the item and
cannot move more units than are in stock.
"""

from typing import Any

from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core.exceptions import BadRequestError
from bike_inventory.core.service_base import ResourceService
from bike_inventory.domains.org import crud as org_crud
from . import crud as inv_crud
from . import schemas as inv_schemas


class BrandService(ResourceService[inv_schemas.BrandRead, inv_schemas.BrandCreate, inv_schemas.BrandUpdate]):
    unique_fields = ("name",)


brand_service = BrandService(
    inv_crud.brand,
    read_schema=inv_schemas.BrandRead,
    create_schema=inv_schemas.BrandCreate,
    update_schema=inv_schemas.BrandUpdate,
    label="Brand",
    plural="brands",
)


class VendorService(ResourceService[inv_schemas.VendorRead, inv_schemas.VendorCreate, inv_schemas.VendorUpdate]):
    references = {"banking_id": org_crud.banking_detail}


vendor_service = VendorService(
    inv_crud.vendor,
    read_schema=inv_schemas.VendorRead,
    create_schema=inv_schemas.VendorCreate,
    update_schema=inv_schemas.VendorUpdate,
    label="Vendor",
    plural="vendors",
)


class WarehouseService(ResourceService[inv_schemas.WarehouseRead, inv_schemas.WarehouseCreate, inv_schemas.WarehouseUpdate]):
    references = {"organization_id": org_crud.organization}


warehouse_service = WarehouseService(
    inv_crud.warehouse,
    read_schema=inv_schemas.WarehouseRead,
    create_schema=inv_schemas.WarehouseCreate,
    update_schema=inv_schemas.WarehouseUpdate,
    label="Warehouse",
    plural="warehouses",
)


class ItemTypeService(ResourceService[inv_schemas.ItemTypeRead, inv_schemas.ItemTypeCreate, inv_schemas.ItemTypeUpdate]):
    unique_fields = ("name",)


item_type_service = ItemTypeService(
    inv_crud.item_type,
    read_schema=inv_schemas.ItemTypeRead,
    create_schema=inv_schemas.ItemTypeCreate,
    update_schema=inv_schemas.ItemTypeUpdate,
    label="Item type",
    plural="item_types",
)


class CapacityTypeService(
    ResourceService[inv_schemas.CapacityTypeRead, inv_schemas.CapacityTypeCreate, inv_schemas.CapacityTypeUpdate]
):
    unique_fields = ("name",)


capacity_type_service = CapacityTypeService(
    inv_crud.capacity_type,
    read_schema=inv_schemas.CapacityTypeRead,
    create_schema=inv_schemas.CapacityTypeCreate,
    update_schema=inv_schemas.CapacityTypeUpdate,
    label="Capacity type",
    plural="capacity_types",
)


class ItemService(ResourceService[inv_schemas.ItemRead, inv_schemas.ItemCreate, inv_schemas.ItemUpdate]):
    references = {
        "item_type_id": inv_crud.item_type,
        "brand_id": inv_crud.brand,
        "vendor_id": inv_crud.vendor,
        "capacity_type_id": inv_crud.capacity_type,
        "warehouse_id": inv_crud.warehouse,
    }
    unique_fields = ("sku",)

    async def validate(self, db: AsyncSession, obj_in: BaseModel, current: Any = None) -> None:
        await super().validate(db, obj_in, current)
        fields_set = obj_in.model_fields_set
        capacity = obj_in.capacity if "capacity" in fields_set or current is None else current.capacity
        capacity_type_id = (
            obj_in.capacity_type_id if "capacity_type_id" in fields_set or current is None else current.capacity_type_id
        )
        # a capacity is meaningless without its unit
        if capacity is not None and capacity_type_id is None:
            raise BadRequestError("capacity requires capacity_type_id")


item_service = ItemService(
    inv_crud.item,
    read_schema=inv_schemas.ItemRead,
    create_schema=inv_schemas.ItemCreate,
    update_schema=inv_schemas.ItemUpdate,
    label="Item",
    plural="items",
)


class SpecificationService(
    ResourceService[inv_schemas.SpecificationRead, inv_schemas.SpecificationCreate, inv_schemas.SpecificationUpdate]
):
    references = {"item_id": inv_crud.item}
    unique_together = (("item_id", "name"),)


specification_service = SpecificationService(
    inv_crud.specification,
    read_schema=inv_schemas.SpecificationRead,
    create_schema=inv_schemas.SpecificationCreate,
    update_schema=inv_schemas.SpecificationUpdate,
    label="Specification",
    plural="specifications",
)


class ItemTransferService(
    ResourceService[inv_schemas.ItemTransferRead, inv_schemas.ItemTransferCreate, inv_schemas.ItemTransferUpdate]
):
    references = {
        "item_id": inv_crud.item,
        "from_warehouse_id": inv_crud.warehouse,
        "to_warehouse_id": inv_crud.warehouse,
    }

    async def validate(self, db: AsyncSession, obj_in: BaseModel, current: Any = None) -> None:
        await super().validate(db, obj_in, current)
        if current is not None:
            return
        db_item = await inv_crud.item.get(db, obj_in.item_id)
        if db_item.warehouse_id != obj_in.from_warehouse_id:
            raise BadRequestError("Item is not stocked at from_warehouse_id")
        if obj_in.quantity > db_item.quantity:
            raise BadRequestError("Transfer quantity exceeds the item's stock")


item_transfer_service = ItemTransferService(
    inv_crud.item_transfer,
    read_schema=inv_schemas.ItemTransferRead,
    create_schema=inv_schemas.ItemTransferCreate,
    update_schema=inv_schemas.ItemTransferUpdate,
    label="Item transfer",
    plural="item_transfers",
)
