# bike_inventory/domains/inv/routers.py

"""
API endpoints of the 'inv' domain (brands, vendors, warehouses, items and
their types, specifications and transfers).
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core import dependencies as deps
from bike_inventory.core.schemas import ApiResponse, MessagePayload
from bike_inventory.core.storage import ObjectStorage, UploadedObject
from bike_inventory.core.uploads import ImageUpload
from bike_inventory.domains.usr import models as usr_models

from . import schemas as inv_schemas
from .services import (
    brand_service,
    capacity_type_service,
    item_service,
    item_transfer_service,
    item_type_service,
    specification_service,
    vendor_service,
    warehouse_service,
)


router = APIRouter(
    tags=["Inventory (brands, vendors, warehouses, items)"],
    responses={404: {"description": "Not found"}},
)

brand_logo_upload = ImageUpload(field="logo", collection="brands", prefix="brand", name_field="name")


# =============================================================================
# 1. Brand endpoints
# =============================================================================
@router.get("/brand", response_model=ApiResponse[Dict[str, List[inv_schemas.BrandRead]]], summary="List brands")
async def read_brands(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await brand_service.list(db, storage, skip=skip, limit=limit)


@router.get("/brand/{brand_id}", response_model=ApiResponse[inv_schemas.BrandRead], summary="Get a brand")
async def read_brand(
    brand_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await brand_service.get(db, storage, brand_id)


@router.post("/brand", response_model=ApiResponse[inv_schemas.BrandRead], status_code=status.HTTP_201_CREATED, summary="Create a brand")
async def create_brand(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
    upload: Optional[UploadedObject] = Depends(brand_logo_upload),
):
    """
    Multipart form with the brand fields and an optional single `logo` image.
    """
    return await brand_service.create(db, storage, data, upload)


@router.put("/brand/{brand_id}", response_model=ApiResponse[inv_schemas.BrandRead], summary="Update a brand")
async def update_brand(
    brand_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
    upload: Optional[UploadedObject] = Depends(brand_logo_upload),
):
    """
    A new `logo` replaces the stored one; the old object is deleted once the update is committed.
    """
    return await brand_service.update(db, storage, brand_id, data, upload)


@router.delete("/brand/{brand_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a brand")
async def delete_brand(
    brand_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await brand_service.delete(db, storage, brand_id)


# =============================================================================
# 2. Vendor endpoints
# =============================================================================
@router.get("/vendor", response_model=ApiResponse[Dict[str, List[inv_schemas.VendorRead]]], summary="List vendors")
async def read_vendors(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await vendor_service.list(db, storage, skip=skip, limit=limit)


@router.get("/vendor/{vendor_id}", response_model=ApiResponse[inv_schemas.VendorRead], summary="Get a vendor")
async def read_vendor(
    vendor_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await vendor_service.get(db, storage, vendor_id)


@router.post("/vendor", response_model=ApiResponse[inv_schemas.VendorRead], status_code=status.HTTP_201_CREATED, summary="Create a vendor")
async def create_vendor(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await vendor_service.create(db, storage, data)


@router.put("/vendor/{vendor_id}", response_model=ApiResponse[inv_schemas.VendorRead], summary="Update a vendor")
async def update_vendor(
    vendor_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await vendor_service.update(db, storage, vendor_id, data)


@router.delete("/vendor/{vendor_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a vendor")
async def delete_vendor(
    vendor_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await vendor_service.delete(db, storage, vendor_id)


# =============================================================================
# 3. Warehouse endpoints
# =============================================================================
@router.get("/warehouses", response_model=ApiResponse[Dict[str, List[inv_schemas.WarehouseRead]]], summary="List warehouses")
async def read_warehouses(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await warehouse_service.list(db, storage, skip=skip, limit=limit)


@router.get("/warehouses/{warehouse_id}", response_model=ApiResponse[inv_schemas.WarehouseRead], summary="Get a warehouse")
async def read_warehouse(
    warehouse_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await warehouse_service.get(db, storage, warehouse_id)


@router.post("/warehouses", response_model=ApiResponse[inv_schemas.WarehouseRead], status_code=status.HTTP_201_CREATED, summary="Create a warehouse")
async def create_warehouse(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await warehouse_service.create(db, storage, data)


@router.put("/warehouses/{warehouse_id}", response_model=ApiResponse[inv_schemas.WarehouseRead], summary="Update a warehouse")
async def update_warehouse(
    warehouse_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await warehouse_service.update(db, storage, warehouse_id, data)


@router.delete("/warehouses/{warehouse_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a warehouse")
async def delete_warehouse(
    warehouse_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await warehouse_service.delete(db, storage, warehouse_id)


# =============================================================================
# 4. Item type endpoints
# =============================================================================
@router.get("/item-types", response_model=ApiResponse[Dict[str, List[inv_schemas.ItemTypeRead]]], summary="List item types")
async def read_item_types(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await item_type_service.list(db, storage, skip=skip, limit=limit)


@router.get("/item-types/{item_type_id}", response_model=ApiResponse[inv_schemas.ItemTypeRead], summary="Get an item type")
async def read_item_type(
    item_type_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await item_type_service.get(db, storage, item_type_id)


@router.post("/item-types", response_model=ApiResponse[inv_schemas.ItemTypeRead], status_code=status.HTTP_201_CREATED, summary="Create an item type")
async def create_item_type(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await item_type_service.create(db, storage, data)


@router.put("/item-types/{item_type_id}", response_model=ApiResponse[inv_schemas.ItemTypeRead], summary="Update an item type")
async def update_item_type(
    item_type_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await item_type_service.update(db, storage, item_type_id, data)


@router.delete("/item-types/{item_type_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete an item type")
async def delete_item_type(
    item_type_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await item_type_service.delete(db, storage, item_type_id)


# =============================================================================
# 5. Capacity type endpoints
# =============================================================================
@router.get("/capacity-types", response_model=ApiResponse[Dict[str, List[inv_schemas.CapacityTypeRead]]], summary="List capacity types")
async def read_capacity_types(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await capacity_type_service.list(db, storage, skip=skip, limit=limit)


@router.get("/capacity-types/{capacity_type_id}", response_model=ApiResponse[inv_schemas.CapacityTypeRead], summary="Get a capacity type")
async def read_capacity_type(
    capacity_type_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await capacity_type_service.get(db, storage, capacity_type_id)


@router.post("/capacity-types", response_model=ApiResponse[inv_schemas.CapacityTypeRead], status_code=status.HTTP_201_CREATED, summary="Create a capacity type")
async def create_capacity_type(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await capacity_type_service.create(db, storage, data)


@router.put("/capacity-types/{capacity_type_id}", response_model=ApiResponse[inv_schemas.CapacityTypeRead], summary="Update a capacity type")
async def update_capacity_type(
    capacity_type_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await capacity_type_service.update(db, storage, capacity_type_id, data)


@router.delete("/capacity-types/{capacity_type_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a capacity type")
async def delete_capacity_type(
    capacity_type_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await capacity_type_service.delete(db, storage, capacity_type_id)


# =============================================================================
# 6. Item endpoints
# =============================================================================
@router.get("/items", response_model=ApiResponse[Dict[str, List[inv_schemas.ItemRead]]], summary="List items")
async def read_items(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await item_service.list(db, storage, skip=skip, limit=limit)


@router.get("/items/{item_id}", response_model=ApiResponse[inv_schemas.ItemRead], summary="Get an item")
async def read_item(
    item_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await item_service.get(db, storage, item_id)


@router.post("/items", response_model=ApiResponse[inv_schemas.ItemRead], status_code=status.HTTP_201_CREATED, summary="Create an item")
async def create_item(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    """
    `sku` must be unique among active items; `capacity` needs `capacity_type_id`.
    """
    return await item_service.create(db, storage, data)


@router.put("/items/{item_id}", response_model=ApiResponse[inv_schemas.ItemRead], summary="Update an item")
async def update_item(
    item_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await item_service.update(db, storage, item_id, data)


@router.delete("/items/{item_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete an item")
async def delete_item(
    item_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await item_service.delete(db, storage, item_id)


# =============================================================================
# 7. Specification endpoints
# =============================================================================
@router.get("/specifications", response_model=ApiResponse[Dict[str, List[inv_schemas.SpecificationRead]]], summary="List specifications")
async def read_specifications(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await specification_service.list(db, storage, skip=skip, limit=limit)


@router.get("/specifications/{specification_id}", response_model=ApiResponse[inv_schemas.SpecificationRead], summary="Get a specification")
async def read_specification(
    specification_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await specification_service.get(db, storage, specification_id)


@router.post("/specifications", response_model=ApiResponse[inv_schemas.SpecificationRead], status_code=status.HTTP_201_CREATED, summary="Create a specification")
async def create_specification(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    """
    Specification names are unique per item.
    """
    return await specification_service.create(db, storage, data)


@router.put("/specifications/{specification_id}", response_model=ApiResponse[inv_schemas.SpecificationRead], summary="Update a specification")
async def update_specification(
    specification_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await specification_service.update(db, storage, specification_id, data)


@router.delete("/specifications/{specification_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a specification")
async def delete_specification(
    specification_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await specification_service.delete(db, storage, specification_id)


# =============================================================================
# 8. Item transfer endpoints
# =============================================================================
@router.get("/item-transfers", response_model=ApiResponse[Dict[str, List[inv_schemas.ItemTransferRead]]], summary="List item transfers")
async def read_item_transfers(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await item_transfer_service.list(db, storage, skip=skip, limit=limit)


@router.get("/item-transfers/{item_transfer_id}", response_model=ApiResponse[inv_schemas.ItemTransferRead], summary="Get an item transfer")
async def read_item_transfer(
    item_transfer_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await item_transfer_service.get(db, storage, item_transfer_id)


@router.post("/item-transfers", response_model=ApiResponse[inv_schemas.ItemTransferRead], status_code=status.HTTP_201_CREATED, summary="Create an item transfer")
async def create_item_transfer(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    """
    The item must be stocked at `from_warehouse_id` with at least `quantity` units.
    """
    return await item_transfer_service.create(db, storage, data)


@router.put("/item-transfers/{item_transfer_id}", response_model=ApiResponse[inv_schemas.ItemTransferRead], summary="Update an item transfer")
async def update_item_transfer(
    item_transfer_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await item_transfer_service.update(db, storage, item_transfer_id, data)


@router.delete("/item-transfers/{item_transfer_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete an item transfer")
async def delete_item_transfer(
    item_transfer_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await item_transfer_service.delete(db, storage, item_transfer_id)
