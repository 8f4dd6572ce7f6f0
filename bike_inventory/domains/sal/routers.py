# bike_inventory/domains/sal/routers.py

"""
API endpoints of the 'sal' domain (customers, dealers, dealerships, sales).
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core import dependencies as deps
from bike_inventory.core.schemas import ApiResponse, MessagePayload
from bike_inventory.core.storage import ObjectStorage
from bike_inventory.domains.usr import models as usr_models

from . import schemas as sal_schemas
from .services import customer_service, dealer_service, dealership_service, sale_service


router = APIRouter(
    tags=["Sales (customers, dealers, dealerships, sales)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. Customer endpoints
# =============================================================================
@router.get("/customers", response_model=ApiResponse[Dict[str, List[sal_schemas.CustomerRead]]], summary="List customers")
async def read_customers(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await customer_service.list(db, storage, skip=skip, limit=limit)


@router.get("/customers/{customer_id}", response_model=ApiResponse[sal_schemas.CustomerRead], summary="Get a customer")
async def read_customer(
    customer_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await customer_service.get(db, storage, customer_id)


@router.post("/customers", response_model=ApiResponse[sal_schemas.CustomerRead], status_code=status.HTTP_201_CREATED, summary="Create a customer")
async def create_customer(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await customer_service.create(db, storage, data)


@router.put("/customers/{customer_id}", response_model=ApiResponse[sal_schemas.CustomerRead], summary="Update a customer")
async def update_customer(
    customer_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await customer_service.update(db, storage, customer_id, data)


@router.delete("/customers/{customer_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a customer")
async def delete_customer(
    customer_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await customer_service.delete(db, storage, customer_id)


# =============================================================================
# 2. Dealer endpoints
# =============================================================================
@router.get("/dealers", response_model=ApiResponse[Dict[str, List[sal_schemas.DealerRead]]], summary="List dealers")
async def read_dealers(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await dealer_service.list(db, storage, skip=skip, limit=limit)


@router.get("/dealers/{dealer_id}", response_model=ApiResponse[sal_schemas.DealerRead], summary="Get a dealer")
async def read_dealer(
    dealer_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await dealer_service.get(db, storage, dealer_id)


@router.post("/dealers", response_model=ApiResponse[sal_schemas.DealerRead], status_code=status.HTTP_201_CREATED, summary="Create a dealer")
async def create_dealer(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await dealer_service.create(db, storage, data)


@router.put("/dealers/{dealer_id}", response_model=ApiResponse[sal_schemas.DealerRead], summary="Update a dealer")
async def update_dealer(
    dealer_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await dealer_service.update(db, storage, dealer_id, data)


@router.delete("/dealers/{dealer_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a dealer")
async def delete_dealer(
    dealer_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await dealer_service.delete(db, storage, dealer_id)


# =============================================================================
# 3. Dealership endpoints
# =============================================================================
@router.get("/dealerships", response_model=ApiResponse[Dict[str, List[sal_schemas.DealershipRead]]], summary="List dealerships")
async def read_dealerships(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await dealership_service.list(db, storage, skip=skip, limit=limit)


@router.get("/dealerships/{dealership_id}", response_model=ApiResponse[sal_schemas.DealershipRead], summary="Get a dealership")
async def read_dealership(
    dealership_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await dealership_service.get(db, storage, dealership_id)


@router.post("/dealerships", response_model=ApiResponse[sal_schemas.DealershipRead], status_code=status.HTTP_201_CREATED, summary="Create a dealership")
async def create_dealership(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    """
    Outlet names are unique per dealer.
    """
    return await dealership_service.create(db, storage, data)


@router.put("/dealerships/{dealership_id}", response_model=ApiResponse[sal_schemas.DealershipRead], summary="Update a dealership")
async def update_dealership(
    dealership_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await dealership_service.update(db, storage, dealership_id, data)


@router.delete("/dealerships/{dealership_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a dealership")
async def delete_dealership(
    dealership_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await dealership_service.delete(db, storage, dealership_id)


# =============================================================================
# 4. Sale endpoints
# =============================================================================
@router.get("/sales", response_model=ApiResponse[Dict[str, List[sal_schemas.SaleRead]]], summary="List sales")
async def read_sales(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await sale_service.list(db, storage, skip=skip, limit=limit)


@router.get("/sales/{sale_id}", response_model=ApiResponse[sal_schemas.SaleRead], summary="Get a sale")
async def read_sale(
    sale_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await sale_service.get(db, storage, sale_id)


@router.post("/sales", response_model=ApiResponse[sal_schemas.SaleRead], status_code=status.HTTP_201_CREATED, summary="Create a sale")
async def create_sale(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    """
    `unit_price` defaults to the item price; the sold units leave the item stock.
    """
    return await sale_service.create(db, storage, data)


@router.put("/sales/{sale_id}", response_model=ApiResponse[sal_schemas.SaleRead], summary="Update a sale")
async def update_sale(
    sale_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await sale_service.update(db, storage, sale_id, data)


@router.delete("/sales/{sale_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a sale")
async def delete_sale(
    sale_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await sale_service.delete(db, storage, sale_id)
