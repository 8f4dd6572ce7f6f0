# bike_inventory/domains/ship/routers.py

"""
API endpoints of the 'ship' domain (shipping agents, shipments).
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core import dependencies as deps
from bike_inventory.core.schemas import ApiResponse, MessagePayload
from bike_inventory.core.storage import ObjectStorage
from bike_inventory.domains.usr import models as usr_models

from . import schemas as ship_schemas
from .services import shipment_service, shipping_agent_service


router = APIRouter(
    tags=["Shipping (shipping agents, shipments)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. Shipping agent endpoints
# =============================================================================
@router.get("/shipping-agents", response_model=ApiResponse[Dict[str, List[ship_schemas.ShippingAgentRead]]], summary="List shipping agents")
async def read_shipping_agents(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await shipping_agent_service.list(db, storage, skip=skip, limit=limit)


@router.get("/shipping-agents/{shipping_agent_id}", response_model=ApiResponse[ship_schemas.ShippingAgentRead], summary="Get a shipping agent")
async def read_shipping_agent(
    shipping_agent_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await shipping_agent_service.get(db, storage, shipping_agent_id)


@router.post("/shipping-agents", response_model=ApiResponse[ship_schemas.ShippingAgentRead], status_code=status.HTTP_201_CREATED, summary="Create a shipping agent")
async def create_shipping_agent(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await shipping_agent_service.create(db, storage, data)


@router.put("/shipping-agents/{shipping_agent_id}", response_model=ApiResponse[ship_schemas.ShippingAgentRead], summary="Update a shipping agent")
async def update_shipping_agent(
    shipping_agent_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await shipping_agent_service.update(db, storage, shipping_agent_id, data)


@router.delete("/shipping-agents/{shipping_agent_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a shipping agent")
async def delete_shipping_agent(
    shipping_agent_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await shipping_agent_service.delete(db, storage, shipping_agent_id)


# =============================================================================
# 2. Shipment endpoints
# =============================================================================
@router.get("/shipments", response_model=ApiResponse[Dict[str, List[ship_schemas.ShipmentRead]]], summary="List shipments")
async def read_shipments(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await shipment_service.list(db, storage, skip=skip, limit=limit)


@router.get("/shipments/{shipment_id}", response_model=ApiResponse[ship_schemas.ShipmentRead], summary="Get a shipment")
async def read_shipment(
    shipment_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await shipment_service.get(db, storage, shipment_id)


@router.post("/shipments", response_model=ApiResponse[ship_schemas.ShipmentRead], status_code=status.HTTP_201_CREATED, summary="Create a shipment")
async def create_shipment(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    """
    `tracking_number` must be unique among active shipments.
    """
    return await shipment_service.create(db, storage, data)


@router.put("/shipments/{shipment_id}", response_model=ApiResponse[ship_schemas.ShipmentRead], summary="Update a shipment")
async def update_shipment(
    shipment_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await shipment_service.update(db, storage, shipment_id, data)


@router.delete("/shipments/{shipment_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a shipment")
async def delete_shipment(
    shipment_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await shipment_service.delete(db, storage, shipment_id)
