# bike_inventory/domains/org/routers.py

"""
API endpoints of the 'org' domain (banking details, organizations, entity bankings).
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core import dependencies as deps
from bike_inventory.core.schemas import ApiResponse, MessagePayload
from bike_inventory.core.storage import ObjectStorage, UploadedObject
from bike_inventory.core.uploads import ImageUpload
from bike_inventory.domains.usr import models as usr_models

from . import schemas as org_schemas
from .services import banking_detail_service, entity_banking_service, organization_service


router = APIRouter(
    tags=["Organizations (organizations, banking details, entity bankings)"],
    responses={404: {"description": "Not found"}},
)

organization_logo_upload = ImageUpload(field="logo", collection="organizations", prefix="organization", name_field="name")


# =============================================================================
# 1. Banking detail endpoints
# =============================================================================
@router.get("/banking-details", response_model=ApiResponse[Dict[str, List[org_schemas.BankingDetailRead]]], summary="List banking details")
async def read_banking_details(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await banking_detail_service.list(db, storage, skip=skip, limit=limit)


@router.get("/banking-details/{banking_detail_id}", response_model=ApiResponse[org_schemas.BankingDetailRead], summary="Get a banking detail")
async def read_banking_detail(
    banking_detail_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await banking_detail_service.get(db, storage, banking_detail_id)


@router.post("/banking-details", response_model=ApiResponse[org_schemas.BankingDetailRead], status_code=status.HTTP_201_CREATED, summary="Create a banking detail")
async def create_banking_detail(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await banking_detail_service.create(db, storage, data)


@router.put("/banking-details/{banking_detail_id}", response_model=ApiResponse[org_schemas.BankingDetailRead], summary="Update a banking detail")
async def update_banking_detail(
    banking_detail_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await banking_detail_service.update(db, storage, banking_detail_id, data)


@router.delete("/banking-details/{banking_detail_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a banking detail")
async def delete_banking_detail(
    banking_detail_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await banking_detail_service.delete(db, storage, banking_detail_id)


# =============================================================================
# 2. Organization endpoints
# =============================================================================
@router.get("/organizations", response_model=ApiResponse[Dict[str, List[org_schemas.OrganizationRead]]], summary="List organizations")
async def read_organizations(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await organization_service.list(db, storage, skip=skip, limit=limit)


@router.get("/organizations/{organization_id}", response_model=ApiResponse[org_schemas.OrganizationRead], summary="Get an organization")
async def read_organization(
    organization_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await organization_service.get(db, storage, organization_id)


@router.post("/organizations", response_model=ApiResponse[org_schemas.OrganizationRead], status_code=status.HTTP_201_CREATED, summary="Create an organization")
async def create_organization(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
    upload: Optional[UploadedObject] = Depends(organization_logo_upload),
):
    """
    Multipart form with the organization fields and an optional single `logo` image.
    `vendor_id`, `admin_id` and `banking_id` must reference active records.
    """
    return await organization_service.create(db, storage, data, upload)


@router.put("/organizations/{organization_id}", response_model=ApiResponse[org_schemas.OrganizationRead], summary="Update an organization")
async def update_organization(
    organization_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
    upload: Optional[UploadedObject] = Depends(organization_logo_upload),
):
    return await organization_service.update(db, storage, organization_id, data, upload)


@router.delete("/organizations/{organization_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete an organization")
async def delete_organization(
    organization_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await organization_service.delete(db, storage, organization_id)


# =============================================================================
# 3. Entity banking endpoints
# =============================================================================
@router.get("/entity-bankings", response_model=ApiResponse[Dict[str, List[org_schemas.EntityBankingRead]]], summary="List entity bankings")
async def read_entity_bankings(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await entity_banking_service.list(db, storage, skip=skip, limit=limit)


@router.get("/entity-bankings/{entity_banking_id}", response_model=ApiResponse[org_schemas.EntityBankingRead], summary="Get an entity banking")
async def read_entity_banking(
    entity_banking_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await entity_banking_service.get(db, storage, entity_banking_id)


@router.post("/entity-bankings", response_model=ApiResponse[org_schemas.EntityBankingRead], status_code=status.HTTP_201_CREATED, summary="Create an entity banking")
async def create_entity_banking(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    """
    Links a banking detail to a vendor, dealer, customer, organization or shipping agent.
    """
    return await entity_banking_service.create(db, storage, data)


@router.put("/entity-bankings/{entity_banking_id}", response_model=ApiResponse[org_schemas.EntityBankingRead], summary="Update an entity banking")
async def update_entity_banking(
    entity_banking_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await entity_banking_service.update(db, storage, entity_banking_id, data)


@router.delete("/entity-bankings/{entity_banking_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete an entity banking")
async def delete_entity_banking(
    entity_banking_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await entity_banking_service.delete(db, storage, entity_banking_id)
