# bike_inventory/domains/ref/routers.py

"""
API endpoints of the 'ref' domain (countries, cities, statuses).
Reference data is readable by anyone; writes require the admin role.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core import dependencies as deps
from bike_inventory.core.schemas import ApiResponse, MessagePayload
from bike_inventory.core.storage import ObjectStorage
from bike_inventory.domains.usr import models as usr_models

from . import schemas as ref_schemas
from .services import city_service, country_service, status_service


router = APIRouter(
    tags=["Reference data (countries, cities, statuses)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. Country endpoints
# =============================================================================
@router.get("/countries", response_model=ApiResponse[Dict[str, List[ref_schemas.CountryRead]]], summary="List countries")
async def read_countries(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await country_service.list(db, storage, skip=skip, limit=limit)


@router.get("/countries/{country_id}", response_model=ApiResponse[ref_schemas.CountryRead], summary="Get a country")
async def read_country(
    country_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await country_service.get(db, storage, country_id)


@router.post("/countries", response_model=ApiResponse[ref_schemas.CountryRead], status_code=status.HTTP_201_CREATED, summary="Create a country")
async def create_country(
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    """
    `code` is a 2 or 3 letter ISO code, stored upper-case.
    """
    return await country_service.create(db, storage, data)


@router.put("/countries/{country_id}", response_model=ApiResponse[ref_schemas.CountryRead], summary="Update a country")
async def update_country(
    country_id: int,
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await country_service.update(db, storage, country_id, data)


@router.delete("/countries/{country_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a country")
async def delete_country(
    country_id: int,
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await country_service.delete(db, storage, country_id)


# =============================================================================
# 2. City endpoints
# =============================================================================
@router.get("/cities", response_model=ApiResponse[Dict[str, List[ref_schemas.CityRead]]], summary="List cities")
async def read_cities(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await city_service.list(db, storage, skip=skip, limit=limit)


@router.get("/cities/{city_id}", response_model=ApiResponse[ref_schemas.CityRead], summary="Get a city")
async def read_city(
    city_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await city_service.get(db, storage, city_id)


@router.post("/cities", response_model=ApiResponse[ref_schemas.CityRead], status_code=status.HTTP_201_CREATED, summary="Create a city")
async def create_city(
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    """
    City names are unique within a country.
    """
    return await city_service.create(db, storage, data)


@router.put("/cities/{city_id}", response_model=ApiResponse[ref_schemas.CityRead], summary="Update a city")
async def update_city(
    city_id: int,
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await city_service.update(db, storage, city_id, data)


@router.delete("/cities/{city_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a city")
async def delete_city(
    city_id: int,
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await city_service.delete(db, storage, city_id)


# =============================================================================
# 3. Status endpoints
# =============================================================================
@router.get("/status", response_model=ApiResponse[Dict[str, List[ref_schemas.StatusRead]]], summary="List statuses")
async def read_statuses(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await status_service.list(db, storage, skip=skip, limit=limit)


@router.get("/status/{status_id}", response_model=ApiResponse[ref_schemas.StatusRead], summary="Get a status")
async def read_status(
    status_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await status_service.get(db, storage, status_id)


@router.post("/status", response_model=ApiResponse[ref_schemas.StatusRead], status_code=status.HTTP_201_CREATED, summary="Create a status")
async def create_status(
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await status_service.create(db, storage, data)


@router.put("/status/{status_id}", response_model=ApiResponse[ref_schemas.StatusRead], summary="Update a status")
async def update_status(
    status_id: int,
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await status_service.update(db, storage, status_id, data)


@router.delete("/status/{status_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a status")
async def delete_status(
    status_id: int,
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await status_service.delete(db, storage, status_id)
