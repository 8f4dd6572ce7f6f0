# bike_inventory/domains/pay/routers.py

"""
API endpoints of the 'pay' domain (payments, instruments, installment plans,
installments, payment details).
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core import dependencies as deps
from bike_inventory.core.schemas import ApiResponse, MessagePayload
from bike_inventory.core.storage import ObjectStorage, UploadedObject
from bike_inventory.core.uploads import ImageUpload
from bike_inventory.domains.usr import models as usr_models

from . import schemas as pay_schemas
from .services import (
    installment_plan_service,
    installment_service,
    instrument_service,
    payment_detail_service,
    payment_service,
)


router = APIRouter(
    tags=["Payments (payments, instruments, installments)"],
    responses={404: {"description": "Not found"}},
)

instrument_picture_upload = ImageUpload(field="picture", collection="instruments", prefix="instrument", name_field="number")


# =============================================================================
# 1. Payment endpoints
# =============================================================================
@router.get("/payments", response_model=ApiResponse[Dict[str, List[pay_schemas.PaymentRead]]], summary="List payments")
async def read_payments(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await payment_service.list(db, storage, skip=skip, limit=limit)


@router.get("/payments/{payment_id}", response_model=ApiResponse[pay_schemas.PaymentRead], summary="Get a payment")
async def read_payment(
    payment_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await payment_service.get(db, storage, payment_id)


@router.post("/payments", response_model=ApiResponse[pay_schemas.PaymentRead], status_code=status.HTTP_201_CREATED, summary="Record a payment")
async def create_payment(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await payment_service.create(db, storage, data)


@router.put("/payments/{payment_id}", response_model=ApiResponse[pay_schemas.PaymentRead], summary="Update a payment")
async def update_payment(
    payment_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await payment_service.update(db, storage, payment_id, data)


@router.delete("/payments/{payment_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a payment")
async def delete_payment(
    payment_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await payment_service.delete(db, storage, payment_id)


# =============================================================================
# 2. Instrument endpoints
# =============================================================================
@router.get("/instruments", response_model=ApiResponse[Dict[str, List[pay_schemas.InstrumentRead]]], summary="List instruments")
async def read_instruments(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await instrument_service.list(db, storage, skip=skip, limit=limit)


@router.get("/instruments/{instrument_id}", response_model=ApiResponse[pay_schemas.InstrumentRead], summary="Get an instrument")
async def read_instrument(
    instrument_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await instrument_service.get(db, storage, instrument_id)


@router.post("/instruments", response_model=ApiResponse[pay_schemas.InstrumentRead], status_code=status.HTTP_201_CREATED, summary="Create an instrument")
async def create_instrument(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
    upload: Optional[UploadedObject] = Depends(instrument_picture_upload),
):
    """
    Multipart form with `number`, `amount`, `date` and an optional single `picture` image.
    """
    return await instrument_service.create(db, storage, data, upload)


@router.put("/instruments/{instrument_id}", response_model=ApiResponse[pay_schemas.InstrumentRead], summary="Update an instrument")
async def update_instrument(
    instrument_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
    upload: Optional[UploadedObject] = Depends(instrument_picture_upload),
):
    return await instrument_service.update(db, storage, instrument_id, data, upload)


@router.delete("/instruments/{instrument_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete an instrument")
async def delete_instrument(
    instrument_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await instrument_service.delete(db, storage, instrument_id)


# =============================================================================
# 3. Installment plan endpoints
# =============================================================================
@router.get("/installment-plans", response_model=ApiResponse[Dict[str, List[pay_schemas.InstallmentPlanRead]]], summary="List installment plans")
async def read_installment_plans(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await installment_plan_service.list(db, storage, skip=skip, limit=limit)


@router.get("/installment-plans/{installment_plan_id}", response_model=ApiResponse[pay_schemas.InstallmentPlanRead], summary="Get an installment plan")
async def read_installment_plan(
    installment_plan_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await installment_plan_service.get(db, storage, installment_plan_id)


@router.post("/installment-plans", response_model=ApiResponse[pay_schemas.InstallmentPlanRead], status_code=status.HTTP_201_CREATED, summary="Create an installment plan")
async def create_installment_plan(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await installment_plan_service.create(db, storage, data)


@router.put("/installment-plans/{installment_plan_id}", response_model=ApiResponse[pay_schemas.InstallmentPlanRead], summary="Update an installment plan")
async def update_installment_plan(
    installment_plan_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await installment_plan_service.update(db, storage, installment_plan_id, data)


@router.delete("/installment-plans/{installment_plan_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete an installment plan")
async def delete_installment_plan(
    installment_plan_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await installment_plan_service.delete(db, storage, installment_plan_id)


# =============================================================================
# 4. Installment endpoints
# =============================================================================
@router.get("/installments", response_model=ApiResponse[Dict[str, List[pay_schemas.InstallmentRead]]], summary="List installments")
async def read_installments(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await installment_service.list(db, storage, skip=skip, limit=limit)


@router.get("/installments/{installment_id}", response_model=ApiResponse[pay_schemas.InstallmentRead], summary="Get an installment")
async def read_installment(
    installment_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await installment_service.get(db, storage, installment_id)


@router.post("/installments", response_model=ApiResponse[pay_schemas.InstallmentRead], status_code=status.HTTP_201_CREATED, summary="Create an installment")
async def create_installment(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    """
    One installment per `sequence` and sale; `paid` installments need a `payment_id`.
    """
    return await installment_service.create(db, storage, data)


@router.put("/installments/{installment_id}", response_model=ApiResponse[pay_schemas.InstallmentRead], summary="Update an installment")
async def update_installment(
    installment_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await installment_service.update(db, storage, installment_id, data)


@router.delete("/installments/{installment_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete an installment")
async def delete_installment(
    installment_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await installment_service.delete(db, storage, installment_id)


# =============================================================================
# 5. Payment detail endpoints
# =============================================================================
@router.get("/payment-details", response_model=ApiResponse[Dict[str, List[pay_schemas.PaymentDetailRead]]], summary="List payment details")
async def read_payment_details(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await payment_detail_service.list(db, storage, skip=skip, limit=limit)


@router.get("/payment-details/{payment_detail_id}", response_model=ApiResponse[pay_schemas.PaymentDetailRead], summary="Get a payment detail")
async def read_payment_detail(
    payment_detail_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await payment_detail_service.get(db, storage, payment_detail_id)


@router.post("/payment-details", response_model=ApiResponse[pay_schemas.PaymentDetailRead], status_code=status.HTTP_201_CREATED, summary="Create a payment detail")
async def create_payment_detail(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    """
    The details of one payment never add up to more than its `amount`.
    """
    return await payment_detail_service.create(db, storage, data)


@router.put("/payment-details/{payment_detail_id}", response_model=ApiResponse[pay_schemas.PaymentDetailRead], summary="Update a payment detail")
async def update_payment_detail(
    payment_detail_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await payment_detail_service.update(db, storage, payment_detail_id, data)


@router.delete("/payment-details/{payment_detail_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a payment detail")
async def delete_payment_detail(
    payment_detail_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await payment_detail_service.delete(db, storage, payment_detail_id)
