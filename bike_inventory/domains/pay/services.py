# bike_inventory/domains/pay/services.py

"""
Business logic of the 'pay' domain.

Installments belong to a sale and, optionally, to the plan they were
scheduled from; their sequence cannot run past the plan's length. Payment
details split one payment across sales and instruments and never add up
to more than the payment itself.
"""

from typing import Any

from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core.exceptions import BadRequestError
from bike_inventory.core.service_base import ResourceService
from bike_inventory.domains.sal import crud as sal_crud
from . import crud as pay_crud
from . import schemas as pay_schemas
from .models import InstallmentStatus


payment_service = ResourceService(
    pay_crud.payment,
    read_schema=pay_schemas.PaymentRead,
    create_schema=pay_schemas.PaymentCreate,
    update_schema=pay_schemas.PaymentUpdate,
    label="Payment",
    plural="payments",
)

instrument_service = ResourceService(
    pay_crud.instrument,
    read_schema=pay_schemas.InstrumentRead,
    create_schema=pay_schemas.InstrumentCreate,
    update_schema=pay_schemas.InstrumentUpdate,
    label="Instrument",
    plural="instruments",
)


class InstallmentPlanService(
    ResourceService[pay_schemas.InstallmentPlanRead, pay_schemas.InstallmentPlanCreate, pay_schemas.InstallmentPlanUpdate]
):
    unique_fields = ("name",)


installment_plan_service = InstallmentPlanService(
    pay_crud.installment_plan,
    read_schema=pay_schemas.InstallmentPlanRead,
    create_schema=pay_schemas.InstallmentPlanCreate,
    update_schema=pay_schemas.InstallmentPlanUpdate,
    label="Installment plan",
    plural="installment_plans",
)


class InstallmentService(
    ResourceService[pay_schemas.InstallmentRead, pay_schemas.InstallmentCreate, pay_schemas.InstallmentUpdate]
):
    references = {
        "sale_id": sal_crud.sale,
        "installment_plan_id": pay_crud.installment_plan,
        "payment_id": pay_crud.payment,
    }
    unique_together = (("sale_id", "sequence"),)

    async def validate(self, db: AsyncSession, obj_in: BaseModel, current: Any = None) -> None:
        await super().validate(db, obj_in, current)
        fields_set = obj_in.model_fields_set

        def effective(field: str) -> Any:
            return getattr(obj_in, field) if current is None or field in fields_set else getattr(current, field)

        plan_id = effective("installment_plan_id")
        if plan_id is not None:
            plan = await pay_crud.installment_plan.get(db, plan_id)
            if plan is not None and effective("sequence") > plan.number_of_installments:
                raise BadRequestError("sequence exceeds the plan's number_of_installments")
        if effective("status") == InstallmentStatus.PAID and effective("payment_id") is None:
            raise BadRequestError("A paid installment needs a payment_id")


installment_service = InstallmentService(
    pay_crud.installment,
    read_schema=pay_schemas.InstallmentRead,
    create_schema=pay_schemas.InstallmentCreate,
    update_schema=pay_schemas.InstallmentUpdate,
    label="Installment",
    plural="installments",
)


class PaymentDetailService(
    ResourceService[pay_schemas.PaymentDetailRead, pay_schemas.PaymentDetailCreate, pay_schemas.PaymentDetailUpdate]
):
    references = {
        "payment_id": pay_crud.payment,
        "sale_id": sal_crud.sale,
        "instrument_id": pay_crud.instrument,
    }

    async def validate(self, db: AsyncSession, obj_in: BaseModel, current: Any = None) -> None:
        await super().validate(db, obj_in, current)
        if obj_in.amount is None:
            return
        payment_id = obj_in.payment_id if current is None else current.payment_id
        payment = await pay_crud.payment.get(db, payment_id)
        if payment is None:
            # the payment was deleted after the detail was recorded
            raise BadRequestError("Invalid payment_id")
        allocated = await pay_crud.payment_detail.allocated_amount(
            db, payment_id=payment_id, exclude_id=current.id if current is not None else None
        )
        if allocated + obj_in.amount > payment.amount:
            raise BadRequestError("Payment details exceed the payment amount")


payment_detail_service = PaymentDetailService(
    pay_crud.payment_detail,
    read_schema=pay_schemas.PaymentDetailRead,
    create_schema=pay_schemas.PaymentDetailCreate,
    update_schema=pay_schemas.PaymentDetailUpdate,
    label="Payment detail",
    plural="payment_details",
)
