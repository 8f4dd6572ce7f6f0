# bike_inventory/domains/pay/crud.py

"""
CRUD operations of the 'pay' domain.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core.crud_base import CRUDBase, CRUDWithObjectBase
from . import models as pay_models
from . import schemas as pay_schemas


class CRUDPayment(CRUDBase[pay_models.Payment, pay_schemas.PaymentCreate, pay_schemas.PaymentUpdate]):
    def __init__(self):
        super().__init__(model=pay_models.Payment)


payment = CRUDPayment()


class CRUDInstrument(CRUDWithObjectBase[pay_models.Instrument, pay_schemas.InstrumentCreate, pay_schemas.InstrumentUpdate]):
    def __init__(self):
        super().__init__(model=pay_models.Instrument, object_field="picture")


instrument = CRUDInstrument()


class CRUDInstallmentPlan(CRUDBase[pay_models.InstallmentPlan, pay_schemas.InstallmentPlanCreate, pay_schemas.InstallmentPlanUpdate]):
    def __init__(self):
        super().__init__(model=pay_models.InstallmentPlan)


installment_plan = CRUDInstallmentPlan()


class CRUDInstallment(CRUDBase[pay_models.Installment, pay_schemas.InstallmentCreate, pay_schemas.InstallmentUpdate]):
    def __init__(self):
        super().__init__(model=pay_models.Installment)


installment = CRUDInstallment()


class CRUDPaymentDetail(CRUDBase[pay_models.PaymentDetail, pay_schemas.PaymentDetailCreate, pay_schemas.PaymentDetailUpdate]):
    def __init__(self):
        super().__init__(model=pay_models.PaymentDetail)

    async def allocated_amount(
        self, db: AsyncSession, *, payment_id: int, exclude_id: Optional[int] = None
    ) -> Decimal:
        """Sum of the active details of one payment, optionally leaving one detail out."""
        statement = self._active(select(func.sum(self.model.amount))).where(self.model.payment_id == payment_id)
        if exclude_id is not None:
            statement = statement.where(self.model.id != exclude_id)
        result = await db.execute(statement)
        total = result.scalar()
        return Decimal(str(total)) if total is not None else Decimal("0")


payment_detail = CRUDPaymentDetail()
