# bike_inventory/domains/pay/schemas.py

"""
API data transfer objects of the 'pay' domain.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from sqlmodel import SQLModel, Field

from bike_inventory.core.schemas import TimestampedRead
from .models import InstallmentStatus, PaymentMethod


# =============================================================================
# 1. Payment schemas
# =============================================================================
class PaymentBase(SQLModel):
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    method: PaymentMethod = PaymentMethod.CASH
    reference: Optional[str] = Field(None, max_length=100)
    paid_at: Optional[dt.datetime] = None
    notes: Optional[str] = Field(None, max_length=500)


class PaymentCreate(PaymentBase):
    pass


class PaymentUpdate(SQLModel):
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    method: Optional[PaymentMethod] = None
    reference: Optional[str] = Field(None, max_length=100)
    paid_at: Optional[dt.datetime] = None
    notes: Optional[str] = Field(None, max_length=500)


class PaymentRead(PaymentBase, TimestampedRead):
    pass


# =============================================================================
# 2. Instrument schemas
# =============================================================================
class InstrumentBase(SQLModel):
    number: str = Field(..., min_length=1, max_length=50)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    date: dt.date


class InstrumentCreate(InstrumentBase):
    pass


class InstrumentUpdate(SQLModel):
    number: Optional[str] = Field(None, min_length=1, max_length=50)
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    date: Optional[dt.date] = None


class InstrumentRead(InstrumentBase, TimestampedRead):
    picture: Optional[str] = None
    picture_presigned_url: Optional[str] = None


# =============================================================================
# 3. InstallmentPlan schemas
# =============================================================================
class InstallmentPlanBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    number_of_installments: int = Field(..., gt=0, le=120)
    interval_days: int = Field(30, gt=0)
    markup_percent: Decimal = Field(Decimal("0"), ge=0, max_digits=5, decimal_places=2)
    description: Optional[str] = Field(None, max_length=255)


class InstallmentPlanCreate(InstallmentPlanBase):
    pass


class InstallmentPlanUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    number_of_installments: Optional[int] = Field(None, gt=0, le=120)
    interval_days: Optional[int] = Field(None, gt=0)
    markup_percent: Optional[Decimal] = Field(None, ge=0, max_digits=5, decimal_places=2)
    description: Optional[str] = Field(None, max_length=255)


class InstallmentPlanRead(InstallmentPlanBase, TimestampedRead):
    pass


# =============================================================================
# 4. Installment schemas
# =============================================================================
class InstallmentBase(SQLModel):
    sale_id: int
    installment_plan_id: Optional[int] = None
    sequence: int = Field(..., gt=0)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    due_date: dt.date
    status: InstallmentStatus = InstallmentStatus.PENDING
    payment_id: Optional[int] = None
    paid_at: Optional[dt.datetime] = None


class InstallmentCreate(InstallmentBase):
    pass


class InstallmentUpdate(SQLModel):
    installment_plan_id: Optional[int] = None
    sequence: Optional[int] = Field(None, gt=0)
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    due_date: Optional[dt.date] = None
    status: Optional[InstallmentStatus] = None
    payment_id: Optional[int] = None
    paid_at: Optional[dt.datetime] = None


class InstallmentRead(InstallmentBase, TimestampedRead):
    pass


# =============================================================================
# 5. PaymentDetail schemas
# =============================================================================
class PaymentDetailBase(SQLModel):
    payment_id: int
    sale_id: Optional[int] = None
    instrument_id: Optional[int] = None
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    notes: Optional[str] = Field(None, max_length=500)


class PaymentDetailCreate(PaymentDetailBase):
    pass


class PaymentDetailUpdate(SQLModel):
    sale_id: Optional[int] = None
    instrument_id: Optional[int] = None
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    notes: Optional[str] = Field(None, max_length=500)


class PaymentDetailRead(PaymentDetailBase, TimestampedRead):
    pass
