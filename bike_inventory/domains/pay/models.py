# bike_inventory/domains/pay/models.py

"""
ORM models of the 'pay' domain (payments, payment instruments, installment
plans, installments, payment details).

An instrument is a physical payment document (cheque, pay order, ...) whose
scanned picture is kept in object storage.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel
from sqlalchemy.types import TIMESTAMP

from bike_inventory.core.model_base import IdMixin, TimestampMixin


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    CHEQUE = "cheque"
    ONLINE = "online"


class InstallmentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


# =============================================================================
# 1. payments table
# =============================================================================
class PaymentBase(SQLModel):
    amount: Decimal = Field(max_digits=12, decimal_places=2, description="Paid amount")
    method: PaymentMethod = Field(default=PaymentMethod.CASH, description="Payment method")
    reference: Optional[str] = Field(default=None, max_length=100, description="External reference (receipt, transaction id)")
    paid_at: Optional[dt.datetime] = Field(default=None, sa_type=TIMESTAMP(timezone=True), description="Payment time")
    notes: Optional[str] = Field(default=None, max_length=500, description="Notes")


class Payment(IdMixin, PaymentBase, TimestampMixin, table=True):
    __tablename__ = "payments"


# =============================================================================
# 2. instruments table
# =============================================================================
class InstrumentBase(SQLModel):
    number: str = Field(max_length=50, index=True, description="Instrument number")
    amount: Decimal = Field(max_digits=12, decimal_places=2, description="Instrument amount")
    date: dt.date = Field(description="Instrument date")


class Instrument(IdMixin, InstrumentBase, TimestampMixin, table=True):
    __tablename__ = "instruments"

    picture: Optional[str] = Field(default=None, max_length=1024, description="Scanned picture object URL")


# =============================================================================
# 3. installment_plans table
# =============================================================================
class InstallmentPlanBase(SQLModel):
    name: str = Field(max_length=100, index=True, description="Plan name, e.g. '12 months'")
    number_of_installments: int = Field(description="Number of installments")
    interval_days: int = Field(default=30, description="Days between due dates")
    markup_percent: Decimal = Field(default=Decimal("0"), max_digits=5, decimal_places=2, description="Markup over the sale total (%)")
    description: Optional[str] = Field(default=None, max_length=255, description="Description")


class InstallmentPlan(IdMixin, InstallmentPlanBase, TimestampMixin, table=True):
    __tablename__ = "installment_plans"


# =============================================================================
# 4. installments table
# =============================================================================
class InstallmentBase(SQLModel):
    sale_id: int = Field(foreign_key="sales.id", index=True, description="Sale ID (FK)")
    installment_plan_id: Optional[int] = Field(default=None, foreign_key="installment_plans.id", description="Plan ID (FK)")
    sequence: int = Field(description="Position in the plan, from 1")
    amount: Decimal = Field(max_digits=12, decimal_places=2, description="Amount due")
    due_date: dt.date = Field(description="Due date")
    status: InstallmentStatus = Field(default=InstallmentStatus.PENDING, description="Installment status")
    payment_id: Optional[int] = Field(default=None, foreign_key="payments.id", description="Settling payment ID (FK)")
    paid_at: Optional[dt.datetime] = Field(default=None, sa_type=TIMESTAMP(timezone=True), description="Settlement time")


class Installment(IdMixin, InstallmentBase, TimestampMixin, table=True):
    __tablename__ = "installments"


# =============================================================================
# 5. payment_details table
# =============================================================================
class PaymentDetailBase(SQLModel):
    payment_id: int = Field(foreign_key="payments.id", index=True, description="Payment ID (FK)")
    sale_id: Optional[int] = Field(default=None, foreign_key="sales.id", description="Paid sale ID (FK)")
    instrument_id: Optional[int] = Field(default=None, foreign_key="instruments.id", description="Instrument ID (FK)")
    amount: Decimal = Field(max_digits=12, decimal_places=2, description="Allocated amount")
    notes: Optional[str] = Field(default=None, max_length=500, description="Notes")


class PaymentDetail(IdMixin, PaymentDetailBase, TimestampMixin, table=True):
    __tablename__ = "payment_details"
