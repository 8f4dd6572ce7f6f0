# bike_inventory/domains/sal/schemas.py

"""
API data transfer objects of the 'sal' domain.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import SQLModel, Field
from pydantic import EmailStr

from bike_inventory.core.schemas import TimestampedRead


# =============================================================================
# 1. Customer schemas
# =============================================================================
class CustomerBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = Field(None, max_length=255)
    national_id: Optional[str] = Field(None, max_length=50)
    city_id: Optional[int] = None


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = Field(None, max_length=255)
    national_id: Optional[str] = Field(None, max_length=50)
    city_id: Optional[int] = None


class CustomerRead(CustomerBase, TimestampedRead):
    pass


# =============================================================================
# 2. Dealer schemas
# =============================================================================
class DealerBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = Field(None, max_length=255)
    city_id: Optional[int] = None


class DealerCreate(DealerBase):
    pass


class DealerUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = Field(None, max_length=255)
    city_id: Optional[int] = None


class DealerRead(DealerBase, TimestampedRead):
    pass


# =============================================================================
# 3. Dealership schemas
# =============================================================================
class DealershipBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    dealer_id: int
    organization_id: Optional[int] = None
    address: Optional[str] = Field(None, max_length=255)
    city_id: Optional[int] = None


class DealershipCreate(DealershipBase):
    pass


class DealershipUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    dealer_id: Optional[int] = None
    organization_id: Optional[int] = None
    address: Optional[str] = Field(None, max_length=255)
    city_id: Optional[int] = None


class DealershipRead(DealershipBase, TimestampedRead):
    pass


# =============================================================================
# 4. Sale schemas
# =============================================================================
class SaleBase(SQLModel):
    item_id: int
    customer_id: Optional[int] = None
    dealer_id: Optional[int] = None
    quantity: int = Field(1, gt=0)
    sold_at: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)


class SaleCreate(SaleBase):
    # defaults to the item's current price
    unit_price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)


class SaleUpdate(SQLModel):
    """The item and quantity of a recorded sale are fixed; delete and re-enter it instead."""
    customer_id: Optional[int] = None
    dealer_id: Optional[int] = None
    unit_price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    sold_at: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)


class SaleRead(SaleBase, TimestampedRead):
    unit_price: Decimal
    total_amount: Decimal
