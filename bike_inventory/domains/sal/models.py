# bike_inventory/domains/sal/models.py

"""
ORM models of the 'sal' domain (customers, dealers, dealerships, sales).

A dealer is a reseller; a dealership is one of its outlets, optionally run
under an organization. A sale records one item line sold to a customer,
directly or through a dealer.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import Field, SQLModel
from sqlalchemy.types import TIMESTAMP

from bike_inventory.core.model_base import IdMixin, TimestampMixin


# =============================================================================
# 1. customers table
# =============================================================================
class CustomerBase(SQLModel):
    name: str = Field(max_length=100, index=True, description="Customer name")
    email: Optional[str] = Field(default=None, max_length=100, index=True, description="Email")
    phone: Optional[str] = Field(default=None, max_length=30, description="Phone")
    address: Optional[str] = Field(default=None, max_length=255, description="Postal address")
    national_id: Optional[str] = Field(default=None, max_length=50, index=True, description="National ID number")
    city_id: Optional[int] = Field(default=None, foreign_key="cities.id", description="City ID (FK)")


class Customer(IdMixin, CustomerBase, TimestampMixin, table=True):
    __tablename__ = "customers"


# =============================================================================
# 2. dealers table
# =============================================================================
class DealerBase(SQLModel):
    name: str = Field(max_length=100, index=True, description="Dealer name")
    email: Optional[str] = Field(default=None, max_length=100, description="Email")
    phone: Optional[str] = Field(default=None, max_length=30, description="Phone")
    address: Optional[str] = Field(default=None, max_length=255, description="Postal address")
    city_id: Optional[int] = Field(default=None, foreign_key="cities.id", description="City ID (FK)")


class Dealer(IdMixin, DealerBase, TimestampMixin, table=True):
    __tablename__ = "dealers"


# =============================================================================
# 3. dealerships table
# =============================================================================
class DealershipBase(SQLModel):
    name: str = Field(max_length=100, index=True, description="Outlet name")
    dealer_id: int = Field(foreign_key="dealers.id", index=True, description="Dealer ID (FK)")
    organization_id: Optional[int] = Field(default=None, foreign_key="organization.id", description="Organization ID (FK)")
    address: Optional[str] = Field(default=None, max_length=255, description="Postal address")
    city_id: Optional[int] = Field(default=None, foreign_key="cities.id", description="City ID (FK)")


class Dealership(IdMixin, DealershipBase, TimestampMixin, table=True):
    __tablename__ = "dealerships"


# =============================================================================
# 4. sales table
# =============================================================================
class SaleBase(SQLModel):
    item_id: int = Field(foreign_key="items.id", index=True, description="Sold item ID (FK)")
    customer_id: Optional[int] = Field(default=None, foreign_key="customers.id", index=True, description="Customer ID (FK)")
    dealer_id: Optional[int] = Field(default=None, foreign_key="dealers.id", index=True, description="Dealer ID (FK)")
    quantity: int = Field(default=1, description="Sold quantity")
    unit_price: Decimal = Field(max_digits=12, decimal_places=2, description="Price per unit")
    sold_at: Optional[datetime] = Field(default=None, sa_type=TIMESTAMP(timezone=True), description="Sale time")
    notes: Optional[str] = Field(default=None, max_length=500, description="Notes")


class Sale(IdMixin, SaleBase, TimestampMixin, table=True):
    __tablename__ = "sales"

    total_amount: Decimal = Field(max_digits=14, decimal_places=2, description="quantity x unit_price")
