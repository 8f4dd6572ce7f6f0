# bike_inventory/domains/org/models.py

"""
ORM models of the 'org' domain (banking details, organizations, entity bankings).

An entity banking links a banking detail to a vendor, dealer, customer,
organization or shipping agent.
"""

from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel

from bike_inventory.core.model_base import IdMixin, TimestampMixin


# =============================================================================
# 1. banking_details table
# =============================================================================
class BankingDetailBase(SQLModel):
    bank_name: str = Field(max_length=100, description="Bank name")
    account_title: str = Field(max_length=100, description="Account holder")
    account_number: str = Field(max_length=50, description="Account number")
    iban: Optional[str] = Field(default=None, max_length=34, description="IBAN")
    branch_code: Optional[str] = Field(default=None, max_length=20, description="Branch code")


class BankingDetail(IdMixin, BankingDetailBase, TimestampMixin, table=True):
    __tablename__ = "banking_details"


# =============================================================================
# 2. organization table
# =============================================================================
class OrganizationBase(SQLModel):
    name: str = Field(max_length=100, index=True, description="Organization name")
    website: Optional[str] = Field(default=None, max_length=255, description="Website URL")
    address: Optional[str] = Field(default=None, max_length=255, description="Postal address")
    vendor_id: Optional[int] = Field(default=None, foreign_key="vendor.id", description="Vendor ID (FK)")
    admin_id: Optional[int] = Field(default=None, foreign_key="users.id", description="Administrator user ID (FK)")
    banking_id: Optional[int] = Field(default=None, foreign_key="banking_details.id", description="Banking detail ID (FK)")


class Organization(IdMixin, OrganizationBase, TimestampMixin, table=True):
    __tablename__ = "organization"

    logo: Optional[str] = Field(default=None, max_length=1024, description="Logo object URL")


# =============================================================================
# 3. entity_bankings table
# =============================================================================
class EntityType(str, Enum):
    VENDOR = "vendor"
    DEALER = "dealer"
    CUSTOMER = "customer"
    ORGANIZATION = "organization"
    SHIPPING_AGENT = "shipping_agent"


class EntityBankingBase(SQLModel):
    entity_type: EntityType = Field(index=True, description="Kind of the account holder")
    entity_id: int = Field(index=True, description="Account holder ID in its own table")
    banking_id: int = Field(foreign_key="banking_details.id", description="Banking detail ID (FK)")
    is_primary: bool = Field(default=False, description="Preferred account of the holder")


class EntityBanking(IdMixin, EntityBankingBase, TimestampMixin, table=True):
    __tablename__ = "entity_bankings"
