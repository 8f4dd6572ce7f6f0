# bike_inventory/domains/org/schemas.py

"""
API data transfer objects of the 'org' domain.
"""

from typing import Optional

from sqlmodel import SQLModel, Field

from bike_inventory.core.schemas import TimestampedRead
from .models import EntityType


# =============================================================================
# 1. BankingDetail schemas
# =============================================================================
class BankingDetailBase(SQLModel):
    bank_name: str = Field(..., min_length=1, max_length=100)
    account_title: str = Field(..., min_length=1, max_length=100)
    account_number: str = Field(..., min_length=1, max_length=50)
    iban: Optional[str] = Field(None, max_length=34)
    branch_code: Optional[str] = Field(None, max_length=20)


class BankingDetailCreate(BankingDetailBase):
    pass


class BankingDetailUpdate(SQLModel):
    bank_name: Optional[str] = Field(None, min_length=1, max_length=100)
    account_title: Optional[str] = Field(None, min_length=1, max_length=100)
    account_number: Optional[str] = Field(None, min_length=1, max_length=50)
    iban: Optional[str] = Field(None, max_length=34)
    branch_code: Optional[str] = Field(None, max_length=20)


class BankingDetailRead(BankingDetailBase, TimestampedRead):
    pass


# =============================================================================
# 2. Organization schemas
# =============================================================================
class OrganizationBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    website: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=255)
    vendor_id: Optional[int] = None
    admin_id: Optional[int] = None
    banking_id: Optional[int] = None


class OrganizationCreate(OrganizationBase):
    pass


class OrganizationUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    website: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=255)
    vendor_id: Optional[int] = None
    admin_id: Optional[int] = None
    banking_id: Optional[int] = None


class OrganizationRead(OrganizationBase, TimestampedRead):
    logo: Optional[str] = None
    logo_presigned_url: Optional[str] = None


# =============================================================================
# 3. EntityBanking schemas
# =============================================================================
class EntityBankingBase(SQLModel):
    entity_type: EntityType
    entity_id: int = Field(..., gt=0)
    banking_id: int
    is_primary: bool = False


class EntityBankingCreate(EntityBankingBase):
    pass


class EntityBankingUpdate(SQLModel):
    banking_id: Optional[int] = None
    is_primary: Optional[bool] = None


class EntityBankingRead(EntityBankingBase, TimestampedRead):
    pass
