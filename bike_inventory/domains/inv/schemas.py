# bike_inventory/domains/inv/schemas.py

"""
API data transfer objects of the 'inv' domain.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import SQLModel, Field
from pydantic import EmailStr, model_validator

from bike_inventory.core.schemas import TimestampedRead


# =============================================================================
# 1. Brand schemas
# =============================================================================
class BrandBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    website: Optional[str] = Field(None, max_length=255)


class BrandCreate(BrandBase):
    pass


class BrandUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    website: Optional[str] = Field(None, max_length=255)


class BrandRead(BrandBase, TimestampedRead):
    logo: Optional[str] = None
    logo_presigned_url: Optional[str] = None


# =============================================================================
# 2. Vendor schemas
# =============================================================================
class VendorBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = Field(None, max_length=255)
    banking_id: Optional[int] = None


class VendorCreate(VendorBase):
    pass


class VendorUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = Field(None, max_length=255)
    banking_id: Optional[int] = None


class VendorRead(VendorBase, TimestampedRead):
    pass


# =============================================================================
# 3. Warehouse schemas
# =============================================================================
class WarehouseBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    address: Optional[str] = Field(None, max_length=255)
    capacity: Optional[int] = Field(None, ge=0)
    organization_id: Optional[int] = None


class WarehouseCreate(WarehouseBase):
    pass


class WarehouseUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[str] = Field(None, max_length=255)
    capacity: Optional[int] = Field(None, ge=0)
    organization_id: Optional[int] = None


class WarehouseRead(WarehouseBase, TimestampedRead):
    pass


# =============================================================================
# 4. ItemType schemas
# =============================================================================
class ItemTypeBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)


class ItemTypeCreate(ItemTypeBase):
    pass


class ItemTypeUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)


class ItemTypeRead(ItemTypeBase, TimestampedRead):
    pass


# =============================================================================
# 5. CapacityType schemas
# =============================================================================
class CapacityTypeBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    unit: str = Field(..., min_length=1, max_length=20)


class CapacityTypeCreate(CapacityTypeBase):
    pass


class CapacityTypeUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    unit: Optional[str] = Field(None, min_length=1, max_length=20)


class CapacityTypeRead(CapacityTypeBase, TimestampedRead):
    pass


# =============================================================================
# 6. Item schemas
# =============================================================================
class ItemBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=150)
    sku: str = Field(..., min_length=1, max_length=64)
    description: Optional[str] = Field(None, max_length=500)
    item_type_id: Optional[int] = None
    brand_id: Optional[int] = None
    vendor_id: Optional[int] = None
    capacity_type_id: Optional[int] = None
    capacity: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    warehouse_id: Optional[int] = None
    quantity: int = Field(0, ge=0)


class ItemCreate(ItemBase):
    pass


class ItemUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    sku: Optional[str] = Field(None, min_length=1, max_length=64)
    description: Optional[str] = Field(None, max_length=500)
    item_type_id: Optional[int] = None
    brand_id: Optional[int] = None
    vendor_id: Optional[int] = None
    capacity_type_id: Optional[int] = None
    capacity: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    warehouse_id: Optional[int] = None
    quantity: Optional[int] = Field(None, ge=0)


class ItemRead(ItemBase, TimestampedRead):
    pass


# =============================================================================
# 7. Specification schemas
# =============================================================================
class SpecificationBase(SQLModel):
    item_id: int
    name: str = Field(..., min_length=1, max_length=100)
    value: str = Field(..., min_length=1, max_length=255)


class SpecificationCreate(SpecificationBase):
    pass


class SpecificationUpdate(SQLModel):
    item_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    value: Optional[str] = Field(None, min_length=1, max_length=255)


class SpecificationRead(SpecificationBase, TimestampedRead):
    pass


# =============================================================================
# 8. ItemTransfer schemas
# =============================================================================
class ItemTransferBase(SQLModel):
    item_id: int
    from_warehouse_id: int
    to_warehouse_id: int
    quantity: int = Field(..., gt=0)
    transferred_at: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)


class ItemTransferCreate(ItemTransferBase):
    @model_validator(mode="after")
    def check_warehouses(self):
        if self.from_warehouse_id == self.to_warehouse_id:
            raise ValueError("from_warehouse_id and to_warehouse_id must differ")
        return self


class ItemTransferUpdate(SQLModel):
    """Only the bookkeeping fields of a recorded transfer can change."""
    transferred_at: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)


class ItemTransferRead(ItemTransferBase, TimestampedRead):
    pass
