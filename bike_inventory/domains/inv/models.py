# bike_inventory/domains/inv/models.py

"""
ORM models of the 'inv' domain (brands, vendors, warehouses, item types,
capacity types, items, specifications, item transfers).
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import Field, SQLModel
from sqlalchemy.types import TIMESTAMP

from bike_inventory.core.model_base import IdMixin, TimestampMixin


# =============================================================================
# 1. brand table
# =============================================================================
class BrandBase(SQLModel):
    name: str = Field(max_length=100, index=True, description="Brand name")
    website: Optional[str] = Field(default=None, max_length=255, description="Website URL")


class Brand(IdMixin, BrandBase, TimestampMixin, table=True):
    __tablename__ = "brand"

    logo: Optional[str] = Field(default=None, max_length=1024, description="Logo object URL")


# =============================================================================
# 2. vendor table
# =============================================================================
class VendorBase(SQLModel):
    name: str = Field(max_length=100, index=True, description="Vendor name")
    email: Optional[str] = Field(default=None, max_length=100, description="Contact email")
    phone: Optional[str] = Field(default=None, max_length=30, description="Contact phone")
    address: Optional[str] = Field(default=None, max_length=255, description="Postal address")
    banking_id: Optional[int] = Field(default=None, foreign_key="banking_details.id", description="Banking detail ID (FK)")


class Vendor(IdMixin, VendorBase, TimestampMixin, table=True):
    __tablename__ = "vendor"


# =============================================================================
# 3. warehouses table
# =============================================================================
class WarehouseBase(SQLModel):
    name: str = Field(max_length=100, description="Warehouse name")
    address: Optional[str] = Field(default=None, max_length=255, description="Postal address")
    capacity: Optional[int] = Field(default=None, ge=0, description="Storage capacity (units)")
    organization_id: Optional[int] = Field(default=None, foreign_key="organization.id", description="Owning organization ID (FK)")


class Warehouse(IdMixin, WarehouseBase, TimestampMixin, table=True):
    __tablename__ = "warehouses"


# =============================================================================
# 4. item_types table
# =============================================================================
class ItemTypeBase(SQLModel):
    name: str = Field(max_length=100, index=True, description="Item type, e.g. 'bicycle', 'spare part'")
    description: Optional[str] = Field(default=None, max_length=255, description="Description")


class ItemType(IdMixin, ItemTypeBase, TimestampMixin, table=True):
    __tablename__ = "item_types"


# =============================================================================
# 5. capacity_types table
# =============================================================================
class CapacityTypeBase(SQLModel):
    name: str = Field(max_length=100, index=True, description="Capacity type, e.g. 'engine displacement'")
    unit: str = Field(max_length=20, description="Unit of measure, e.g. 'cc', 'kWh'")


class CapacityType(IdMixin, CapacityTypeBase, TimestampMixin, table=True):
    __tablename__ = "capacity_types"


# =============================================================================
# 6. items table
# =============================================================================
class ItemBase(SQLModel):
    name: str = Field(max_length=150, index=True, description="Item name (model)")
    sku: str = Field(max_length=64, index=True, description="Stock keeping unit")
    description: Optional[str] = Field(default=None, max_length=500, description="Description")
    item_type_id: Optional[int] = Field(default=None, foreign_key="item_types.id", description="Item type ID (FK)")
    brand_id: Optional[int] = Field(default=None, foreign_key="brand.id", description="Brand ID (FK)")
    vendor_id: Optional[int] = Field(default=None, foreign_key="vendor.id", description="Vendor ID (FK)")
    capacity_type_id: Optional[int] = Field(default=None, foreign_key="capacity_types.id", description="Capacity type ID (FK)")
    capacity: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2, description="Capacity in the capacity type's unit")
    price: Decimal = Field(max_digits=12, decimal_places=2, description="Unit sale price")
    warehouse_id: Optional[int] = Field(default=None, foreign_key="warehouses.id", description="Stocking warehouse ID (FK)")
    quantity: int = Field(default=0, description="Units in stock")


class Item(IdMixin, ItemBase, TimestampMixin, table=True):
    __tablename__ = "items"


# =============================================================================
# 7. specifications table
# =============================================================================
class SpecificationBase(SQLModel):
    item_id: int = Field(foreign_key="items.id", index=True, description="Item ID (FK)")
    name: str = Field(max_length=100, description="Specification name, e.g. 'frame size'")
    value: str = Field(max_length=255, description="Specification value")


class Specification(IdMixin, SpecificationBase, TimestampMixin, table=True):
    __tablename__ = "specifications"


# =============================================================================
# 8. item_transfers table
# =============================================================================
class ItemTransferBase(SQLModel):
    item_id: int = Field(foreign_key="items.id", index=True, description="Transferred item ID (FK)")
    from_warehouse_id: int = Field(foreign_key="warehouses.id", description="Source warehouse ID (FK)")
    to_warehouse_id: int = Field(foreign_key="warehouses.id", description="Destination warehouse ID (FK)")
    quantity: int = Field(description="Transferred units")
    transferred_at: Optional[datetime] = Field(default=None, sa_type=TIMESTAMP(timezone=True), description="Transfer time")
    notes: Optional[str] = Field(default=None, max_length=500, description="Notes")


class ItemTransfer(IdMixin, ItemTransferBase, TimestampMixin, table=True):
    __tablename__ = "item_transfers"
