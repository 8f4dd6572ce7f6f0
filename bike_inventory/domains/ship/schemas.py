# bike_inventory/domains/ship/schemas.py

"""
API data transfer objects of the 'ship' domain.
"""

from typing import Optional
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field
from pydantic import EmailStr, model_validator

from bike_inventory.core.schemas import TimestampedRead
from .models import ShipmentStatus


# =============================================================================
# 1. ShippingAgent schemas
# =============================================================================
class ShippingAgentBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=255)


class ShippingAgentCreate(ShippingAgentBase):
    pass


class ShippingAgentUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=255)


class ShippingAgentRead(ShippingAgentBase, TimestampedRead):
    pass


# =============================================================================
# 2. Shipment schemas
# =============================================================================
class ShipmentBase(SQLModel):
    tracking_number: str = Field(..., min_length=1, max_length=100)
    status: ShipmentStatus = ShipmentStatus.PENDING
    destination: Optional[str] = Field(None, max_length=255)
    shipping_agent_id: Optional[int] = None
    warehouse_id: Optional[int] = None
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None


def as_aware(value: datetime) -> datetime:
    """Naive datetimes (SQLite, clients without offset) are taken as UTC."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class ShipmentCreate(ShipmentBase):
    @model_validator(mode="after")
    def check_dates(self):
        if self.shipped_at and self.delivered_at and as_aware(self.delivered_at) < as_aware(self.shipped_at):
            raise ValueError("delivered_at must not be earlier than shipped_at")
        return self


class ShipmentUpdate(SQLModel):
    tracking_number: Optional[str] = Field(None, min_length=1, max_length=100)
    status: Optional[ShipmentStatus] = None
    destination: Optional[str] = Field(None, max_length=255)
    shipping_agent_id: Optional[int] = None
    warehouse_id: Optional[int] = None
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None


class ShipmentRead(ShipmentBase, TimestampedRead):
    pass
