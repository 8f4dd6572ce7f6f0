# bike_inventory/domains/ship/models.py

"""
ORM models of the 'ship' domain (shipping agents, shipments).
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel
from sqlalchemy.types import TIMESTAMP

from bike_inventory.core.model_base import IdMixin, TimestampMixin


class ShipmentStatus(str, Enum):
    PENDING = "pending"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    RETURNED = "returned"
    CANCELLED = "cancelled"


# =============================================================================
# 1. shipping_agents table
# =============================================================================
class ShippingAgentBase(SQLModel):
    name: str = Field(max_length=100, description="Agent (courier) name")
    phone: Optional[str] = Field(default=None, max_length=30, description="Contact phone")
    email: Optional[str] = Field(default=None, max_length=100, description="Contact email")
    address: Optional[str] = Field(default=None, max_length=255, description="Postal address")


class ShippingAgent(IdMixin, ShippingAgentBase, TimestampMixin, table=True):
    __tablename__ = "shipping_agents"


# =============================================================================
# 2. shipments table
# =============================================================================
class ShipmentBase(SQLModel):
    tracking_number: str = Field(max_length=100, index=True, description="Carrier tracking number")
    status: ShipmentStatus = Field(default=ShipmentStatus.PENDING, description="Shipment status")
    destination: Optional[str] = Field(default=None, max_length=255, description="Destination address")
    shipping_agent_id: Optional[int] = Field(default=None, foreign_key="shipping_agents.id", description="Shipping agent ID (FK)")
    warehouse_id: Optional[int] = Field(default=None, foreign_key="warehouses.id", description="Source warehouse ID (FK)")
    shipped_at: Optional[datetime] = Field(default=None, sa_type=TIMESTAMP(timezone=True), description="Dispatch time")
    delivered_at: Optional[datetime] = Field(default=None, sa_type=TIMESTAMP(timezone=True), description="Delivery time")


class Shipment(IdMixin, ShipmentBase, TimestampMixin, table=True):
    __tablename__ = "shipments"
