# bike_inventory/domains/ship/services.py

"""
Business logic of the 'ship' domain.
"""

from typing import Any

from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core.exceptions import BadRequestError
from bike_inventory.core.service_base import ResourceService
from bike_inventory.domains.inv import crud as inv_crud
from . import crud as ship_crud
from . import schemas as ship_schemas


shipping_agent_service = ResourceService(
    ship_crud.shipping_agent,
    read_schema=ship_schemas.ShippingAgentRead,
    create_schema=ship_schemas.ShippingAgentCreate,
    update_schema=ship_schemas.ShippingAgentUpdate,
    label="Shipping agent",
    plural="shipping_agents",
)


class ShipmentService(ResourceService[ship_schemas.ShipmentRead, ship_schemas.ShipmentCreate, ship_schemas.ShipmentUpdate]):
    references = {
        "shipping_agent_id": ship_crud.shipping_agent,
        "warehouse_id": inv_crud.warehouse,
    }
    unique_fields = ("tracking_number",)

    async def validate(self, db: AsyncSession, obj_in: BaseModel, current: Any = None) -> None:
        await super().validate(db, obj_in, current)
        if current is None:
            return
        # partial update: compare against the stored value for the side not sent
        shipped_at = obj_in.shipped_at if "shipped_at" in obj_in.model_fields_set else current.shipped_at
        delivered_at = obj_in.delivered_at if "delivered_at" in obj_in.model_fields_set else current.delivered_at
        if shipped_at and delivered_at and ship_schemas.as_aware(delivered_at) < ship_schemas.as_aware(shipped_at):
            raise BadRequestError("delivered_at must not be earlier than shipped_at")


shipment_service = ShipmentService(
    ship_crud.shipment,
    read_schema=ship_schemas.ShipmentRead,
    create_schema=ship_schemas.ShipmentCreate,
    update_schema=ship_schemas.ShipmentUpdate,
    label="Shipment",
    plural="shipments",
)
