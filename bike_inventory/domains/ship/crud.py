# bike_inventory/domains/ship/crud.py

"""
CRUD operations of the 'ship' domain.
"""

from bike_inventory.core.crud_base import CRUDBase
from . import models as ship_models
from . import schemas as ship_schemas


class CRUDShippingAgent(CRUDBase[ship_models.ShippingAgent, ship_schemas.ShippingAgentCreate, ship_schemas.ShippingAgentUpdate]):
    def __init__(self):
        super().__init__(model=ship_models.ShippingAgent)


shipping_agent = CRUDShippingAgent()


class CRUDShipment(CRUDBase[ship_models.Shipment, ship_schemas.ShipmentCreate, ship_schemas.ShipmentUpdate]):
    def __init__(self):
        super().__init__(model=ship_models.Shipment)


shipment = CRUDShipment()
