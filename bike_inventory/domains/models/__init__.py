# bike_inventory/domains/models/__init__.py

"""
Imports every domain's SQLModel models in one place so that
SQLModel.metadata knows all tables (create_all, Alembic autogenerate).
"""

# usr (Role, Permission, User)
from bike_inventory.domains.usr.models import Role, Permission, User

# ref (Country, City, Status)
from bike_inventory.domains.ref.models import Country, City, Status

# org (BankingDetail, Organization, EntityBanking)
from bike_inventory.domains.org.models import BankingDetail, Organization, EntityType, EntityBanking

# inv (Brand, Vendor, Warehouse, ItemType, CapacityType, Item, Specification, ItemTransfer)
from bike_inventory.domains.inv.models import (
    Brand, Vendor, Warehouse, ItemType, CapacityType, Item, Specification, ItemTransfer,
)

# sal (Customer, Dealer, Dealership, Sale)
from bike_inventory.domains.sal.models import Customer, Dealer, Dealership, Sale

# pay (Payment, Instrument, InstallmentPlan, Installment, PaymentDetail)
from bike_inventory.domains.pay.models import (
    Payment, PaymentMethod, Instrument, InstallmentPlan, InstallmentStatus, Installment, PaymentDetail,
)

# ship (ShippingAgent, Shipment)
from bike_inventory.domains.ship.models import ShippingAgent, ShipmentStatus, Shipment


# (model, object reference column, storage collection) of every image-owning table
OBJECT_REFERENCES = [
    (User, "profile_image", "users"),
    (Organization, "logo", "organizations"),
    (Brand, "logo", "brands"),
    (Instrument, "picture", "instruments"),
]

__all__ = [
    "Role", "Permission", "User",
    "Country", "City", "Status",
    "BankingDetail", "Organization", "EntityType", "EntityBanking",
    "Brand", "Vendor", "Warehouse", "ItemType", "CapacityType", "Item", "Specification", "ItemTransfer",
    "Customer", "Dealer", "Dealership", "Sale",
    "Payment", "PaymentMethod", "Instrument", "InstallmentPlan", "InstallmentStatus", "Installment", "PaymentDetail",
    "ShippingAgent", "ShipmentStatus", "Shipment",
    "OBJECT_REFERENCES",
]
