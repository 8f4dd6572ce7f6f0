# bike_inventory/domains/inv/crud.py

"""
CRUD operations of the 'inv' domain.
"""

from bike_inventory.core.crud_base import CRUDBase, CRUDWithObjectBase
from . import models as inv_models
from . import schemas as inv_schemas


class CRUDBrand(CRUDWithObjectBase[inv_models.Brand, inv_schemas.BrandCreate, inv_schemas.BrandUpdate]):
    def __init__(self):
        super().__init__(model=inv_models.Brand, object_field="logo")


brand = CRUDBrand()


class CRUDVendor(CRUDBase[inv_models.Vendor, inv_schemas.VendorCreate, inv_schemas.VendorUpdate]):
    def __init__(self):
        super().__init__(model=inv_models.Vendor)


vendor = CRUDVendor()


class CRUDWarehouse(CRUDBase[inv_models.Warehouse, inv_schemas.WarehouseCreate, inv_schemas.WarehouseUpdate]):
    def __init__(self):
        super().__init__(model=inv_models.Warehouse)


warehouse = CRUDWarehouse()


class CRUDItemType(CRUDBase[inv_models.ItemType, inv_schemas.ItemTypeCreate, inv_schemas.ItemTypeUpdate]):
    def __init__(self):
        super().__init__(model=inv_models.ItemType)


item_type = CRUDItemType()


class CRUDCapacityType(CRUDBase[inv_models.CapacityType, inv_schemas.CapacityTypeCreate, inv_schemas.CapacityTypeUpdate]):
    def __init__(self):
        super().__init__(model=inv_models.CapacityType)


capacity_type = CRUDCapacityType()


class CRUDItem(CRUDBase[inv_models.Item, inv_schemas.ItemCreate, inv_schemas.ItemUpdate]):
    def __init__(self):
        super().__init__(model=inv_models.Item)


item = CRUDItem()


class CRUDSpecification(CRUDBase[inv_models.Specification, inv_schemas.SpecificationCreate, inv_schemas.SpecificationUpdate]):
    def __init__(self):
        super().__init__(model=inv_models.Specification)


specification = CRUDSpecification()


class CRUDItemTransfer(CRUDBase[inv_models.ItemTransfer, inv_schemas.ItemTransferCreate, inv_schemas.ItemTransferUpdate]):
    def __init__(self):
        super().__init__(model=inv_models.ItemTransfer)


item_transfer = CRUDItemTransfer()
