# bike_inventory/domains/sal/crud.py

"""
CRUD operations of the 'sal' domain.
"""

from bike_inventory.core.crud_base import CRUDBase
from . import models as sal_models
from . import schemas as sal_schemas


class CRUDCustomer(CRUDBase[sal_models.Customer, sal_schemas.CustomerCreate, sal_schemas.CustomerUpdate]):
    def __init__(self):
        super().__init__(model=sal_models.Customer)


customer = CRUDCustomer()


class CRUDDealer(CRUDBase[sal_models.Dealer, sal_schemas.DealerCreate, sal_schemas.DealerUpdate]):
    def __init__(self):
        super().__init__(model=sal_models.Dealer)


dealer = CRUDDealer()


class CRUDDealership(CRUDBase[sal_models.Dealership, sal_schemas.DealershipCreate, sal_schemas.DealershipUpdate]):
    def __init__(self):
        super().__init__(model=sal_models.Dealership)


dealership = CRUDDealership()


class CRUDSale(CRUDBase[sal_models.Sale, sal_schemas.SaleCreate, sal_schemas.SaleUpdate]):
    def __init__(self):
        super().__init__(model=sal_models.Sale)


sale = CRUDSale()
