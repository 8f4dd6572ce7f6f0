# bike_inventory/domains/ref/crud.py

"""
CRUD operations of the 'ref' domain.
"""

from bike_inventory.core.crud_base import CRUDBase
from . import models as ref_models
from . import schemas as ref_schemas


class CRUDCountry(CRUDBase[ref_models.Country, ref_schemas.CountryCreate, ref_schemas.CountryUpdate]):
    def __init__(self):
        super().__init__(model=ref_models.Country)


country = CRUDCountry()


class CRUDCity(CRUDBase[ref_models.City, ref_schemas.CityCreate, ref_schemas.CityUpdate]):
    def __init__(self):
        super().__init__(model=ref_models.City)


city = CRUDCity()


class CRUDStatus(CRUDBase[ref_models.Status, ref_schemas.StatusCreate, ref_schemas.StatusUpdate]):
    def __init__(self):
        super().__init__(model=ref_models.Status)


status = CRUDStatus()
