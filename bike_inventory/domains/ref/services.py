# bike_inventory/domains/ref/services.py

"""
Business logic of the 'ref' domain.
"""

from bike_inventory.core.service_base import ResourceService
from . import crud as ref_crud
from . import schemas as ref_schemas


class CountryService(ResourceService[ref_schemas.CountryRead, ref_schemas.CountryCreate, ref_schemas.CountryUpdate]):
    unique_fields = ("name", "code")


country_service = CountryService(
    ref_crud.country,
    read_schema=ref_schemas.CountryRead,
    create_schema=ref_schemas.CountryCreate,
    update_schema=ref_schemas.CountryUpdate,
    label="Country",
    plural="countries",
)


class CityService(ResourceService[ref_schemas.CityRead, ref_schemas.CityCreate, ref_schemas.CityUpdate]):
    references = {"country_id": ref_crud.country}
    unique_together = (("name", "country_id"),)


city_service = CityService(
    ref_crud.city,
    read_schema=ref_schemas.CityRead,
    create_schema=ref_schemas.CityCreate,
    update_schema=ref_schemas.CityUpdate,
    label="City",
    plural="cities",
)


class StatusService(ResourceService[ref_schemas.StatusRead, ref_schemas.StatusCreate, ref_schemas.StatusUpdate]):
    unique_fields = ("name",)


status_service = StatusService(
    ref_crud.status,
    read_schema=ref_schemas.StatusRead,
    create_schema=ref_schemas.StatusCreate,
    update_schema=ref_schemas.StatusUpdate,
    label="Status",
    plural="statuses",
)
