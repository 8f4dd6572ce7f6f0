# bike_inventory/domains/ref/models.py

"""
ORM models of the 'ref' domain: reference data shared by the other domains
(countries, cities, record statuses).
"""

from typing import Optional

from sqlmodel import Field, SQLModel

from bike_inventory.core.model_base import IdMixin, TimestampMixin


# =============================================================================
# 1. countries table
# =============================================================================
class CountryBase(SQLModel):
    name: str = Field(max_length=100, index=True, description="Country name")
    code: str = Field(max_length=3, index=True, description="ISO 3166 alpha-2 or alpha-3 code")


class Country(IdMixin, CountryBase, TimestampMixin, table=True):
    __tablename__ = "countries"


# =============================================================================
# 2. cities table
# =============================================================================
class CityBase(SQLModel):
    name: str = Field(max_length=100, index=True, description="City name")
    country_id: int = Field(foreign_key="countries.id", index=True, description="Country ID (FK)")


class City(IdMixin, CityBase, TimestampMixin, table=True):
    __tablename__ = "cities"


# =============================================================================
# 3. status table
# =============================================================================
class StatusBase(SQLModel):
    name: str = Field(max_length=50, index=True, description="Status name, e.g. 'active'")
    description: Optional[str] = Field(default=None, max_length=255, description="Status description")


class Status(IdMixin, StatusBase, TimestampMixin, table=True):
    __tablename__ = "status"
