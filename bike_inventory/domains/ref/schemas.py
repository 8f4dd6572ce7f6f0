# bike_inventory/domains/ref/schemas.py

"""
API data transfer objects of the 'ref' domain.
"""

from typing import Optional

from sqlmodel import SQLModel, Field
from pydantic import field_validator

from bike_inventory.core.schemas import TimestampedRead


# =============================================================================
# 1. Country schemas
# =============================================================================
def normalize_country_code(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip().upper()
    if not value.isalpha() or len(value) not in (2, 3):
        raise ValueError("code must be a 2 or 3 letter ISO country code")
    return value


class CountryBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    code: str


class CountryCreate(CountryBase):
    @field_validator("code")
    @classmethod
    def check_code(cls, value: str) -> str:
        return normalize_country_code(value)


class CountryUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    code: Optional[str] = None

    @field_validator("code")
    @classmethod
    def check_code(cls, value: Optional[str]) -> Optional[str]:
        return normalize_country_code(value)


class CountryRead(CountryBase, TimestampedRead):
    pass


# =============================================================================
# 2. City schemas
# =============================================================================
class CityBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    country_id: int


class CityCreate(CityBase):
    pass


class CityUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    country_id: Optional[int] = None


class CityRead(CityBase, TimestampedRead):
    pass


# =============================================================================
# 3. Status schemas
# =============================================================================
class StatusBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=255)


class StatusCreate(StatusBase):
    pass


class StatusUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=255)


class StatusRead(StatusBase, TimestampedRead):
    pass
