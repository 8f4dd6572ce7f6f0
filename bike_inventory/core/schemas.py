# bike_inventory/core/schemas.py

"""
Shared response schemas.
"""

from typing import Generic, Optional, TypeVar
from datetime import datetime

from pydantic import BaseModel
from sqlmodel import SQLModel

PayloadType = TypeVar("PayloadType")


class ApiResponse(BaseModel, Generic[PayloadType]):
    """Success envelope returned by every resource endpoint."""
    status: str = "success"
    code: int = 200
    message: str
    payload: Optional[PayloadType] = None

    @classmethod
    def ok(cls, message: str, payload: Optional[PayloadType] = None, code: int = 200) -> "ApiResponse[PayloadType]":
        return cls(status="success", code=code, message=message, payload=payload)


class MessagePayload(BaseModel):
    message: str


class TimestampedRead(SQLModel):
    """Columns common to every read schema; SQLModel reads ORM attributes."""

    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None


class ServiceStatus(BaseModel):
    status: str
    timestamp: datetime
    service: str
