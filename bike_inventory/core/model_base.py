# bike_inventory/core/model_base.py

"""
Columns shared by every table: surrogate key, audit timestamps and the
soft-delete marker. A row with a non-null ``deleted_at`` is soft deleted.
"""

from typing import Optional
from datetime import datetime, UTC

from sqlmodel import Field, SQLModel
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


class IdMixin(SQLModel):
    id: Optional[int] = Field(default=None, primary_key=True, description="Record ID")


class TimestampMixin(SQLModel):
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=TIMESTAMP(timezone=True),
        sa_column_kwargs={"server_default": func.now()},
        description="Creation time",
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=TIMESTAMP(timezone=True),
        sa_column_kwargs={"server_default": func.now(), "onupdate": func.now()},
        description="Last update time",
    )
    deleted_at: Optional[datetime] = Field(
        default=None,
        sa_type=TIMESTAMP(timezone=True),
        nullable=True,
        index=True,
        description="Soft delete time; NULL for active rows",
    )
