# bike_inventory/domains/usr/models.py

"""
ORM models of the 'usr' domain (roles, users, role permissions).

Soft-deleted users are deactivated accounts: ``is_active`` is derived
from ``deleted_at``.
"""

from typing import Optional
from datetime import datetime

from sqlmodel import Field, SQLModel
from sqlalchemy.types import TIMESTAMP

from bike_inventory.core.model_base import IdMixin, TimestampMixin


# =============================================================================
# 1. roles table
# =============================================================================
class RoleBase(SQLModel):
    name: str = Field(max_length=50, index=True, description="Role name ('admin' grants management rights)")
    description: Optional[str] = Field(default=None, max_length=255, description="Role description")


class Role(IdMixin, RoleBase, TimestampMixin, table=True):
    __tablename__ = "roles"


# =============================================================================
# 2. users table
# =============================================================================
class UserBase(SQLModel):
    username: str = Field(max_length=50, index=True, description="Login name")
    email: str = Field(max_length=100, index=True, description="Email address")
    phone: Optional[str] = Field(default=None, max_length=30, description="Phone number")
    address: Optional[str] = Field(default=None, max_length=255, description="Postal address")
    role_id: Optional[int] = Field(default=None, foreign_key="roles.id", description="Role ID (FK)")
    employed_at: Optional[datetime] = Field(default=None, sa_type=TIMESTAMP(timezone=True), description="Employment start")
    banking_id: Optional[int] = Field(default=None, foreign_key="banking_details.id", description="Banking detail ID (FK)")


class User(IdMixin, UserBase, TimestampMixin, table=True):
    __tablename__ = "users"

    profile_image: Optional[str] = Field(default=None, max_length=1024, description="Profile image object URL")
    password_hash: str = Field(max_length=255, description="bcrypt password hash")
    last_login: Optional[datetime] = Field(default=None, sa_type=TIMESTAMP(timezone=True), description="Last successful login")

    @property
    def is_active(self) -> bool:
        return self.deleted_at is None


# =============================================================================
# 3. permissions table
# =============================================================================
class PermissionBase(SQLModel):
    name: str = Field(max_length=100, index=True, description="Permission code, e.g. 'items:write'")
    description: Optional[str] = Field(default=None, max_length=255, description="Permission description")
    role_id: int = Field(foreign_key="roles.id", index=True, description="Role granted the permission (FK)")


class Permission(IdMixin, PermissionBase, TimestampMixin, table=True):
    __tablename__ = "permissions"
