# bike_inventory/domains/usr/schemas.py

"""
API data transfer objects of the 'usr' domain.
Responses use the '...Read' pattern shared by every domain.
"""

from typing import Optional
from datetime import datetime

from sqlmodel import SQLModel, Field
from pydantic import EmailStr

from bike_inventory.core.schemas import TimestampedRead


# =============================================================================
# 1. Role schemas
# =============================================================================
class RoleBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=255)


class RoleCreate(RoleBase):
    pass


class RoleUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=255)


class RoleRead(RoleBase, TimestampedRead):
    pass


# =============================================================================
# 2. User schemas
# =============================================================================
class UserBase(SQLModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = Field(None, max_length=255)
    role_id: Optional[int] = None
    employed_at: Optional[datetime] = None
    banking_id: Optional[int] = None


class UserCreate(UserBase):
    password: str = Field(..., min_length=6, max_length=128)


class UserUpdate(SQLModel):
    username: Optional[str] = Field(None, min_length=3, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = Field(None, max_length=255)
    role_id: Optional[int] = None
    employed_at: Optional[datetime] = None
    banking_id: Optional[int] = None


class UserRead(UserBase, TimestampedRead):
    profile_image: Optional[str] = None
    profile_image_presigned_url: Optional[str] = None
    last_login: Optional[datetime] = None
    is_active: bool = True


class PasswordChange(SQLModel):
    current_password: str
    new_password: str = Field(..., min_length=6, max_length=128)


class UserStatusUpdate(SQLModel):
    is_active: bool


# =============================================================================
# 3. Token schemas
# =============================================================================
class Token(SQLModel):
    access_token: str
    token_type: str = "bearer"


# =============================================================================
# 4. Permission schemas
# =============================================================================
class PermissionBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    role_id: int


class PermissionCreate(PermissionBase):
    pass


class PermissionUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    role_id: Optional[int] = None


class PermissionRead(PermissionBase, TimestampedRead):
    pass
