# bike_inventory/core/security.py

"""
Security utilities and authentication dependencies.

- Password hashing and verification (passlib bcrypt).
- JWT access token creation and validation (python-jose).
- Current user lookup through the OAuth2 Password Bearer scheme.
- Role-based authorization: the admin role is the role named ``admin``.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory import API_PREFIX
from bike_inventory.core.config import settings
from bike_inventory.core.database import get_session
from bike_inventory.domains.usr import models as usr_models

logger = logging.getLogger(__name__)

ADMIN_ROLE_NAME = "admin"


# --- Password hashing ---
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


# --- OAuth2 scheme ---
# tokenUrl lets Swagger UI find the login endpoint
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{API_PREFIX}/users/auth/token")


# --- JWT ---
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Creates a signed access token; ``data["sub"]`` carries the username.
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM)


async def get_current_user_from_token(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_session),
) -> usr_models.User:
    """
    Decodes and validates the JWT, then loads the user it names.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY.get_secret_value(), algorithms=[settings.ALGORITHM])
        username: Optional[str] = payload.get("sub")
        if username is None:
            raise credentials_exception
    except JWTError as e:
        logger.info("Rejected token: %s", e)
        raise credentials_exception

    # deactivated users are loaded too so they get "Inactive user" rather than 401
    statement = (
        select(usr_models.User)
        .where(usr_models.User.username == username)
        .order_by(usr_models.User.deleted_at.is_not(None), usr_models.User.id.desc())
    )
    result = await db.execute(statement)
    user = result.scalars().first()
    if user is None:
        raise credentials_exception
    return user


# --- Role-based authorization ---

def get_current_active_user(
    current_user: usr_models.User = Depends(get_current_user_from_token),
) -> usr_models.User:
    """
    Returns the authenticated user; a soft-deleted (deactivated) account gets 400.
    """
    if not current_user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
    return current_user


async def has_admin_role(db: AsyncSession, user: usr_models.User) -> bool:
    if user.role_id is None:
        return False
    role = await db.get(usr_models.Role, user.role_id)
    return role is not None and role.deleted_at is None and role.name == ADMIN_ROLE_NAME


async def get_current_admin_user(
    current_user: usr_models.User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_session),
) -> usr_models.User:
    """
    Returns the authenticated user when it holds the admin role, otherwise 403.
    """
    if not await has_admin_role(db, current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions. Admin role required."
        )
    return current_user
