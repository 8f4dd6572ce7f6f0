# bike_inventory/domains/usr/crud.py

"""
CRUD operations of the 'usr' domain.
"""

from typing import List, Optional
from datetime import datetime, UTC

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core.crud_base import CRUDBase, CRUDWithObjectBase
from bike_inventory.core.security import get_password_hash, verify_password
from . import models as usr_models
from . import schemas as usr_schemas


# =============================================================================
# 1. roles
# =============================================================================
class CRUDRole(CRUDBase[usr_models.Role, usr_schemas.RoleCreate, usr_schemas.RoleUpdate]):
    def __init__(self):
        super().__init__(model=usr_models.Role)

    async def get_by_name(self, db: AsyncSession, *, name: str) -> Optional[usr_models.Role]:
        return await self.get_by_attribute(db, attribute="name", value=name)


role = CRUDRole()


class CRUDPermission(CRUDBase[usr_models.Permission, usr_schemas.PermissionCreate, usr_schemas.PermissionUpdate]):
    def __init__(self):
        super().__init__(model=usr_models.Permission)


permission = CRUDPermission()


# =============================================================================
# 2. users
# =============================================================================
class CRUDUser(CRUDWithObjectBase[usr_models.User, usr_schemas.UserCreate, usr_schemas.UserUpdate]):
    def __init__(self):
        super().__init__(model=usr_models.User, object_field="profile_image")

    async def get_by_username(
        self, db: AsyncSession, *, username: str, include_deleted: bool = False
    ) -> Optional[usr_models.User]:
        return await self.get_by_attribute(db, attribute="username", value=username, include_deleted=include_deleted)

    async def create(self, db: AsyncSession, *, obj_in: usr_schemas.UserCreate, **extra) -> usr_models.User:
        """Creates the user; only the bcrypt hash of the password is stored."""
        user_data = obj_in.model_dump(exclude={"password"})
        user_data.update(extra)
        user_data["password_hash"] = get_password_hash(obj_in.password)
        return await self._commit(db, self.model.model_validate(user_data))

    async def search_by_username(
        self, db: AsyncSession, *, username: str, exact: bool = False, skip: int = 0, limit: int = 100
    ) -> List[usr_models.User]:
        """Active users whose username matches exactly or contains ``username`` (case-insensitive)."""
        column = self.model.username
        condition = column == username if exact else column.icontains(username, autoescape=True)
        statement = self._active(select(self.model)).where(condition).order_by(self.model.id).offset(skip).limit(limit)
        result = await db.execute(statement)
        return result.scalars().all()

    async def authenticate(self, db: AsyncSession, *, username: str, password: str) -> Optional[usr_models.User]:
        """Checks the credentials; deactivated users are returned so the caller can report them."""
        user = await self.get_by_username(db, username=username)
        if user is None:
            user = await self.get_by_username(db, username=username, include_deleted=True)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    async def record_login(self, db: AsyncSession, *, db_obj: usr_models.User) -> usr_models.User:
        db_obj.last_login = datetime.now(UTC)
        return await self._commit(db, db_obj)

    async def set_password(self, db: AsyncSession, *, db_obj: usr_models.User, password: str) -> usr_models.User:
        db_obj.password_hash = get_password_hash(password)
        return await self._commit(db, db_obj)


user = CRUDUser()
