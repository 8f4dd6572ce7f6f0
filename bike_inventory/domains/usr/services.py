# bike_inventory/domains/usr/services.py

"""
Business logic of the 'usr' domain.

Besides the generic resource operations, users support login, username
search, password changes and (admin only) activation/deactivation.
Users may edit their own account; editing others, changing a role and
creating or deleting accounts take the admin role.
Deactivation sets ``deleted_at`` but keeps the profile image; DELETE also
removes the image.
"""

from datetime import timedelta
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core.config import settings
from bike_inventory.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from bike_inventory.core.schemas import ApiResponse
from bike_inventory.core.security import ADMIN_ROLE_NAME, create_access_token, has_admin_role, verify_password
from bike_inventory.core.service_base import ResourceService
from bike_inventory.core.storage import ObjectStorage, UploadedObject
from bike_inventory.domains.org import crud as org_crud
from . import crud as usr_crud
from . import models as usr_models
from . import schemas as usr_schemas


class RoleService(ResourceService[usr_schemas.RoleRead, usr_schemas.RoleCreate, usr_schemas.RoleUpdate]):
    unique_fields = ("name",)

    async def validate(self, db: AsyncSession, obj_in: BaseModel, current: Any = None) -> None:
        await super().validate(db, obj_in, current)
        # admin rights hang on the role name
        if current is not None and current.name == ADMIN_ROLE_NAME and obj_in.name not in (None, ADMIN_ROLE_NAME):
            raise BadRequestError("The admin role cannot be renamed")

    async def delete(self, db: AsyncSession, storage: ObjectStorage, id: int) -> ApiResponse:
        db_role = await self.get_or_404(db, id)
        if db_role.name == ADMIN_ROLE_NAME:
            raise BadRequestError("The admin role cannot be deleted")
        return await super().delete(db, storage, id)


role_service = RoleService(
    usr_crud.role,
    read_schema=usr_schemas.RoleRead,
    create_schema=usr_schemas.RoleCreate,
    update_schema=usr_schemas.RoleUpdate,
    label="Role",
    plural="roles",
)


class UserService(ResourceService[usr_schemas.UserRead, usr_schemas.UserCreate, usr_schemas.UserUpdate]):
    references = {"role_id": usr_crud.role, "banking_id": org_crud.banking_detail}
    unique_fields = ("username", "email")

    # =========================================================================
    # Authentication
    # =========================================================================
    async def login(self, db: AsyncSession, *, username: str, password: str) -> usr_schemas.Token:
        user = await usr_crud.user.authenticate(db, username=username, password=password)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect username or password",
                headers={"WWW-Authenticate": "Bearer"},
            )
        if not user.is_active:
            raise BadRequestError("Inactive user")

        await usr_crud.user.record_login(db, db_obj=user)
        access_token = create_access_token(
            data={"sub": user.username},
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )
        return usr_schemas.Token(access_token=access_token, token_type="bearer")

    async def me(self, storage: ObjectStorage, current_user: usr_models.User) -> ApiResponse:
        return ApiResponse.ok("User retrieved successfully", await self.to_read(storage, current_user))

    # =========================================================================
    # Account management
    # =========================================================================
    async def update_account(
        self,
        db: AsyncSession,
        storage: ObjectStorage,
        id: int,
        data: Dict[str, Any],
        current_user: usr_models.User,
        upload: Optional[UploadedObject] = None,
    ) -> ApiResponse:
        """
        Users update their own account; admins update anyone's.
        Only admins may set ``role_id``.
        """
        async with storage.compensating(upload):
            self.check_id(id)
            is_admin = await has_admin_role(db, current_user)
            if id != current_user.id and not is_admin:
                raise ForbiddenError("Not enough permissions to update other user's information.")
            if "role_id" in data and not is_admin:
                raise ForbiddenError("Only admins can change a user's role.")
        return await self.update(db, storage, id, data, upload)

    async def delete_account(
        self,
        db: AsyncSession,
        storage: ObjectStorage,
        id: int,
        current_user: usr_models.User,
    ) -> ApiResponse:
        if self.check_id(id) == current_user.id:
            raise BadRequestError("Cannot delete your own account")
        return await self.delete(db, storage, id)

    # =========================================================================
    # Search
    # =========================================================================
    async def search(
        self,
        db: AsyncSession,
        storage: ObjectStorage,
        *,
        username: str,
        exact: bool = False,
        skip: int = 0,
        limit: int = 100,
    ) -> ApiResponse:
        if not username.strip():
            raise BadRequestError("Username query is required")
        users = await usr_crud.user.search_by_username(db, username=username.strip(), exact=exact, skip=skip, limit=limit)
        records = [await self.to_read(storage, user) for user in users]
        return ApiResponse.ok("Users retrieved successfully", {self.plural: records})

    # =========================================================================
    # Password and status
    # =========================================================================
    async def change_password(
        self,
        db: AsyncSession,
        id: int,
        data: Dict[str, Any],
        current_user: usr_models.User,
    ) -> ApiResponse:
        db_user = await self.get_or_404(db, id)
        is_admin = await has_admin_role(db, current_user)
        if db_user.id != current_user.id and not is_admin:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enough permissions to change another user's password.",
            )
        obj_in = self.parse(usr_schemas.PasswordChange, data)
        # admins resetting someone else's password skip the current-password check
        if db_user.id == current_user.id and not verify_password(obj_in.current_password, db_user.password_hash):
            raise BadRequestError("Current password is incorrect")

        await usr_crud.user.set_password(db, db_obj=db_user, password=obj_in.new_password)
        return ApiResponse.ok("Password updated successfully", {"message": "Password updated successfully"})

    async def set_status(
        self,
        db: AsyncSession,
        storage: ObjectStorage,
        id: int,
        data: Dict[str, Any],
        current_user: usr_models.User,
    ) -> ApiResponse:
        self.check_id(id)
        obj_in = self.parse(usr_schemas.UserStatusUpdate, data)
        db_user = await usr_crud.user.get(db, id, include_deleted=True)
        if db_user is None:
            raise NotFoundError("User not found")

        if obj_in.is_active and not db_user.is_active:
            # the username/email may have been taken while the account was inactive
            await self.ensure_unique(db, usr_schemas.UserUpdate(username=db_user.username, email=db_user.email), db_user)
            db_user = await usr_crud.user.restore(db, db_obj=db_user)
        elif not obj_in.is_active and db_user.is_active:
            if db_user.id == current_user.id:
                raise BadRequestError("Cannot deactivate your own account")
            db_user = await usr_crud.user.soft_delete(db, db_obj=db_user)

        state = "activated" if db_user.is_active else "deactivated"
        return ApiResponse.ok(f"User {state} successfully", await self.to_read(storage, db_user))


user_service = UserService(
    usr_crud.user,
    read_schema=usr_schemas.UserRead,
    create_schema=usr_schemas.UserCreate,
    update_schema=usr_schemas.UserUpdate,
    label="User",
    plural="users",
)


class PermissionService(
    ResourceService[usr_schemas.PermissionRead, usr_schemas.PermissionCreate, usr_schemas.PermissionUpdate]
):
    references = {"role_id": usr_crud.role}
    # a permission name is unique within its role
    unique_together = (("name", "role_id"),)


permission_service = PermissionService(
    usr_crud.permission,
    read_schema=usr_schemas.PermissionRead,
    create_schema=usr_schemas.PermissionCreate,
    update_schema=usr_schemas.PermissionUpdate,
    label="Permission",
    plural="permissions",
)
