# bike_inventory/domains/usr/routers.py

"""
API endpoints of the 'usr' domain (authentication, roles, users).
Role and permission management, account creation, deletion and
activation require the admin role.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core import dependencies as deps
from bike_inventory.core.schemas import ApiResponse, MessagePayload
from bike_inventory.core.storage import ObjectStorage, UploadedObject
from bike_inventory.core.uploads import ImageUpload

from . import models as usr_models
from . import schemas as usr_schemas
from .services import permission_service, role_service, user_service


router = APIRouter(
    tags=["Users & Roles"],
    responses={404: {"description": "Not found"}},
)

profile_image_upload = ImageUpload(field="profile_image", collection="users", prefix="user", name_field="username")


# =============================================================================
# 1. Authentication endpoints
# =============================================================================
@router.post("/users/auth/token", response_model=usr_schemas.Token, summary="Obtain an access token")
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(deps.get_db_session),
):
    return await user_service.login(db, username=form_data.username, password=form_data.password)


@router.get("/users/auth/me", response_model=ApiResponse[usr_schemas.UserRead], summary="Current user")
async def read_users_me(
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await user_service.me(storage, current_user)


# =============================================================================
# 2. Role endpoints
# =============================================================================
@router.get("/roles", response_model=ApiResponse[Dict[str, List[usr_schemas.RoleRead]]], summary="List roles")
async def read_roles(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await role_service.list(db, storage, skip=skip, limit=limit)


@router.get("/roles/{role_id}", response_model=ApiResponse[usr_schemas.RoleRead], summary="Get a role")
async def read_role(
    role_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await role_service.get(db, storage, role_id)


@router.post("/roles", response_model=ApiResponse[usr_schemas.RoleRead], status_code=status.HTTP_201_CREATED, summary="Create a role")
async def create_role(
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await role_service.create(db, storage, data)


@router.put("/roles/{role_id}", response_model=ApiResponse[usr_schemas.RoleRead], summary="Update a role")
async def update_role(
    role_id: int,
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await role_service.update(db, storage, role_id, data)


@router.delete("/roles/{role_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a role")
async def delete_role(
    role_id: int,
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await role_service.delete(db, storage, role_id)


# =============================================================================
# 3. Permission endpoints
# =============================================================================
@router.get("/permissions", response_model=ApiResponse[Dict[str, List[usr_schemas.PermissionRead]]], summary="List permissions")
async def read_permissions(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await permission_service.list(db, storage, skip=skip, limit=limit)


@router.get("/permissions/{permission_id}", response_model=ApiResponse[usr_schemas.PermissionRead], summary="Get a permission")
async def read_permission(
    permission_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await permission_service.get(db, storage, permission_id)


@router.post("/permissions", response_model=ApiResponse[usr_schemas.PermissionRead], status_code=status.HTTP_201_CREATED, summary="Grant a permission to a role")
async def create_permission(
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await permission_service.create(db, storage, data)


@router.put("/permissions/{permission_id}", response_model=ApiResponse[usr_schemas.PermissionRead], summary="Update a permission")
async def update_permission(
    permission_id: int,
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await permission_service.update(db, storage, permission_id, data)


@router.delete("/permissions/{permission_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a permission")
async def delete_permission(
    permission_id: int,
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await permission_service.delete(db, storage, permission_id)


# =============================================================================
# 4. User endpoints
# =============================================================================
@router.get("/users", response_model=ApiResponse[Dict[str, List[usr_schemas.UserRead]]], summary="List users")
async def read_users(
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await user_service.list(db, storage, skip=skip, limit=limit)


# declared before /users/{user_id} so "search" is not taken for an id
@router.get("/users/search", response_model=ApiResponse[Dict[str, List[usr_schemas.UserRead]]], summary="Search users by username")
async def search_users(
    username: str = Query(..., min_length=1),
    exact: bool = Query(False, description="Exact match instead of substring"),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    return await user_service.search(db, storage, username=username, exact=exact, skip=skip, limit=limit)


@router.get("/users/{user_id}", response_model=ApiResponse[usr_schemas.UserRead], summary="Get a user")
async def read_user(
    user_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await user_service.get(db, storage, user_id)


@router.post("/users", response_model=ApiResponse[usr_schemas.UserRead], status_code=status.HTTP_201_CREATED, summary="Create a user")
async def create_user(
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
    upload: Optional[UploadedObject] = Depends(profile_image_upload),
):
    """
    Multipart form with the user fields, `password` and an optional single `profile_image`.
    """
    return await user_service.create(db, storage, data, upload)


@router.put("/users/{user_id}", response_model=ApiResponse[usr_schemas.UserRead], summary="Update a user")
async def update_user(
    user_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
    upload: Optional[UploadedObject] = Depends(profile_image_upload),
):
    """
    Users update their own account; admins update any account and its `role_id`.
    """
    return await user_service.update_account(db, storage, user_id, data, current_user, upload)


@router.put("/users/{user_id}/password", response_model=ApiResponse[MessagePayload], summary="Change a password")
async def change_user_password(
    user_id: int,
    current_user: usr_models.User = Depends(deps.get_current_active_user),
    db: AsyncSession = Depends(deps.get_db_session),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    """
    Users change their own password with `current_password`; admins may reset anyone's.
    """
    return await user_service.change_password(db, user_id, data, current_user)


@router.patch("/users/{user_id}/status", response_model=ApiResponse[usr_schemas.UserRead], summary="Activate or deactivate a user")
async def update_user_status(
    user_id: int,
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
    data: Dict[str, Any] = Depends(deps.get_request_data),
):
    return await user_service.set_status(db, storage, user_id, data, current_admin_user)


@router.delete("/users/{user_id}", response_model=ApiResponse[MessagePayload], summary="Soft delete a user")
async def delete_user(
    user_id: int,
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
    db: AsyncSession = Depends(deps.get_db_session),
    storage: ObjectStorage = Depends(deps.get_storage),
):
    return await user_service.delete_account(db, storage, user_id, current_admin_user)
