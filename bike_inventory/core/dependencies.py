# bike_inventory/core/dependencies.py

"""
FastAPI dependency injection.

- Database session (get_db_session).
- Object storage client built in the lifespan (get_storage).
- Request body as a plain dict, from JSON or form fields (get_request_data).
- Current user and role checks (re-exported from security).
"""

import json
from typing import Any, Dict

from fastapi import Request
from starlette.datastructures import UploadFile

from bike_inventory.core.database import get_session as get_main_app_session
from bike_inventory.core.exceptions import BadRequestError
from bike_inventory.core.storage import ObjectStorage

# flake8: noqa
from bike_inventory.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
    oauth2_scheme,
    get_current_user_from_token,
    get_current_active_user,
    get_current_admin_user,
)

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


# --- Database session ---
# shared with the security dependencies: one session per request
get_db_session = get_main_app_session


# --- Object storage ---
def get_storage(request: Request) -> ObjectStorage:
    return request.app.state.storage


# --- Request body ---
async def get_request_data(request: Request) -> Dict[str, Any]:
    """
    Returns the request's scalar input as a dict.

    Form requests (image resources send multipart) yield their non-file fields,
    with empty strings dropped so optional fields can be left blank. Other
    requests are read as a JSON object; an empty body is an empty dict.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {
            key: value
            for key, value in form.multi_items()
            if not isinstance(value, UploadFile) and value != ""
        }

    body = await request.body()
    if not body:
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        raise BadRequestError("Malformed JSON body")
    if not isinstance(data, dict):
        raise BadRequestError("Request body must be a JSON object")
    return data
