# tests/core/test_dependencies.py

"""
Tests for the request dependencies (bike_inventory.core.dependencies).

- Authentication and the route share one database session per request.
- Form bodies drop file parts and blank fields.
"""

import pytest
from httpx import AsyncClient

from bike_inventory.core import dependencies as deps
from bike_inventory.core.database import get_session
from bike_inventory.domains.usr import models as usr_models


def test_route_session_is_the_auth_session():
    assert deps.get_db_session is get_session


@pytest.mark.asyncio
async def test_authenticated_request_opens_one_session(
    client: AsyncClient, app_overrides, db_session, test_user: usr_models.User
):
    opened = []

    async def counting_session():
        opened.append(db_session)
        yield db_session

    app_overrides[get_session] = counting_session

    response = await client.post("/api/users/auth/token", data={"username": "testuser", "password": "testpass123"})
    headers = {"Authorization": f"Bearer {response.json()['access_token']}"}
    opened.clear()

    response = await client.post("/api/brand", json={"name": "Giant"}, headers=headers)
    assert response.status_code == 201
    assert len(opened) == 1


@pytest.mark.asyncio
async def test_form_blank_fields_are_dropped(authorized_client: AsyncClient):
    response = await authorized_client.post("/api/brand", data={"name": "Giant", "website": ""})
    assert response.status_code == 201
    assert response.json()["payload"]["website"] is None
