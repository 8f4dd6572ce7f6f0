# tests/domains/test_org.py

"""
Integration tests for the 'org' domain endpoints.

- Banking details: `/api/banking-details`, `/api/banking-details/{id}`.
- Organizations: `/api/organizations`, `/api/organizations/{id}` (logo
  upload, references to vendor, admin user and banking detail).
- Entity bankings: `/api/entity-bankings`, `/api/entity-bankings/{id}`.
"""

import pytest
from httpx import AsyncClient

from bike_inventory.domains.usr import models as usr_models
from tests.conftest import PNG_BYTES

BANKING_DETAIL = {
    "bank_name": "First Bank",
    "account_title": "Acme Cycles Ltd",
    "account_number": "0012345678",
    "iban": "GB82WEST12345698765432",
}


async def _create_banking_detail(client: AsyncClient) -> dict:
    response = await client.post("/api/banking-details", json=BANKING_DETAIL)
    assert response.status_code == 201, response.text
    return response.json()["payload"]


# =============================================================================
# 1. Banking details
# =============================================================================
@pytest.mark.asyncio
async def test_banking_detail_crud(authorized_client: AsyncClient):
    print("\n--- Running test_banking_detail_crud ---")
    created = await _create_banking_detail(authorized_client)
    assert created["bank_name"] == "First Bank"

    response = await authorized_client.get("/api/banking-details")
    assert response.json()["message"] == "Banking details retrieved successfully"
    assert len(response.json()["payload"]["banking_details"]) == 1

    response = await authorized_client.get(f"/api/banking-details/{created['id']}")
    assert response.json()["message"] == "Banking detail retrieved successfully"

    response = await authorized_client.put(f"/api/banking-details/{created['id']}", json={"branch_code": "0042"})
    assert response.status_code == 200
    assert response.json()["payload"]["branch_code"] == "0042"
    assert response.json()["payload"]["account_number"] == "0012345678"

    response = await authorized_client.delete(f"/api/banking-details/{created['id']}")
    assert response.json()["message"] == "Banking detail soft deleted successfully"
    assert (await authorized_client.get(f"/api/banking-details/{created['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_banking_detail_requires_account_fields(authorized_client: AsyncClient):
    response = await authorized_client.post("/api/banking-details", json={"bank_name": "First Bank"})
    assert response.status_code == 400
    assert response.json()["message"].startswith("account_title:")


@pytest.mark.asyncio
async def test_banking_detail_invalid_id(authorized_client: AsyncClient):
    response = await authorized_client.get("/api/banking-details/-3")
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid banking detail ID"


# =============================================================================
# 2. Organizations
# =============================================================================
@pytest.mark.asyncio
async def test_create_organization_with_references_and_logo(
    authorized_client: AsyncClient, test_user: usr_models.User, bucket_keys
):
    banking = await _create_banking_detail(authorized_client)
    vendor = (await authorized_client.post("/api/vendor", json={"name": "Shimano"})).json()["payload"]

    response = await authorized_client.post(
        "/api/organizations",
        data={
            "name": "Acme Cycles",
            "website": "https://acme.example.com",
            "vendor_id": str(vendor["id"]),
            "admin_id": str(test_user.id),
            "banking_id": str(banking["id"]),
        },
        files={"logo": ("acme.png", PNG_BYTES, "image/png")},
    )
    print(f"Response JSON: {response.json()}")
    assert response.status_code == 201
    org = response.json()["payload"]
    assert response.json()["message"] == "Organization created successfully"
    assert org["vendor_id"] == vendor["id"]
    assert org["admin_id"] == test_user.id
    assert org["banking_id"] == banking["id"]
    assert org["logo_presigned_url"]
    assert bucket_keys("organizations/")[0].startswith("organizations/organization-acme-cycles-")


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["vendor_id", "admin_id", "banking_id"])
async def test_create_organization_rejects_unknown_reference(authorized_client: AsyncClient, bucket_keys, field):
    response = await authorized_client.post(
        "/api/organizations",
        data={"name": "Acme Cycles", field: "404"},
        files={"logo": ("acme.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 400
    assert response.json()["message"] == f"Invalid {field}"
    assert bucket_keys() == []


@pytest.mark.asyncio
async def test_organization_rejects_non_numeric_reference(authorized_client: AsyncClient):
    response = await authorized_client.post("/api/organizations", data={"name": "Acme Cycles", "vendor_id": "abc"})
    assert response.status_code == 400
    assert response.json()["message"].startswith("vendor_id:")


@pytest.mark.asyncio
async def test_update_and_delete_organization(authorized_client: AsyncClient, storage, bucket_keys):
    created = (await authorized_client.post(
        "/api/organizations",
        data={"name": "Acme Cycles"},
        files={"logo": ("acme.png", PNG_BYTES, "image/png")},
    )).json()["payload"]

    response = await authorized_client.put(
        f"/api/organizations/{created['id']}",
        data={"address": "2 Dock Rd"},
        files={"logo": ("acme2.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 200
    updated = response.json()["payload"]
    assert updated["name"] == "Acme Cycles"
    assert updated["address"] == "2 Dock Rd"
    assert bucket_keys() == [storage.key_from_location(updated["logo"])]

    response = await authorized_client.get("/api/organizations")
    assert response.json()["message"] == "Organizations retrieved successfully"
    assert response.json()["payload"]["organizations"][0]["logo_presigned_url"]

    response = await authorized_client.delete(f"/api/organizations/{created['id']}")
    assert response.json()["message"] == "Organization soft deleted successfully"
    assert bucket_keys() == []


# =============================================================================
# 3. Entity bankings
# =============================================================================
@pytest.mark.asyncio
async def test_entity_banking_links_vendor_account(authorized_client: AsyncClient):
    print("\n--- Running test_entity_banking_links_vendor_account ---")
    banking = await _create_banking_detail(authorized_client)
    vendor = (await authorized_client.post("/api/vendor", json={"name": "Shimano"})).json()["payload"]
    link = {"entity_type": "vendor", "entity_id": vendor["id"], "banking_id": banking["id"], "is_primary": True}

    response = await authorized_client.post("/api/entity-bankings", json=link)
    print(f"Response JSON: {response.json()}")
    assert response.status_code == 201
    assert response.json()["message"] == "Entity banking created successfully"
    created = response.json()["payload"]
    assert created["is_primary"] is True

    response = await authorized_client.post("/api/entity-bankings", json=link)
    assert response.status_code == 400
    assert response.json()["message"] == (
        "Entity banking with this entity_type and entity_id and banking_id already exists"
    )

    response = await authorized_client.put(f"/api/entity-bankings/{created['id']}", json={"is_primary": False})
    assert response.status_code == 200
    assert response.json()["payload"]["is_primary"] is False

    response = await authorized_client.get("/api/entity-bankings")
    assert response.json()["message"] == "Entity bankings retrieved successfully"
    assert len(response.json()["payload"]["entity_bankings"]) == 1


@pytest.mark.asyncio
async def test_entity_banking_needs_active_holder(authorized_client: AsyncClient):
    banking = await _create_banking_detail(authorized_client)

    response = await authorized_client.post(
        "/api/entity-bankings", json={"entity_type": "vendor", "entity_id": 404, "banking_id": banking["id"]}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "No active vendor with this entity_id"

    response = await authorized_client.post(
        "/api/entity-bankings", json={"entity_type": "shipping_agent", "entity_id": 404, "banking_id": banking["id"]}
    )
    assert response.json()["message"] == "No active shipping agent with this entity_id"


@pytest.mark.asyncio
async def test_entity_banking_rejects_unknown_banking(authorized_client: AsyncClient):
    vendor = (await authorized_client.post("/api/vendor", json={"name": "Shimano"})).json()["payload"]

    response = await authorized_client.post(
        "/api/entity-bankings", json={"entity_type": "vendor", "entity_id": vendor["id"], "banking_id": 404}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid banking_id"
