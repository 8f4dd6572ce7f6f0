# tests/domains/test_inv.py

"""
Integration tests for the 'inv' domain endpoints.

- Brands: `/api/brand`, `/api/brand/{id}` (logo upload, presigned reads,
  logo replacement and cleanup, unique name).
- Vendors: `/api/vendor`, `/api/vendor/{id}`.
- Warehouses: `/api/warehouses`, `/api/warehouses/{id}`.
- Item types, capacity types, items, specifications and item transfers.
"""

import pytest
from decimal import Decimal
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.domains.inv import models as inv_models
from tests.conftest import PNG_BYTES


async def _create_brand(client: AsyncClient, name: str, with_logo: bool = True) -> dict:
    files = {"logo": ("logo.png", PNG_BYTES, "image/png")} if with_logo else None
    response = await client.post("/api/brand", data={"name": name, "website": f"https://{name.lower()}.com"}, files=files)
    assert response.status_code == 201, response.text
    return response.json()["payload"]


# =============================================================================
# 1. Brands
# =============================================================================
@pytest.mark.asyncio
async def test_create_brand_with_logo(authorized_client: AsyncClient, storage, bucket_keys):
    print("\n--- Running test_create_brand_with_logo ---")
    response = await authorized_client.post(
        "/api/brand",
        data={"name": "Trek", "website": "https://trekbikes.com"},
        files={"logo": ("logo.png", PNG_BYTES, "image/png")},
    )
    print(f"Response JSON: {response.json()}")

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    assert body["code"] == 201
    assert body["message"] == "Brand created successfully"

    brand = body["payload"]
    assert brand["name"] == "Trek"
    assert brand["deleted_at"] is None
    assert storage.key_from_location(brand["logo"]) == bucket_keys("brands/")[0]
    assert brand["logo_presigned_url"].startswith("https://")


@pytest.mark.asyncio
async def test_create_brand_with_json_body(authorized_client: AsyncClient):
    response = await authorized_client.post("/api/brand", json={"name": "Giant"})
    assert response.status_code == 201
    assert response.json()["payload"]["logo"] is None


@pytest.mark.asyncio
async def test_create_brand_requires_name(authorized_client: AsyncClient, bucket_keys):
    response = await authorized_client.post(
        "/api/brand",
        data={"website": "https://nameless.com"},
        files={"logo": ("logo.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 400
    assert response.json()["message"].startswith("name:")
    # the uploaded logo is removed again
    assert bucket_keys() == []


@pytest.mark.asyncio
async def test_duplicate_brand_name_removes_new_logo(authorized_client: AsyncClient, bucket_keys):
    await _create_brand(authorized_client, "Trek")
    assert len(bucket_keys()) == 1

    response = await authorized_client.post(
        "/api/brand",
        data={"name": "Trek"},
        files={"logo": ("other.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Brand with this name already exists"
    assert len(bucket_keys()) == 1


@pytest.mark.asyncio
async def test_list_brands_presigns_each_logo(authorized_client: AsyncClient):
    await _create_brand(authorized_client, "Trek")
    await _create_brand(authorized_client, "Cube", with_logo=False)

    response = await authorized_client.get("/api/brand")
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Brands retrieved successfully"
    brands = body["payload"]["brands"]
    assert [b["name"] for b in brands] == ["Trek", "Cube"]
    assert brands[0]["logo_presigned_url"]
    assert brands[1]["logo_presigned_url"] is None


@pytest.mark.asyncio
async def test_get_brand(authorized_client: AsyncClient):
    created = await _create_brand(authorized_client, "Trek")

    response = await authorized_client.get(f"/api/brand/{created['id']}")
    assert response.status_code == 200
    assert response.json()["message"] == "Brand retrieved successfully"
    assert response.json()["payload"]["logo"] == created["logo"]


@pytest.mark.asyncio
async def test_get_brand_never_persists_presigned_url(authorized_client: AsyncClient, db_session: AsyncSession):
    created = await _create_brand(authorized_client, "Trek")

    response = await authorized_client.get(f"/api/brand/{created['id']}")
    payload = response.json()["payload"]
    assert "X-Amz-Expires" in payload["logo_presigned_url"]

    db_brand = await db_session.get(inv_models.Brand, created["id"])
    await db_session.refresh(db_brand)
    assert db_brand.logo == payload["logo"]
    assert "?" not in db_brand.logo
    assert "X-Amz" not in db_brand.logo


@pytest.mark.asyncio
async def test_get_brand_invalid_and_missing_id(authorized_client: AsyncClient):
    response = await authorized_client.get("/api/brand/0")
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid brand ID"

    response = await authorized_client.get("/api/brand/999")
    assert response.status_code == 404
    assert response.json() == {"status": "error", "code": 404, "message": "Brand not found"}


@pytest.mark.asyncio
async def test_update_brand_replaces_logo(authorized_client: AsyncClient, storage, bucket_keys):
    created = await _create_brand(authorized_client, "Trek")
    old_key = storage.key_from_location(created["logo"])

    response = await authorized_client.put(
        f"/api/brand/{created['id']}",
        data={"name": "Trek Bicycle"},
        files={"logo": ("new.png", PNG_BYTES, "image/png")},
    )
    print(f"Response JSON: {response.json()}")
    assert response.status_code == 200
    updated = response.json()["payload"]
    assert response.json()["message"] == "Brand updated successfully"
    assert updated["name"] == "Trek Bicycle"
    assert updated["logo"] != created["logo"]

    keys = bucket_keys()
    assert old_key not in keys
    assert keys == [storage.key_from_location(updated["logo"])]
    assert "brand-trek-bicycle-" in keys[0]


@pytest.mark.asyncio
async def test_update_brand_without_file_keeps_logo(authorized_client: AsyncClient, bucket_keys):
    created = await _create_brand(authorized_client, "Trek")

    response = await authorized_client.put(f"/api/brand/{created['id']}", json={"website": "https://trek.example.com"})
    assert response.status_code == 200
    updated = response.json()["payload"]
    assert updated["logo"] == created["logo"]
    assert updated["name"] == "Trek"
    assert len(bucket_keys()) == 1


@pytest.mark.asyncio
async def test_update_missing_brand_removes_upload(authorized_client: AsyncClient, bucket_keys):
    response = await authorized_client.put(
        "/api/brand/42",
        data={"name": "Ghost"},
        files={"logo": ("logo.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 404
    assert bucket_keys() == []


@pytest.mark.asyncio
async def test_update_brand_to_taken_name(authorized_client: AsyncClient):
    await _create_brand(authorized_client, "Trek", with_logo=False)
    cube = await _create_brand(authorized_client, "Cube", with_logo=False)

    response = await authorized_client.put(f"/api/brand/{cube['id']}", json={"name": "Trek"})
    assert response.status_code == 400
    assert response.json()["message"] == "Brand with this name already exists"

    # keeping its own name is not a conflict
    response = await authorized_client.put(f"/api/brand/{cube['id']}", json={"name": "Cube"})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_delete_brand_soft_deletes_and_removes_logo(authorized_client: AsyncClient, bucket_keys):
    created = await _create_brand(authorized_client, "Trek")

    response = await authorized_client.delete(f"/api/brand/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {
        "status": "success",
        "code": 200,
        "message": "Brand soft deleted successfully",
        "payload": {"message": "Brand soft deleted successfully"},
    }
    assert bucket_keys() == []

    assert (await authorized_client.get(f"/api/brand/{created['id']}")).status_code == 404
    assert (await authorized_client.get("/api/brand")).json()["payload"]["brands"] == []
    assert (await authorized_client.delete(f"/api/brand/{created['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_deleted_brand_name_can_be_reused(authorized_client: AsyncClient):
    created = await _create_brand(authorized_client, "Trek", with_logo=False)
    await authorized_client.delete(f"/api/brand/{created['id']}")

    recreated = await _create_brand(authorized_client, "Trek", with_logo=False)
    assert recreated["id"] != created["id"]


@pytest.mark.asyncio
async def test_brand_writes_require_authentication(client: AsyncClient):
    assert (await client.get("/api/brand")).status_code == 200
    assert (await client.post("/api/brand", json={"name": "Trek"})).status_code == 401
    assert (await client.put("/api/brand/1", json={"name": "Trek"})).status_code == 401
    assert (await client.delete("/api/brand/1")).status_code == 401


# =============================================================================
# 2. Vendors
# =============================================================================
@pytest.mark.asyncio
async def test_vendor_crud(authorized_client: AsyncClient):
    response = await authorized_client.post(
        "/api/vendor",
        json={"name": "Shimano", "email": "sales@example.com", "phone": "555-0100"},
    )
    assert response.status_code == 201
    vendor = response.json()["payload"]
    assert response.json()["message"] == "Vendor created successfully"

    response = await authorized_client.put(f"/api/vendor/{vendor['id']}", json={"address": "Osaka"})
    assert response.status_code == 200
    assert response.json()["payload"]["address"] == "Osaka"
    assert response.json()["payload"]["email"] == "sales@example.com"

    response = await authorized_client.get("/api/vendor")
    assert response.json()["message"] == "Vendors retrieved successfully"
    assert len(response.json()["payload"]["vendors"]) == 1

    response = await authorized_client.delete(f"/api/vendor/{vendor['id']}")
    assert response.json()["message"] == "Vendor soft deleted successfully"


@pytest.mark.asyncio
async def test_vendor_rejects_invalid_email(authorized_client: AsyncClient):
    response = await authorized_client.post("/api/vendor", json={"name": "Shimano", "email": "not-an-email"})
    assert response.status_code == 400
    assert response.json()["message"].startswith("email:")


@pytest.mark.asyncio
async def test_vendor_rejects_unknown_banking_detail(authorized_client: AsyncClient):
    response = await authorized_client.post("/api/vendor", json={"name": "Shimano", "banking_id": 77})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid banking_id"


# =============================================================================
# 3. Warehouses
# =============================================================================
@pytest.mark.asyncio
async def test_warehouse_crud(authorized_client: AsyncClient):
    org = await authorized_client.post("/api/organizations", json={"name": "Acme Cycles"})
    assert org.status_code == 201
    org_id = org.json()["payload"]["id"]

    response = await authorized_client.post(
        "/api/warehouses", json={"name": "North", "capacity": 500, "organization_id": org_id}
    )
    assert response.status_code == 201
    warehouse = response.json()["payload"]
    assert warehouse["organization_id"] == org_id

    response = await authorized_client.get(f"/api/warehouses/{warehouse['id']}")
    assert response.json()["message"] == "Warehouse retrieved successfully"

    response = await authorized_client.put(f"/api/warehouses/{warehouse['id']}", json={"capacity": -1})
    assert response.status_code == 400

    response = await authorized_client.delete(f"/api/warehouses/{warehouse['id']}")
    assert response.status_code == 200
    assert (await authorized_client.get(f"/api/warehouses/{warehouse['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_warehouse_rejects_deleted_organization(authorized_client: AsyncClient):
    org = await authorized_client.post("/api/organizations", json={"name": "Acme Cycles"})
    org_id = org.json()["payload"]["id"]
    await authorized_client.delete(f"/api/organizations/{org_id}")

    response = await authorized_client.post("/api/warehouses", json={"name": "North", "organization_id": org_id})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid organization_id"


# =============================================================================
# 4. Item types and capacity types
# =============================================================================
@pytest.mark.asyncio
async def test_item_type_crud(authorized_client: AsyncClient):
    response = await authorized_client.post("/api/item-types", json={"name": "bicycle", "description": "Complete bikes"})
    assert response.status_code == 201
    item_type = response.json()["payload"]
    assert response.json()["message"] == "Item type created successfully"

    response = await authorized_client.post("/api/item-types", json={"name": "bicycle"})
    assert response.status_code == 400
    assert response.json()["message"] == "Item type with this name already exists"

    response = await authorized_client.get("/api/item-types")
    assert response.json()["message"] == "Item types retrieved successfully"
    assert [t["name"] for t in response.json()["payload"]["item_types"]] == ["bicycle"]

    response = await authorized_client.delete(f"/api/item-types/{item_type['id']}")
    assert response.json()["message"] == "Item type soft deleted successfully"


@pytest.mark.asyncio
async def test_capacity_type_crud(authorized_client: AsyncClient):
    response = await authorized_client.post("/api/capacity-types", json={"name": "battery", "unit": "Wh"})
    assert response.status_code == 201
    capacity_type = response.json()["payload"]

    response = await authorized_client.put(f"/api/capacity-types/{capacity_type['id']}", json={"unit": "kWh"})
    assert response.json()["message"] == "Capacity type updated successfully"
    assert response.json()["payload"]["unit"] == "kWh"

    response = await authorized_client.post("/api/capacity-types", json={"name": "motor"})
    assert response.status_code == 400
    assert response.json()["message"].startswith("unit:")


# =============================================================================
# 5. Items and specifications
# =============================================================================
async def _create_item(client: AsyncClient, **fields) -> dict:
    body = {"name": "Trek FX 3", "sku": "TRK-FX3", "price": "850.00", **fields}
    response = await client.post("/api/items", json=body)
    assert response.status_code == 201, response.text
    return response.json()["payload"]


@pytest.mark.asyncio
async def test_create_item_with_references(authorized_client: AsyncClient):
    print("\n--- Running test_create_item_with_references ---")
    brand = await _create_brand(authorized_client, "Trek", with_logo=False)
    item_type = (await authorized_client.post("/api/item-types", json={"name": "e-bike"})).json()["payload"]
    battery = (await authorized_client.post("/api/capacity-types", json={"name": "battery", "unit": "Wh"})).json()["payload"]
    warehouse = (await authorized_client.post("/api/warehouses", json={"name": "North"})).json()["payload"]

    item = await _create_item(
        authorized_client,
        brand_id=brand["id"],
        item_type_id=item_type["id"],
        capacity_type_id=battery["id"],
        capacity="500",
        warehouse_id=warehouse["id"],
        quantity=4,
    )
    print(f"Item: {item}")
    assert item["brand_id"] == brand["id"]
    assert Decimal(item["capacity"]) == Decimal("500")
    assert Decimal(item["price"]) == Decimal("850.00")
    assert item["quantity"] == 4

    response = await authorized_client.get("/api/items")
    assert response.json()["message"] == "Items retrieved successfully"
    assert [i["sku"] for i in response.json()["payload"]["items"]] == ["TRK-FX3"]


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["brand_id", "item_type_id", "vendor_id", "capacity_type_id", "warehouse_id"])
async def test_item_rejects_unknown_reference(authorized_client: AsyncClient, field):
    response = await authorized_client.post(
        "/api/items", json={"name": "Trek FX 3", "sku": "TRK-FX3", "price": "850.00", field: 404}
    )
    assert response.status_code == 400
    assert response.json()["message"] == f"Invalid {field}"


@pytest.mark.asyncio
async def test_item_sku_unique_and_stock_not_negative(authorized_client: AsyncClient):
    await _create_item(authorized_client)

    response = await authorized_client.post("/api/items", json={"name": "Other", "sku": "TRK-FX3", "price": "1.00"})
    assert response.status_code == 400
    assert response.json()["message"] == "Item with this sku already exists"

    response = await authorized_client.post(
        "/api/items", json={"name": "Other", "sku": "OTHER", "price": "1.00", "quantity": -1}
    )
    assert response.status_code == 400
    assert response.json()["message"].startswith("quantity:")


@pytest.mark.asyncio
async def test_item_capacity_needs_capacity_type(authorized_client: AsyncClient):
    response = await authorized_client.post(
        "/api/items", json={"name": "Trek FX 3", "sku": "TRK-FX3", "price": "850.00", "capacity": "500"}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "capacity requires capacity_type_id"

    item = await _create_item(authorized_client)
    response = await authorized_client.put(f"/api/items/{item['id']}", json={"capacity": "250"})
    assert response.status_code == 400
    assert response.json()["message"] == "capacity requires capacity_type_id"


@pytest.mark.asyncio
async def test_specifications_unique_per_item(authorized_client: AsyncClient):
    item = await _create_item(authorized_client)
    other = await _create_item(authorized_client, sku="TRK-FX2")

    response = await authorized_client.post(
        "/api/specifications", json={"item_id": item["id"], "name": "frame size", "value": "M"}
    )
    assert response.status_code == 201
    assert response.json()["message"] == "Specification created successfully"

    response = await authorized_client.post(
        "/api/specifications", json={"item_id": item["id"], "name": "frame size", "value": "L"}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Specification with this item_id and name already exists"

    response = await authorized_client.post(
        "/api/specifications", json={"item_id": other["id"], "name": "frame size", "value": "L"}
    )
    assert response.status_code == 201

    response = await authorized_client.get("/api/specifications")
    assert len(response.json()["payload"]["specifications"]) == 2


# =============================================================================
# 6. Item transfers
# =============================================================================
@pytest.mark.asyncio
async def test_item_transfer_between_warehouses(authorized_client: AsyncClient):
    north = (await authorized_client.post("/api/warehouses", json={"name": "North"})).json()["payload"]
    south = (await authorized_client.post("/api/warehouses", json={"name": "South"})).json()["payload"]
    item = await _create_item(authorized_client, warehouse_id=north["id"], quantity=5)

    body = {"item_id": item["id"], "from_warehouse_id": north["id"], "to_warehouse_id": south["id"], "quantity": 2}
    response = await authorized_client.post("/api/item-transfers", json=body)
    print(f"Response JSON: {response.json()}")
    assert response.status_code == 201
    transfer = response.json()["payload"]
    assert response.json()["message"] == "Item transfer created successfully"

    response = await authorized_client.put(f"/api/item-transfers/{transfer['id']}", json={"notes": "restock"})
    assert response.json()["payload"]["notes"] == "restock"
    assert response.json()["payload"]["quantity"] == 2

    response = await authorized_client.post("/api/item-transfers", json={**body, "quantity": 6})
    assert response.status_code == 400
    assert response.json()["message"] == "Transfer quantity exceeds the item's stock"

    response = await authorized_client.post(
        "/api/item-transfers", json={**body, "from_warehouse_id": south["id"], "to_warehouse_id": north["id"]}
    )
    assert response.json()["message"] == "Item is not stocked at from_warehouse_id"


@pytest.mark.asyncio
async def test_item_transfer_needs_two_warehouses(authorized_client: AsyncClient):
    north = (await authorized_client.post("/api/warehouses", json={"name": "North"})).json()["payload"]
    item = await _create_item(authorized_client, warehouse_id=north["id"], quantity=5)

    response = await authorized_client.post(
        "/api/item-transfers",
        json={"item_id": item["id"], "from_warehouse_id": north["id"], "to_warehouse_id": north["id"], "quantity": 1},
    )
    assert response.status_code == 400
    assert "from_warehouse_id and to_warehouse_id must differ" in response.json()["message"]
