# tests/domains/test_pay.py

"""
Integration tests for the 'pay' domain endpoints.

- Payments: `/api/payments`, `/api/payments/{id}`.
- Instruments: `/api/instruments`, `/api/instruments/{id}` (scanned picture upload).
- Installment plans, installments and payment details.
"""

import pytest
from decimal import Decimal
from httpx import AsyncClient

from tests.conftest import PNG_BYTES


# =============================================================================
# 1. Payments
# =============================================================================
@pytest.mark.asyncio
async def test_payment_crud(authorized_client: AsyncClient):
    print("\n--- Running test_payment_crud ---")
    response = await authorized_client.post(
        "/api/payments",
        json={"amount": "125.50", "method": "card", "reference": "RCPT-001", "paid_at": "2024-05-01T10:00:00Z"},
    )
    print(f"Response JSON: {response.json()}")
    assert response.status_code == 201
    payment = response.json()["payload"]
    assert response.json()["message"] == "Payment created successfully"
    assert Decimal(payment["amount"]) == Decimal("125.50")
    assert payment["method"] == "card"

    response = await authorized_client.put(f"/api/payments/{payment['id']}", json={"notes": "deposit"})
    assert response.status_code == 200
    assert response.json()["payload"]["notes"] == "deposit"
    assert response.json()["payload"]["reference"] == "RCPT-001"

    response = await authorized_client.get("/api/payments")
    assert response.json()["message"] == "Payments retrieved successfully"
    assert len(response.json()["payload"]["payments"]) == 1

    response = await authorized_client.delete(f"/api/payments/{payment['id']}")
    assert response.json()["message"] == "Payment soft deleted successfully"
    assert (await authorized_client.get(f"/api/payments/{payment['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_payment_defaults_to_cash(authorized_client: AsyncClient):
    response = await authorized_client.post("/api/payments", json={"amount": 20})
    assert response.status_code == 201
    assert response.json()["payload"]["method"] == "cash"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, field",
    [
        ({"amount": "0"}, "amount"),
        ({"amount": "-5.00"}, "amount"),
        ({"amount": "1.234"}, "amount"),
        ({"amount": "10.00", "method": "barter"}, "method"),
        ({}, "amount"),
    ],
)
async def test_payment_validation(authorized_client: AsyncClient, body, field):
    response = await authorized_client.post("/api/payments", json=body)
    assert response.status_code == 400
    assert response.json()["message"].startswith(f"{field}:")


# =============================================================================
# 2. Instruments
# =============================================================================
@pytest.mark.asyncio
async def test_create_instrument_with_picture(authorized_client: AsyncClient, storage, bucket_keys):
    response = await authorized_client.post(
        "/api/instruments",
        data={"number": "CHQ 000123", "amount": "900.00", "date": "2024-05-02"},
        files={"picture": ("scan.jpg", PNG_BYTES, "image/jpeg")},
    )
    print(f"Response JSON: {response.json()}")
    assert response.status_code == 201
    instrument = response.json()["payload"]
    assert response.json()["message"] == "Instrument created successfully"
    assert instrument["date"] == "2024-05-02"
    assert Decimal(instrument["amount"]) == Decimal("900.00")
    assert instrument["picture_presigned_url"]

    keys = bucket_keys("instruments/")
    assert keys == [storage.key_from_location(instrument["picture"])]
    assert keys[0].startswith("instruments/instrument-chq-000123-")


@pytest.mark.asyncio
async def test_instrument_picture_field_only(authorized_client: AsyncClient, bucket_keys):
    response = await authorized_client.post(
        "/api/instruments",
        data={"number": "CHQ-1", "amount": "10.00", "date": "2024-05-02"},
        files={"logo": ("scan.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Unexpected file field 'logo'"
    assert bucket_keys() == []


@pytest.mark.asyncio
async def test_instrument_invalid_date_removes_picture(authorized_client: AsyncClient, bucket_keys):
    response = await authorized_client.post(
        "/api/instruments",
        data={"number": "CHQ-1", "amount": "10.00", "date": "yesterday"},
        files={"picture": ("scan.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 400
    assert response.json()["message"].startswith("date:")
    assert bucket_keys() == []


@pytest.mark.asyncio
async def test_update_and_delete_instrument(authorized_client: AsyncClient, storage, bucket_keys):
    created = (await authorized_client.post(
        "/api/instruments",
        data={"number": "PO-77", "amount": "50.00", "date": "2024-05-02"},
        files={"picture": ("scan.png", PNG_BYTES, "image/png")},
    )).json()["payload"]

    response = await authorized_client.put(f"/api/instruments/{created['id']}", json={"amount": "55.00"})
    assert response.status_code == 200
    updated = response.json()["payload"]
    assert Decimal(updated["amount"]) == Decimal("55.00")
    assert updated["picture"] == created["picture"]
    assert updated["picture_presigned_url"]

    response = await authorized_client.put(
        f"/api/instruments/{created['id']}",
        data={"number": "PO-78"},
        files={"picture": ("rescan.png", PNG_BYTES, "image/png")},
    )
    replaced = response.json()["payload"]
    assert bucket_keys() == [storage.key_from_location(replaced["picture"])]

    response = await authorized_client.delete(f"/api/instruments/{created['id']}")
    assert response.json()["message"] == "Instrument soft deleted successfully"
    assert bucket_keys() == []

    response = await authorized_client.get("/api/instruments")
    assert response.json()["payload"]["instruments"] == []


# =============================================================================
# 3. Installment plans and installments
# =============================================================================
async def _create_sale(client: AsyncClient) -> dict:
    item = (await client.post("/api/items", json={"name": "Trek FX 3", "sku": "TRK-FX3", "price": "900.00", "quantity": 2})).json()["payload"]
    customer = (await client.post("/api/customers", json={"name": "Ann Rider"})).json()["payload"]
    response = await client.post("/api/sales", json={"item_id": item["id"], "customer_id": customer["id"]})
    assert response.status_code == 201, response.text
    return response.json()["payload"]


@pytest.mark.asyncio
async def test_installment_plan_crud(authorized_client: AsyncClient):
    response = await authorized_client.post(
        "/api/installment-plans", json={"name": "3 months", "number_of_installments": 3, "markup_percent": "5.00"}
    )
    assert response.status_code == 201
    plan = response.json()["payload"]
    assert response.json()["message"] == "Installment plan created successfully"
    assert plan["interval_days"] == 30
    assert Decimal(plan["markup_percent"]) == Decimal("5.00")

    response = await authorized_client.post("/api/installment-plans", json={"name": "3 months", "number_of_installments": 3})
    assert response.json()["message"] == "Installment plan with this name already exists"

    response = await authorized_client.post("/api/installment-plans", json={"name": "never", "number_of_installments": 0})
    assert response.status_code == 400
    assert response.json()["message"].startswith("number_of_installments:")

    response = await authorized_client.get("/api/installment-plans")
    assert response.json()["message"] == "Installment plans retrieved successfully"
    assert len(response.json()["payload"]["installment_plans"]) == 1


@pytest.mark.asyncio
async def test_installments_follow_plan(authorized_client: AsyncClient):
    print("\n--- Running test_installments_follow_plan ---")
    sale = await _create_sale(authorized_client)
    plan = (await authorized_client.post(
        "/api/installment-plans", json={"name": "2 months", "number_of_installments": 2}
    )).json()["payload"]
    base = {"sale_id": sale["id"], "installment_plan_id": plan["id"], "amount": "450.00"}

    response = await authorized_client.post("/api/installments", json={**base, "sequence": 1, "due_date": "2024-07-01"})
    print(f"Response JSON: {response.json()}")
    assert response.status_code == 201
    first = response.json()["payload"]
    assert first["status"] == "pending"

    response = await authorized_client.post("/api/installments", json={**base, "sequence": 1, "due_date": "2024-08-01"})
    assert response.status_code == 400
    assert response.json()["message"] == "Installment with this sale_id and sequence already exists"

    response = await authorized_client.post("/api/installments", json={**base, "sequence": 3, "due_date": "2024-09-01"})
    assert response.json()["message"] == "sequence exceeds the plan's number_of_installments"

    response = await authorized_client.get("/api/installments")
    assert response.json()["message"] == "Installments retrieved successfully"
    assert len(response.json()["payload"]["installments"]) == 1


@pytest.mark.asyncio
async def test_paid_installment_needs_payment(authorized_client: AsyncClient):
    sale = await _create_sale(authorized_client)
    installment = (await authorized_client.post(
        "/api/installments", json={"sale_id": sale["id"], "sequence": 1, "amount": "900.00", "due_date": "2024-07-01"}
    )).json()["payload"]

    response = await authorized_client.put(f"/api/installments/{installment['id']}", json={"status": "paid"})
    assert response.status_code == 400
    assert response.json()["message"] == "A paid installment needs a payment_id"

    payment = (await authorized_client.post("/api/payments", json={"amount": "900.00"})).json()["payload"]
    response = await authorized_client.put(
        f"/api/installments/{installment['id']}", json={"status": "paid", "payment_id": payment["id"]}
    )
    assert response.status_code == 200
    assert response.json()["payload"]["status"] == "paid"


# =============================================================================
# 4. Payment details
# =============================================================================
@pytest.mark.asyncio
async def test_payment_details_cannot_exceed_payment(authorized_client: AsyncClient):
    sale = await _create_sale(authorized_client)
    payment = (await authorized_client.post("/api/payments", json={"amount": "900.00"})).json()["payload"]

    response = await authorized_client.post(
        "/api/payment-details", json={"payment_id": payment["id"], "sale_id": sale["id"], "amount": "600.00"}
    )
    assert response.status_code == 201
    detail = response.json()["payload"]
    assert response.json()["message"] == "Payment detail created successfully"

    response = await authorized_client.post(
        "/api/payment-details", json={"payment_id": payment["id"], "amount": "300.01"}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Payment details exceed the payment amount"

    response = await authorized_client.post("/api/payment-details", json={"payment_id": payment["id"], "amount": "300.00"})
    assert response.status_code == 201

    # the detail's own amount is not counted twice
    response = await authorized_client.put(f"/api/payment-details/{detail['id']}", json={"amount": "600.00"})
    assert response.status_code == 200

    response = await authorized_client.get("/api/payment-details")
    assert response.json()["message"] == "Payment details retrieved successfully"
    assert len(response.json()["payload"]["payment_details"]) == 2


@pytest.mark.asyncio
async def test_payment_detail_rejects_unknown_instrument(authorized_client: AsyncClient):
    payment = (await authorized_client.post("/api/payments", json={"amount": "50.00"})).json()["payload"]

    response = await authorized_client.post(
        "/api/payment-details", json={"payment_id": payment["id"], "instrument_id": 404, "amount": "10.00"}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid instrument_id"
