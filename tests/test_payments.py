import pytest

from qudrat.payments import spay_router


async def make_user(client, name="Omar"):
    response = await client.post("/api/users", json={"name": name, "email": f"{name.lower()}@example.com"})
    return response.json()["data"]["_id"]


async def test_create_payment_requires_fields(client):
    response = await client.post("/api/payments", json={"amount": 10})

    assert response.status_code == 400
    assert response.json()["error"] == "UserId, amount, and paymentMethod are required"


async def test_create_payment_defaults(client):
    user_id = await make_user(client)

    response = await client.post(
        "/api/payments",
        json={"userId": user_id, "amount": 9.99, "paymentMethod": "spay", "requestId": 4821},
    )

    assert response.status_code == 201
    payment = response.json()["data"]
    assert payment["currency"] == "USD"
    assert payment["status"] == "pending"
    assert payment["requestId"] == "4821"


async def test_create_payment_rejects_unknown_method(client):
    user_id = await make_user(client)

    response = await client.post(
        "/api/payments",
        json={"userId": user_id, "amount": 5, "paymentMethod": "bitcoin"},
    )

    assert response.status_code == 400


async def test_list_payments_populates_and_paginates(client):
    user_id = await make_user(client)
    other_id = await make_user(client, "Sara")
    for _ in range(3):
        await client.post("/api/payments", json={"userId": user_id, "amount": 1, "paymentMethod": "card"})
    await client.post("/api/payments", json={"userId": other_id, "amount": 1, "paymentMethod": "card"})

    response = await client.get("/api/payments", params={"userId": user_id, "limit": 2})

    body = response.json()
    assert len(body["data"]) == 2
    assert body["data"][0]["userId"] == {"_id": user_id, "name": "Omar", "email": "omar@example.com"}
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}


async def test_update_payment_status(client, object_id):
    user_id = await make_user(client)
    created = await client.post("/api/payments", json={"userId": user_id, "amount": 3, "paymentMethod": "paypal"})
    payment_id = created.json()["data"]["_id"]

    updated = await client.put(f"/api/payments/{payment_id}", json={"status": "completed", "transactionId": "tx-1"})
    fetched = await client.get(f"/api/payments/{payment_id}")

    assert updated.json()["data"]["status"] == "completed"
    assert updated.json()["data"]["userId"]["name"] == "Omar"
    assert fetched.json()["data"]["transactionId"] == "tx-1"
    assert (await client.get(f"/api/payments/{object_id}")).json()["error"] == "Payment not found"
    assert (await client.put(f"/api/payments/{object_id}", json={"status": "failed"})).status_code == 404


# ==================== SPAY ====================

SPAY = "/api/payment/spay"
TOKEN = {"token": "dummy_token_1_abc"}


async def test_spay_login(client):
    missing = await client.post(f"{SPAY}/login", json={"login": "admin"})
    ok = await client.post(f"{SPAY}/login", json={"login": "admin", "password": "secret"})

    assert missing.status_code == 400
    assert missing.json() == {
        "responseMessage": "Login and password are required",
        "status": False,
        "responseCode": 104,
    }
    body = ok.json()
    assert body["responseCode"] == 1
    assert body["token"].startswith("dummy_token_")
    assert len(body["expireDate"]) == 19


async def test_spay_public_key(client):
    response = await client.post(f"{SPAY}/get-public-key", json={"providerKey": "qudrat"})

    assert response.json()["publicKey"] == "RFVNTVlfUFVCTElDX0tFWV9GT1JfVEVTVElORw=="


@pytest.mark.parametrize("endpoint", ["check-subscription", "init-pay", "payment", "unsubscribe"])
async def test_spay_requires_token(client, endpoint):
    response = await client.post(f"{SPAY}/{endpoint}", json={})

    assert response.status_code == 401
    assert response.json()["responseCode"] == 103


async def test_spay_token_checked_before_body(client):
    response = await client.post(f"{SPAY}/check-subscription")

    assert response.status_code == 401
    assert response.json()["responseCode"] == 103


async def test_spay_malformed_body(client):
    response = await client.post(
        f"{SPAY}/payment", headers={**TOKEN, "Content-Type": "application/json"}, content="{bad",
    )

    assert response.status_code == 500
    assert response.json()["responseCode"] == 0
    assert response.json()["status"] is False


async def test_spay_login_without_body(client):
    response = await client.post(f"{SPAY}/login")

    assert response.status_code == 500
    assert response.json()["responseCode"] == 0


async def test_check_subscription_active(client, monkeypatch):
    monkeypatch.setattr(spay_router.random, "random", lambda: 0.9)

    response = await client.post(
        f"{SPAY}/check-subscription", headers=TOKEN, json={"msisdn": "249912345678", "serviceCode": "QA"},
    )

    body = response.json()
    assert body["responseCode"] == 1
    assert body["status"] is True
    assert len(body["endSubDate"]) == 19


async def test_check_subscription_not_subscribed(client, monkeypatch):
    monkeypatch.setattr(spay_router.random, "random", lambda: 0.1)

    response = await client.post(
        f"{SPAY}/check-subscription", headers=TOKEN, json={"msisdn": "249912345678", "serviceCode": "QA"},
    )

    assert response.json() == {
        "responseMessage": "this MSISDN is not subscribed to the service",
        "status": False,
        "responseCode": 117,
        "endSubDate": None,
    }


async def test_init_pay_validates_msisdn(client):
    bad = await client.post(f"{SPAY}/init-pay", headers=TOKEN, json={"msisdn": "12ab", "serviceCode": "QA"})
    ok = await client.post(f"{SPAY}/init-pay", headers=TOKEN, json={"msisdn": 249912345678, "serviceCode": "QA"})

    assert bad.status_code == 400
    assert bad.json()["responseCode"] == 106
    assert 1 <= ok.json()["requestId"] <= 100000
    assert ok.json()["isSent"] is True


async def test_payment_pin_and_outcomes(client, monkeypatch):
    bad_pin = await client.post(f"{SPAY}/payment", headers=TOKEN, json={"pin": "12345", "requestId": 7})
    monkeypatch.setattr(spay_router.random, "random", lambda: 0.05)
    declined = await client.post(f"{SPAY}/payment", headers=TOKEN, json={"pin": "1234", "requestId": 7})
    monkeypatch.setattr(spay_router.random, "random", lambda: 0.5)
    paid = await client.post(f"{SPAY}/payment", headers=TOKEN, json={"pin": "1234", "requestId": 7})

    assert bad_pin.json()["responseCode"] == 105
    assert declined.json()["responseCode"] == 111
    assert declined.json()["responseMessage"] == "Insufficient balance"
    assert paid.json()["responseCode"] == 1


async def test_unsubscribe(client):
    missing = await client.post(f"{SPAY}/unsubscribe", headers=TOKEN, json={"msisdn": "249912345678"})
    ok = await client.post(f"{SPAY}/unsubscribe", headers=TOKEN, json={"msisdn": "249912345678", "serviceCode": "QA"})

    assert missing.json()["responseCode"] == 104
    assert ok.json()["responseCode"] == 1
