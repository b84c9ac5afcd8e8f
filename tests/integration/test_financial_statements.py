import pytest


def statement_payload(email="client@example.com", **overrides):
    payload = {
        "matterId": "M-17",
        "customerName": "Grace Hopper",
        "customerEmail": email,
        "caseDescription": "Purchase of 1 Harbour Street",
        "completionDate": "2026-03-31T00:00:00Z",
        "disbursements": [
            {"description": "Search fees", "charges": 100, "vatAmount": 20},
            {"description": "Land registry", "charges": 50},
        ],
        "ourCost": [{"description": "Legal fee", "charges": 1000, "vatAmount": 200}],
        "summary": [{"label": "Deposit", "subTotal": -500}],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def customer(customer_factory):
    return customer_factory()


def _statement(client, headers, **overrides):
    resp = client.post("/api/financial-statements", json=statement_payload(**overrides), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def test_create_computes_totals(client, admin_headers, customer):
    statement = _statement(client, admin_headers)
    assert statement["customerId"] == customer.id
    assert statement["status"] == "draft"
    assert [row["total"] for row in statement["disbursements"]] == [120, 50]
    assert statement["totalDisbursements"] == 170
    assert statement["totalOurCosts"] == 1200
    assert statement["summary"][0]["total"] == -500
    assert statement["totalAmountRequired"] == 870


def test_unknown_customer_or_currency(client, admin_headers, customer):
    resp = client.post(
        "/api/financial-statements", json=statement_payload("nobody@example.com"), headers=admin_headers
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Customer not found"

    resp = client.post("/api/financial-statements", json=statement_payload(currencyId=999), headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Currency not found"


def test_requires_super_admin(client, user_headers, customer):
    resp = client.post("/api/financial-statements", json=statement_payload(), headers=user_headers)
    assert resp.status_code == 403


def test_customer_listing_converts_amounts(client, admin_headers, customer, currency_factory):
    currency = currency_factory("USD", exchange_rate=2)
    _statement(client, admin_headers, matterId="M-1")
    _statement(client, admin_headers, matterId="M-2", currencyId=currency.id)

    data = client.get(f"/api/financial-statements/customer/{customer.id}", headers=admin_headers).json()["data"]
    by_matter = {s["matterId"]: s for s in data}
    assert by_matter["M-1"]["totalAmountRequired"] == 870
    converted = by_matter["M-2"]
    assert converted["totalAmountRequired"] == 1740
    assert converted["disbursements"][0]["charges"] == 200
    assert converted["summary"][0]["subTotal"] == -1000

    # stored values stay in the base currency
    stored = client.get(f"/api/financial-statements/{converted['id']}", headers=admin_headers).json()["data"]
    assert stored["totalAmountRequired"] == 870

    missing = client.get("/api/financial-statements/customer/9999", headers=admin_headers)
    assert missing.status_code == 404


def test_list_and_replace(client, admin_headers, customer):
    statement = _statement(client, admin_headers)
    listing = client.get("/api/financial-statements", params={"customerId": customer.id}, headers=admin_headers).json()
    assert listing["totalItems"] == 1

    resp = client.put(
        f"/api/financial-statements/{statement['id']}",
        json=statement_payload(disbursements=[], ourCost=[{"charges": 10}], summary=[], status="sent"),
        headers=admin_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["status"] == "sent"
    assert data["disbursements"] == []
    assert data["totalAmountRequired"] == 10


def test_remove_lines(client, admin_headers, customer):
    statement = _statement(client, admin_headers)
    resp = client.delete(f"/api/financial-statements/{statement['id']}/disbursements/0", headers=admin_headers)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["message"] == "Disbursement item deleted successfully"
    assert body["data"]["removedItem"]["description"] == "Search fees"
    assert body["data"]["updatedStatement"]["totalDisbursements"] == 50
    assert body["data"]["updatedStatement"]["totalAmountRequired"] == 750

    resp = client.delete(f"/api/financial-statements/{statement['id']}/our-costs/0", headers=admin_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["message"] == "Our cost item deleted successfully"
    assert resp.json()["data"]["updatedStatement"]["ourCost"] == []

    bad = client.delete(f"/api/financial-statements/{statement['id']}/our-costs/0", headers=admin_headers)
    assert bad.status_code == 400
    assert bad.json()["detail"] == "Invalid our cost item index"
    bad = client.delete(f"/api/financial-statements/{statement['id']}/disbursements/3", headers=admin_headers)
    assert bad.json()["detail"] == "Invalid disbursement item index"


def test_soft_delete(client, admin_headers, customer):
    statement = _statement(client, admin_headers)
    assert client.delete(f"/api/financial-statements/{statement['id']}", headers=admin_headers).status_code == 200
    gone = client.get(f"/api/financial-statements/{statement['id']}", headers=admin_headers)
    assert gone.status_code == 404
    assert gone.json()["detail"] == "Financial statement not found"
