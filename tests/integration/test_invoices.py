def _invoice(client, headers, **overrides):
    payload = {
        "invoiceNumber": "INV-001",
        "customerId": 7,
        "items": [
            {"description": "Advice", "quantity": 2, "amount": 50, "vatRate": "20%"},
            {
                "description": "Filing",
                "quantity": 1,
                "amount": 200,
                "isDiscount": True,
                "discountType": "percentage",
                "discountValue": 10,
            },
        ],
    }
    payload.update(overrides)
    resp = client.post("/api/invoices", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def test_totals_computed_from_items(client, user_headers):
    invoice = _invoice(client, user_headers)
    assert invoice["subTotal"] == 300
    assert invoice["vatTotal"] == 20
    assert invoice["discountTotal"] == 20
    assert invoice["amount"] == 300
    assert invoice["outstandingBalance"] == 300
    assert invoice["items"][0]["total"] == 120
    assert invoice["items"][1]["discountAmount"] == 20
    assert invoice["status"] == "draft"
    assert invoice["paymentStatus"] == "pending"


def test_amount_only_invoice(client, user_headers):
    invoice = _invoice(client, user_headers, items=[], amount=99.5)
    assert invoice["amount"] == 99.5
    assert invoice["items"] == []


def test_items_or_amount_required(client, user_headers):
    resp = client.post("/api/invoices", json={"invoiceNumber": "INV-9", "customerId": 1}, headers=user_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Either items or amount is required"


def test_update_recomputes_totals(client, admin_headers):
    invoice = _invoice(client, admin_headers)
    resp = client.put(
        f"/api/invoices/{invoice['id']}",
        json={"status": "sent", "items": [{"quantity": 3, "amount": 10}]},
        headers=admin_headers,
    )
    data = resp.json()["data"]
    assert data["status"] == "sent"
    assert data["amount"] == 30
    assert data["invoiceNumber"] == "INV-001"


def test_list_filters_and_customer_lookup(client, user_headers):
    _invoice(client, user_headers, invoiceNumber="INV-001", customerId=7)
    _invoice(client, user_headers, invoiceNumber="INV-002", customerId=8, status="paid", paymentStatus="paid")

    paid = client.get("/api/invoices", params={"status": "paid"}, headers=user_headers).json()
    assert [i["invoiceNumber"] for i in paid["data"]] == ["INV-002"]
    pending = client.get("/api/invoices", params={"paymentStatus": "pending"}, headers=user_headers).json()
    assert [i["invoiceNumber"] for i in pending["data"]] == ["INV-001"]

    mine = client.get("/api/invoices/customer/7", headers=user_headers).json()
    assert [i["invoiceNumber"] for i in mine["data"]] == ["INV-001"]
    assert client.get("/api/invoices/customer/404", headers=user_headers).json()["data"] == []


def test_stats_for_current_month(client, user_headers):
    _invoice(client, user_headers, invoiceNumber="INV-001")
    _invoice(client, user_headers, invoiceNumber="INV-002", status="overdue")
    _invoice(client, user_headers, invoiceNumber="INV-003", status="paid", items=[], amount=10)

    stats = client.get("/api/invoices/stats", headers=user_headers).json()["data"]
    assert stats["totalInvoices"] == 3
    assert stats["draft"] == 1
    assert stats["overdue"] == 1
    assert stats["paid"] == 1
    assert stats["unsent"] == 1
    assert stats["totalAmount"] == 610
    assert stats["totalOutstanding"] == 300

    empty = client.get(
        "/api/invoices/stats", params={"startDate": "2000-01-01", "endDate": "2000-01-31"}, headers=user_headers
    ).json()["data"]
    assert empty["totalInvoices"] == 0
    assert empty["totalAmount"] == 0


def test_soft_delete(client, user_headers):
    invoice = _invoice(client, user_headers)
    assert client.delete(f"/api/invoices/{invoice['id']}", headers=user_headers).status_code == 200
    missing = client.get(f"/api/invoices/{invoice['id']}", headers=user_headers)
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Invoice not found"


def test_null_for_required_field_keeps_value(client, user_headers):
    invoice = _invoice(client, user_headers)
    resp = client.put(
        f"/api/invoices/{invoice['id']}",
        json={"invoiceNumber": None, "status": None, "paymentStatus": None, "plan": None},
        headers=user_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["invoiceNumber"] == "INV-001"
    assert data["status"] == "draft"
    assert data["paymentStatus"] == "pending"
    assert data["plan"] is None


def test_cancel_invoice(client, user_headers):
    invoice = _invoice(client, user_headers)
    resp = client.patch(
        f"/api/invoices/{invoice['id']}/cancel", json={"reason": "Raised twice"}, headers=user_headers
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["status"] == "cancelled"
    assert data["paymentStatus"] == "cancelled"
    assert data["outstandingBalance"] == 0
    assert data["amount"] == 300

    # the reason is optional
    other = _invoice(client, user_headers, invoiceNumber="INV-002")
    assert client.patch(f"/api/invoices/{other['id']}/cancel", headers=user_headers).status_code == 200


def test_paid_invoice_cannot_be_cancelled(client, user_headers):
    invoice = _invoice(client, user_headers, status="paid", paymentStatus="paid")
    resp = client.patch(f"/api/invoices/{invoice['id']}/cancel", json={}, headers=user_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Cannot cancel paid invoice. Please process a refund instead."
    assert client.patch("/api/invoices/999/cancel", json={}, headers=user_headers).status_code == 404


def test_mark_invoice_bad(client, user_headers):
    invoice = _invoice(client, user_headers)
    assert invoice["markedBadOn"] is None
    resp = client.patch(f"/api/invoices/{invoice['id']}/mark-bad", headers=user_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["status"] == "bad"
    assert data["markedBadOn"] is not None
    assert resp.json()["message"] == "Invoice marked as bad successfully"


def test_delete_invoice_item_recomputes_totals(client, user_headers):
    invoice = _invoice(client, user_headers)
    resp = client.delete(f"/api/invoices/{invoice['id']}/items/1", headers=user_headers)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["message"] == "Invoice item removed successfully"
    assert body["data"]["removedItem"]["description"] == "Filing"
    updated = body["data"]["updatedInvoice"]
    assert [item["description"] for item in updated["items"]] == ["Advice"]
    assert updated["subTotal"] == 100
    assert updated["discountTotal"] == 0
    assert updated["amount"] == 120

    bad_index = client.delete(f"/api/invoices/{invoice['id']}/items/5", headers=user_headers)
    assert bad_index.status_code == 400
    assert bad_index.json()["detail"] == "Invalid Invoice item index"


def test_delete_item_from_paid_invoice(client, user_headers):
    invoice = _invoice(client, user_headers, paymentStatus="paid")
    resp = client.delete(f"/api/invoices/{invoice['id']}/items/0", headers=user_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invoice already Paid"


def test_vat_stats_scoped_to_caller(client, user_headers, admin_headers, customer_factory, currency_factory):
    first = _invoice(client, user_headers, invoiceNumber="INV-001")
    _invoice(client, user_headers, invoiceNumber="INV-002")
    _invoice(client, admin_headers, invoiceNumber="INV-003")
    customer = customer_factory()
    currency = currency_factory()
    resp = client.post(
        "/api/credit-notes",
        json={
            "creditNoteNumber": "CN-001",
            "amount": 15,
            "customerId": customer.id,
            "invoiceId": first["id"],
            "currencyId": currency.id,
        },
        headers=user_headers,
    )
    assert resp.status_code == 201, resp.text

    stats = client.get("/api/invoices/vat-stats", headers=user_headers).json()["data"]
    assert stats["totalVatCollected"] == 40
    assert stats["totalVatPaid"] == 0
    assert stats["netVatOwed"] == 40
    assert stats["invoicesFiled"] == 2
    assert stats["creditNotesApplied"] == 15

    admin_stats = client.get("/api/invoices/vat-stats", headers=admin_headers).json()["data"]
    assert admin_stats["invoicesFiled"] == 1
    assert admin_stats["creditNotesApplied"] == 0

    empty = client.get(
        "/api/invoices/vat-stats", params={"startDate": "2000-01-01", "endDate": "2000-01-31"}, headers=user_headers
    ).json()["data"]
    assert empty["totalVatCollected"] == 0
    assert empty["invoicesFiled"] == 0
