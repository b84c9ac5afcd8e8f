def _heads_up(client, headers, **overrides):
    payload = {"name": "Weekly overdue invoices", "module": "invoices", "frequency": "weekly", "timeOfDay": "08:30"}
    payload.update(overrides)
    resp = client.post("/api/heads-up", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def test_create_defaults(client, admin_headers):
    item = _heads_up(client, admin_headers)
    assert item["status"] == "active"
    assert item["enabled"] is True
    assert item["rowsInEmail"] == 0


def test_time_of_day_validated(client, admin_headers):
    resp = client.post(
        "/api/heads-up",
        json={"name": "Bad", "module": "invoices", "frequency": "daily", "timeOfDay": "25:00"},
        headers=admin_headers,
    )
    assert resp.status_code == 400


def test_toggle_enable_disable(client, admin_headers):
    item = _heads_up(client, admin_headers)
    url = f"/api/heads-up/{item['id']}"

    resp = client.patch(f"{url}/toggle-status", headers=admin_headers)
    assert resp.json()["message"] == "Heads-up notification disabled successfully"
    assert resp.json()["data"]["status"] == "inactive"
    assert resp.json()["data"]["enabled"] is False

    resp = client.patch(f"{url}/toggle-status", headers=admin_headers)
    assert resp.json()["message"] == "Heads-up notification enabled successfully"
    assert resp.json()["data"]["status"] == "active"

    resp = client.patch(f"{url}/disable", headers=admin_headers)
    assert resp.json()["data"]["status"] == "inactive"
    resp = client.patch(f"{url}/enable", headers=admin_headers)
    assert resp.json()["data"]["enabled"] is True


def test_partial_update_merges(client, admin_headers):
    item = _heads_up(client, admin_headers, rule="amount > 100")
    resp = client.put(f"/api/heads-up/{item['id']}", json={"frequency": "daily", "name": None}, headers=admin_headers)
    data = resp.json()["data"]
    assert data["frequency"] == "daily"
    assert data["name"] == "Weekly overdue invoices"
    assert data["rule"] == "amount > 100"


def test_list_filters_and_delete(client, admin_headers):
    first = _heads_up(client, admin_headers, module="invoices")
    _heads_up(client, admin_headers, module="matters", status="inactive")

    assert client.get("/api/heads-up", params={"module": "matters"}, headers=admin_headers).json()["totalItems"] == 1
    active = client.get("/api/heads-up", params={"status": "active"}, headers=admin_headers).json()
    assert [h["id"] for h in active["data"]] == [first["id"]]

    assert client.delete(f"/api/heads-up/{first['id']}", headers=admin_headers).status_code == 200
    missing = client.patch(f"/api/heads-up/{first['id']}/enable", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Heads-up notification not found"


def test_heads_up_requires_super_admin(client, user_headers):
    assert client.get("/api/heads-up", headers=user_headers).status_code == 403
