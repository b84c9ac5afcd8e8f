import pytest


@pytest.mark.parametrize(
    "path, label",
    [("type", "Business type"), ("entity", "Business entity"), ("area", "Practice area")],
)
def test_named_item_lifecycle(client, admin_headers, user_headers, path, label):
    resp = client.post(f"/api/business/{path}", json={"name": "Sole Trader"}, headers=admin_headers)
    assert resp.status_code == 201
    item = resp.json()["data"]

    dup = client.post(f"/api/business/{path}", json={"name": "Sole Trader"}, headers=admin_headers)
    assert dup.status_code == 409
    assert dup.json()["detail"] == f"{label} with this name already exists"

    # reads are open to both roles, writes are not
    assert client.get(f"/api/business/{path}/{item['id']}", headers=user_headers).status_code == 200
    assert client.post(f"/api/business/{path}", json={"name": "Other"}, headers=user_headers).status_code == 403

    renamed = client.put(f"/api/business/{path}/{item['id']}", json={"name": "Partnership"}, headers=admin_headers)
    assert renamed.json()["data"]["name"] == "Partnership"

    assert client.delete(f"/api/business/{path}/{item['id']}", headers=admin_headers).status_code == 200
    missing = client.get(f"/api/business/{path}/{item['id']}", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["detail"] == f"{label} not found"

    # a deleted name can be reused
    assert client.post(f"/api/business/{path}", json={"name": "Partnership"}, headers=admin_headers).status_code == 201


def test_named_item_search(client, admin_headers):
    for name in ("Family Law", "Property", "Family Mediation"):
        client.post("/api/business/area", json={"name": name}, headers=admin_headers)
    body = client.get("/api/business/area", params={"search": "family"}, headers=admin_headers).json()
    assert body["totalItems"] == 2


def _area(client, headers, name="Tax"):
    return client.post("/api/business/area", json={"name": name}, headers=headers).json()["data"]


def test_subcategory_requires_existing_area(client, admin_headers):
    resp = client.post("/api/business/subcategory", json={"title": "VAT", "practiceAreaId": 999}, headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Practice area not found"


def test_subcategory_search_orders_by_relevance(client, admin_headers):
    area = _area(client, admin_headers)
    for title in ("Corporate tax", "Taxation", "Tax", "Probate"):
        resp = client.post(
            "/api/business/subcategory", json={"title": title, "practiceAreaId": area["id"]}, headers=admin_headers
        )
        assert resp.status_code == 201

    body = client.get("/api/business/subcategory", params={"search": "tax"}, headers=admin_headers).json()
    assert [s["title"] for s in body["data"]] == ["Tax", "Taxation", "Corporate tax"]

    under_area = client.get(f"/api/business/area/{area['id']}/subcategories", headers=admin_headers).json()
    assert under_area["totalItems"] == 4
    assert client.get("/api/business/area/999/subcategories", headers=admin_headers).status_code == 404


def test_field_group_embeds_live_fields(client, admin_headers, user_headers):
    area = _area(client, admin_headers)
    sub = client.post(
        "/api/business/subcategory", json={"title": "VAT", "practiceAreaId": area["id"]}, headers=admin_headers
    ).json()["data"]

    missing_parent = client.post("/api/business/field-group", json={"title": "Client", "subcategoryId": 999}, headers=admin_headers)
    assert missing_parent.status_code == 404
    assert missing_parent.json()["detail"] == "Subcategory not found"

    group = client.post(
        "/api/business/field-group",
        json={"title": "Client details", "subcategoryId": sub["id"], "linkedTo": "matter"},
        headers=admin_headers,
    ).json()["data"]

    first = client.post(
        "/api/business/field",
        json={"title": "VAT number", "fieldGroupId": group["id"], "type": "text", "templateKeyword": "vat_no"},
        headers=admin_headers,
    ).json()["data"]
    second = client.post(
        "/api/business/field",
        json={"title": "Registered on", "fieldGroupId": group["id"], "type": "date"},
        headers=admin_headers,
    ).json()["data"]
    assert second["type"] == "date"

    client.delete(f"/api/business/field/{second['id']}", headers=admin_headers)

    detail = client.get(f"/api/business/field-group/{group['id']}", headers=user_headers).json()["data"]
    assert detail["linkedTo"] == "matter"
    assert [f["id"] for f in detail["fields"]] == [first["id"]]


def test_custom_field_validation(client, admin_headers):
    bad_type = client.post("/api/business/field", json={"title": "Odd", "type": "hologram"}, headers=admin_headers)
    assert bad_type.status_code == 400

    no_group = client.post("/api/business/field", json={"title": "Orphan", "fieldGroupId": 999}, headers=admin_headers)
    assert no_group.status_code == 404
    assert no_group.json()["detail"] == "Custom field group not found"

    field = client.post("/api/business/field", json={"title": "Notes"}, headers=admin_headers).json()["data"]
    assert field["type"] == "text"
    updated = client.put(f"/api/business/field/{field['id']}", json={"type": "paragraph"}, headers=admin_headers)
    assert updated.json()["data"]["type"] == "paragraph"
    assert updated.json()["data"]["title"] == "Notes"

    assert client.get("/api/business/field/999", headers=admin_headers).json()["detail"] == "Custom field not found"
