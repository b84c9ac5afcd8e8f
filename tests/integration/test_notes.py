def _note(client, headers, **overrides):
    payload = {"title": "First call", "content": "Discussed lease terms", "customerId": 3, "type": "call"}
    payload.update(overrides)
    resp = client.post("/api/notes", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def test_both_roles_manage_notes(client, admin_headers, user_headers):
    note = _note(client, user_headers)
    resp = client.put(f"/api/notes/{note['id']}", json={"title": "Follow-up"}, headers=admin_headers)
    assert resp.json()["data"]["title"] == "Follow-up"
    assert resp.json()["data"]["content"] == "Discussed lease terms"

    assert client.delete(f"/api/notes/{note['id']}", headers=user_headers).status_code == 200
    missing = client.get(f"/api/notes/{note['id']}", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Note not found"


def test_list_filters(client, user_headers):
    _note(client, user_headers, title="Lease call", type="call", customerId=3)
    _note(client, user_headers, title="Probate memo", type="memo", customerId=4, content="Will review")

    memos = client.get("/api/notes", params={"type": "memo"}, headers=user_headers).json()
    assert [n["title"] for n in memos["data"]] == ["Probate memo"]
    by_customer = client.get("/api/notes", params={"customerId": 3}, headers=user_headers).json()
    assert [n["title"] for n in by_customer["data"]] == ["Lease call"]
    searched = client.get("/api/notes", params={"search": "probate"}, headers=user_headers).json()
    assert [n["title"] for n in searched["data"]] == ["Probate memo"]
    oldest_first = client.get("/api/notes", params={"order": "asc"}, headers=user_headers).json()
    assert [n["title"] for n in oldest_first["data"]] == ["Lease call", "Probate memo"]


def test_customer_notes(client, user_headers):
    _note(client, user_headers, customerId=3)
    _note(client, user_headers, customerId=3, title="Second")
    _note(client, user_headers, customerId=4)
    data = client.get("/api/notes/customer/3", headers=user_headers).json()["data"]
    assert len(data) == 2
    assert {n["customerId"] for n in data} == {3}


def test_notes_require_authentication(client):
    assert client.get("/api/notes").status_code == 401
