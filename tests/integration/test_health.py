def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_unknown_route(client):
    assert client.get("/api/nothing-here").status_code == 404
