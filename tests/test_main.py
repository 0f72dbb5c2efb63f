def test_root(client):
    assert client.get("/").json() == {"message": "Kaaya Beauty Store API running"}


def test_health_check(client, db):
    db["product"].insert_one({"name": "Kajal"})
    body = client.get("/test").json()
    assert body["database"] == "✅ Connected"
    assert "product" in body["collections"]


def test_health_check_offline(offline_client):
    assert offline_client.get("/test").json()["database"] == "❌ Not Available"


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_admin_mount_hidden_from_schema(client):
    paths = client.get("/openapi.json").json()["paths"]
    assert "/api/categories" in paths
    assert not any(path.startswith("/admin") for path in paths)
    assert client.get("/admin/products").status_code == 200
