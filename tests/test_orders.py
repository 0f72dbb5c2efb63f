def test_list_seeds_and_sorts_by_date(client, db):
    data = client.get("/api/orders").json()["data"]
    assert [o["orderNumber"] for o in data] == ["ORD001", "ORD002", "ORD003", "ORD004", "ORD005"]
    assert db["order"].count_documents({}) == 5


def test_filters(client):
    shipped = client.get("/api/orders", params={"status": "shipped"}).json()["data"]
    assert [o["orderNumber"] for o in shipped] == ["ORD002"]
    refunded = client.get("/api/orders", params={"paymentStatus": "refunded"}).json()["data"]
    assert [o["orderNumber"] for o in refunded] == ["ORD005"]


def test_list_without_database(offline_client):
    data = offline_client.get("/api/orders").json()["data"]
    assert len(data) == 5
    assert data[0]["customer"]["name"] == "Sarah Johnson"


def test_get_order(client):
    data = client.get("/api/orders/3").json()["data"]
    assert data["status"] == "processing"
    assert data["items"][0]["quantity"] == 1
    assert client.get("/api/orders/999").status_code == 404


def test_update_status(client):
    response = client.put("/api/orders", json={"id": "1", "status": "shipped"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "shipped"
    assert data["paymentStatus"] == "paid"
    assert data["updatedAt"] > "2024-02-22T14:15:00"

    assert client.get("/api/orders/1").json()["data"]["status"] == "shipped"


def test_update_payment_status(client):
    data = client.put("/api/orders", json={"id": "4", "paymentStatus": "refunded"}).json()["data"]
    assert data["paymentStatus"] == "refunded"
    assert data["status"] == "confirmed"


def test_any_transition_allowed(client):
    client.put("/api/orders", json={"id": "5", "status": "delivered"})
    data = client.get("/api/orders/5").json()["data"]
    assert data["status"] == "delivered"


def test_invalid_status(client):
    response = client.put("/api/orders", json={"id": "1", "status": "lost"})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "status"


def test_nothing_to_update(client):
    response = client.put("/api/orders", json={"id": "1"})
    assert response.status_code == 400


def test_unknown_order(client):
    response = client.put("/api/orders", json={"id": "999", "status": "shipped"})
    assert response.status_code == 404
    assert response.json()["message"] == "Order not found"


def test_update_needs_database(offline_client):
    response = offline_client.put("/api/orders", json={"id": "1", "status": "shipped"})
    assert response.status_code == 503
