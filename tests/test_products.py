import pytest

PRODUCT = {
    "name": "Hydrating Toner",
    "description": "Alcohol-free toner with rose water",
    "price": 450,
    "category": "Skincare",
    "subcategory": "Toner",
    "brand": "Plum",
    "image": "https://example.com/toner.png",
    "stockCount": 12,
}


@pytest.fixture
def product(client):
    response = client.post("/api/products", json=PRODUCT)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def test_list_seeds_empty_collection(client, db):
    body = client.get("/api/products").json()
    assert body["success"] is True
    assert len(body["data"]) == 6
    assert db["product"].count_documents({}) == 6
    # second read does not seed again
    assert len(client.get("/api/products").json()["data"]) == 6


def test_list_without_database(offline_client):
    data = offline_client.get("/api/products").json()["data"]
    assert len(data) == 6
    makeup = offline_client.get("/api/products", params={"category": "Makeup"}).json()["data"]
    assert len(makeup) == 3


def test_fallback_product_out_of_stock(offline_client):
    data = offline_client.get("/api/products/6").json()["data"]
    assert data["inStock"] is False
    assert data["stockCount"] == 0


def test_search(client):
    client.get("/api/products")
    data = client.get("/api/products", params={"search": "ordinary"}).json()["data"]
    assert [p["brand"] for p in data] == ["The Ordinary"]


def test_create(product):
    assert product["inStock"] is True
    assert product["stockCount"] == 12
    assert product["isActive"] is True
    assert product["id"] == product["_id"]
    assert "createdAt" in product and "updatedAt" in product


def test_create_derives_in_stock(client):
    data = client.post("/api/products", json=dict(PRODUCT, stockCount=0)).json()["data"]
    assert data["inStock"] is False


def test_create_rejects_conflicting_stock(client):
    response = client.post("/api/products", json=dict(PRODUCT, stockCount=0, inStock=True))
    assert response.status_code == 400
    assert response.json()["message"] == "Validation errors"


def test_create_with_in_stock_only(client):
    payload = {k: v for k, v in PRODUCT.items() if k != "stockCount"}
    data = client.post("/api/products", json=dict(payload, inStock=False)).json()["data"]
    assert data["inStock"] is False
    assert data["stockCount"] is None


def test_untracked_stock_defaults_to_in_stock(client):
    payload = {k: v for k, v in PRODUCT.items() if k != "stockCount"}
    data = client.post("/api/products", json=payload).json()["data"]
    assert data["inStock"] is True
    assert data["stockCount"] is None


def test_create_requires_fields(client):
    response = client.post("/api/products", json={"name": "Nameless", "price": -5})
    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert {"price", "description", "category", "brand", "image"} <= fields


def test_get_and_update(client, product):
    response = client.put(f"/api/products/{product['id']}", json={"price": 399, "stockCount": 0})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["price"] == 399
    assert data["inStock"] is False
    assert data["name"] == PRODUCT["name"]

    fetched = client.get(f"/api/products/{product['id']}").json()["data"]
    assert fetched["price"] == 399


def test_update_missing(client):
    response = client.put("/api/products/507f1f77bcf86cd799439011", json={"price": 10})
    assert response.status_code == 404
    assert response.json()["message"] == "Product not found"


def test_delete(client, product):
    response = client.delete(f"/api/products/{product['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["name"] == PRODUCT["name"]
    assert client.get(f"/api/products/{product['id']}").status_code == 404


def test_import(client, db):
    response = client.post("/api/products/import", json={"count": 10, "categories": ["Skincare"]})
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["imported"] == 10
    assert data["total"] == 10
    assert len(data["products"]) == 5
    assert db["product"].count_documents({"category": "Skincare"}) == 10
    assert response.json()["message"] == "Successfully imported 10 products"


def test_import_unknown_category(client):
    response = client.post("/api/products/import", json={"count": 5, "categories": ["Jewellery"]})
    assert response.status_code == 400
    assert "Jewellery" in response.json()["message"]


def test_import_needs_database(offline_client):
    assert offline_client.post("/api/products/import", json={"count": 5}).status_code == 503


def test_update_in_stock_must_match_stored_count(client, product):
    response = client.put(f"/api/products/{product['id']}", json={"inStock": False})
    assert response.status_code == 400
    assert response.json()["message"] == "inStock must match stockCount"
    assert client.get(f"/api/products/{product['id']}").json()["data"]["inStock"] is True

    assert client.put(f"/api/products/{product['id']}", json={"inStock": True}).status_code == 200


def test_update_in_stock_when_untracked(client):
    payload = {k: v for k, v in PRODUCT.items() if k != "stockCount"}
    created = client.post("/api/products", json=payload).json()["data"]
    data = client.put(f"/api/products/{created['id']}", json={"inStock": False}).json()["data"]
    assert data["inStock"] is False
    assert data["stockCount"] is None
