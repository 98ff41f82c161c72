"""
Product catalog API.

Verifies:
- CRUD status codes
- Companion inventory creation / deletion
- Validation reports every violation at once
- Direct stock edits reach the inventory row
"""

import pytest

from conftest import product_payload


def _inventory_for(client, product_id):
    return next(
        (item for item in client.get("/api/inventory").get_json() if item["productId"] == product_id),
        None,
    )


class TestProductCRUD:

    def test_create_product(self, client):
        resp = client.post("/api/products", json=product_payload(stock=75))

        assert resp.status_code == 201
        data = resp.get_json()
        assert data["ref"] == "P200"
        assert data["category"] == "Categoria B"
        assert data["price"] == "45.00"
        assert data["stock"] == 75
        assert data["id"]
        assert data["createdAt"].endswith("Z")

    def test_stock_defaults_to_zero(self, client):
        data = client.post("/api/products", json=product_payload()).get_json()

        assert data["stock"] == 0
        assert _inventory_for(client, data["id"])["status"] == "agotado"

    def test_ids_are_unique(self, client):
        first = client.post("/api/products", json=product_payload()).get_json()
        second = client.post("/api/products", json=product_payload()).get_json()
        assert first["id"] != second["id"]

    def test_list_and_get(self, client):
        created = client.post("/api/products", json=product_payload()).get_json()

        listed = client.get("/api/products")
        assert listed.status_code == 200
        assert [p["id"] for p in listed.get_json()] == [created["id"]]

        fetched = client.get(f"/api/products/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.get_json() == created

    def test_get_missing_product(self, client):
        resp = client.get("/api/products/nope")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Product not found"}

    def test_price_is_normalized(self, client):
        data = client.post("/api/products", json=product_payload(price=25.5)).get_json()
        assert data["price"] == "25.50"


class TestCompanionInventory:

    @pytest.mark.parametrize(
        "stock,expected",
        [(0, "agotado"), (10, "bajo_stock"), (11, "disponible")],
    )
    def test_inventory_created_with_product(self, client, stock, expected):
        product = client.post("/api/products", json=product_payload(stock=stock)).get_json()

        inventory = _inventory_for(client, product["id"])
        assert inventory["unit"] == "Unidades"
        assert inventory["stock"] == stock
        assert inventory["status"] == expected

    def test_delete_removes_inventory(self, client):
        keep = client.post("/api/products", json=product_payload(ref="KEEP", stock=20)).get_json()
        gone = client.post("/api/products", json=product_payload(ref="GONE", stock=20)).get_json()

        resp = client.delete(f"/api/products/{gone['id']}")

        assert resp.status_code == 204
        assert client.get(f"/api/products/{gone['id']}").status_code == 404
        remaining = client.get("/api/inventory").get_json()
        assert [item["productId"] for item in remaining] == [keep["id"]]

    def test_delete_missing_product_leaves_inventory(self, client):
        client.post("/api/products", json=product_payload(stock=20))
        before = client.get("/api/inventory").get_json()

        resp = client.delete("/api/products/nope")

        assert resp.status_code == 404
        assert client.get("/api/inventory").get_json() == before


class TestProductUpdate:

    def test_partial_update_keeps_other_fields(self, client):
        product = client.post("/api/products", json=product_payload(stock=30)).get_json()

        resp = client.put(f"/api/products/{product['id']}", json={"name": "Adhesivo PVC"})

        assert resp.status_code == 200
        data = resp.get_json()
        assert data["name"] == "Adhesivo PVC"
        assert data["ref"] == product["ref"]
        assert data["stock"] == 30

    def test_stock_edit_reaches_inventory(self, client):
        product = client.post("/api/products", json=product_payload(stock=30)).get_json()

        resp = client.put(f"/api/products/{product['id']}", json={"stock": 4})

        assert resp.status_code == 200
        assert resp.get_json()["stock"] == 4
        inventory = _inventory_for(client, product["id"])
        assert inventory["stock"] == 4
        assert inventory["status"] == "bajo_stock"

    def test_update_without_stock_leaves_inventory_alone(self, client):
        product = client.post("/api/products", json=product_payload(stock=30)).get_json()
        before = _inventory_for(client, product["id"])

        client.put(f"/api/products/{product['id']}", json={"price": "50"})

        assert _inventory_for(client, product["id"]) == before

    def test_update_missing_product(self, client):
        resp = client.put("/api/products/nope", json={"name": "x"})
        assert resp.status_code == 404

    def test_update_invalid_payload(self, client):
        product = client.post("/api/products", json=product_payload()).get_json()

        resp = client.put(f"/api/products/{product['id']}", json={"stock": "lots"})

        assert resp.status_code == 400
        assert resp.get_json()["errors"] == [
            {"field": "stock", "message": "stock must be an integer"}
        ]


class TestProductValidation:

    def test_reports_every_missing_field(self, client):
        resp = client.post("/api/products", json={})

        assert resp.status_code == 400
        body = resp.get_json()
        assert body["error"] == "Invalid data"
        assert {e["field"] for e in body["errors"]} == {"ref", "name", "category", "price"}

    def test_reports_every_invalid_field(self, client):
        resp = client.post("/api/products", json=product_payload(
            name="",
            category="Categoria Z",
            price="-1",
            stock=1.5,
            color="red",
        ))

        assert resp.status_code == 400
        fields = sorted(e["field"] for e in resp.get_json()["errors"])
        assert fields == ["category", "color", "name", "price", "stock"]

    def test_rejects_non_object_payload(self, client):
        resp = client.post("/api/products", json=[1, 2, 3])
        assert resp.status_code == 400

    def test_rejects_missing_body(self, client):
        resp = client.post("/api/products", data="not json", content_type="text/plain")
        assert resp.status_code == 400

    def test_rejects_stock_beyond_64_bits(self, client):
        resp = client.post("/api/products", json=product_payload(stock=2**63))

        assert resp.status_code == 400
        assert resp.get_json()["errors"] == [{"field": "stock", "message": "stock is out of range"}]
        assert client.get("/api/products").get_json() == []
