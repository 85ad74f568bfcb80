"""
Tests for the cart HTTP API
"""

import pytest
from fastapi.testclient import TestClient

from cart_service import main


@pytest.fixture
def client(engine, monkeypatch):
    """Test client wired to the fake-backed engine; lifespan is not run."""
    monkeypatch.setattr(main, "engine", engine)
    return TestClient(main.app)


class TestCartAPI:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "cart-service", "version": "1.0.0"}

    def test_empty_cart(self, client):
        response = client.get("/cart")

        assert response.status_code == 200
        assert response.json()["items"] == []
        assert response.json()["item_count"] == 0

    def test_add_then_view(self, client, inventory):
        assert client.post("/cart/items/1").status_code == 200
        response = client.post("/cart/items/1")

        body = response.json()
        assert response.status_code == 200
        assert body["item_count"] == 2
        assert body["items"][0]["product_id"] == 1
        assert body["items"][0]["amount"] == 2
        assert float(body["subtotal"]) == pytest.approx(359.8)
        assert inventory.stock[1] == 1
        assert client.get("/cart").json() == body

    def test_out_of_stock_is_conflict(self, client):
        client.post("/cart/items/3")
        client.post("/cart/items/3")

        response = client.post("/cart/items/3")

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "out_of_stock"

    def test_unknown_stock_is_bad_gateway(self, client):
        response = client.post("/cart/items/99")

        assert response.status_code == 502
        assert response.json()["detail"]["error"] == "stock_unavailable"

    def test_update_amount(self, client, inventory):
        client.post("/cart/items/2")

        response = client.put("/cart/items/2", json={"amount": 3})

        assert response.status_code == 200
        assert response.json()["items"][0]["amount"] == 3
        assert inventory.stock[2] == 2

    def test_update_invalid_amount(self, client):
        client.post("/cart/items/2")

        response = client.put("/cart/items/2", json={"amount": 0})

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "invalid_amount"

    def test_remove(self, client, inventory):
        client.post("/cart/items/1")

        response = client.delete("/cart/items/1")

        assert response.status_code == 200
        assert response.json()["items"] == []
        assert inventory.stock[1] == 3

    def test_remove_missing_is_not_found(self, client):
        response = client.delete("/cart/items/1")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "product_not_in_cart"

    def test_save_failure_is_service_unavailable(self, client, store, inventory):
        store.fail_save = True

        response = client.post("/cart/items/1")

        assert response.status_code == 503
        assert inventory.stock[1] == 3
