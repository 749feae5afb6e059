"""Tests for brand API endpoints."""

from fastapi.testclient import TestClient


class TestBrandCrud:
    """Tests for the /brands endpoints."""

    def test_create_and_get_brand(self, client: TestClient) -> None:
        """Should create a brand and return it by ID."""
        response = client.post("/brands", json={"code": "ACME", "description": "Acme"})
        assert response.status_code == 201
        brand = response.json()
        assert response.headers["location"].endswith(f"/brands/{brand['id']}")

        response = client.get(f"/brands/{brand['id']}")
        assert response.status_code == 200
        assert response.json() == {"id": brand["id"], "code": "ACME", "description": "Acme"}

    def test_list_brands(self, client: TestClient, create_brand) -> None:
        """Should list brands in ID order."""
        create_brand("A")
        create_brand("B")

        response = client.get("/brands")
        assert response.status_code == 200
        assert [b["code"] for b in response.json()] == ["A", "B"]

    def test_get_brand_not_found(self, client: TestClient) -> None:
        """Should return 404 for unknown brand."""
        response = client.get("/brands/3")
        assert response.status_code == 404

    def test_update_brand(self, client: TestClient, create_brand) -> None:
        """Should replace code and description."""
        brand = create_brand()

        response = client.put(
            f"/brands/{brand['id']}",
            json={"id": brand["id"], "code": "NEW", "description": "Renamed"},
        )
        assert response.status_code == 204
        assert client.get(f"/brands/{brand['id']}").json()["code"] == "NEW"

    def test_update_brand_id_mismatch(self, client: TestClient, create_brand) -> None:
        """Should reject a body ID that differs from the path."""
        brand = create_brand()

        response = client.put(
            f"/brands/{brand['id']}",
            json={"id": 77, "code": "NEW", "description": "Renamed"},
        )
        assert response.status_code == 400


class TestDeleteBrand:
    """Tests for DELETE /brands/{brand_id} endpoint."""

    def test_delete_brand_with_collection_conflict(
        self, client: TestClient, create_brand, create_collection
    ) -> None:
        """A brand that owns collections cannot be deleted."""
        brand = create_brand()
        create_collection(brand["id"])

        response = client.delete(f"/brands/{brand['id']}")
        assert response.status_code == 409
        assert response.json()["error_code"] == "BRAND_IN_USE"
        assert client.get(f"/brands/{brand['id']}").status_code == 200

    def test_delete_brand_clears_product_reference(
        self, client: TestClient, create_brand, create_product
    ) -> None:
        """Products keep existing with their brand reference cleared."""
        brand = create_brand()
        product = create_product("P1", brandId=brand["id"])

        response = client.delete(f"/brands/{brand['id']}")
        assert response.status_code == 204

        data = client.get(f"/products/{product['id']}").json()
        assert data["brandId"] is None
        assert data["brand"] is None

    def test_delete_brand_not_found(self, client: TestClient) -> None:
        """Should return 404 for unknown brand."""
        assert client.delete("/brands/1").status_code == 404
