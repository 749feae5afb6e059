"""Tests for collection API endpoints."""

from fastapi.testclient import TestClient


class TestCollectionCrud:
    """Tests for the /collections endpoints."""

    def test_create_collection(self, client: TestClient, create_brand) -> None:
        """Should create a collection under a brand."""
        brand = create_brand()

        response = client.post(
            "/collections",
            json={"brandId": brand["id"], "code": "OFFICE", "description": "Office"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["brandId"] == brand["id"]
        assert data["code"] == "OFFICE"

    def test_create_collection_unknown_brand_rejected(self, client: TestClient) -> None:
        """Should reject a collection for a missing brand."""
        response = client.post(
            "/collections",
            json={"brandId": 9, "code": "OFFICE", "description": "Office"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Brand not found"

    def test_create_collection_requires_brand(self, client: TestClient) -> None:
        """brandId is mandatory."""
        response = client.post("/collections", json={"code": "OFFICE", "description": "x"})
        assert response.status_code == 400

    def test_list_collections_embeds_brand(
        self, client: TestClient, create_brand, create_collection
    ) -> None:
        """Should embed the owning brand."""
        brand = create_brand()
        create_collection(brand["id"])

        data = client.get("/collections").json()
        assert len(data) == 1
        assert data[0]["brand"]["code"] == "ACME"

    def test_get_collection_not_found(self, client: TestClient) -> None:
        """Should return 404 for unknown collection."""
        response = client.get("/collections/4")
        assert response.status_code == 404
        assert response.json()["error_code"] == "COLLECTION_NOT_FOUND"

    def test_update_collection_moves_brand(
        self, client: TestClient, create_brand, create_collection
    ) -> None:
        """Should allow moving a collection to another brand."""
        first = create_brand("A")
        second = create_brand("B")
        collection = create_collection(first["id"])

        response = client.put(
            f"/collections/{collection['id']}",
            json={
                "id": collection["id"],
                "brandId": second["id"],
                "code": "OFFICE",
                "description": "Office",
            },
        )
        assert response.status_code == 204
        assert client.get(f"/collections/{collection['id']}").json()["brandId"] == second["id"]

    def test_update_collection_unknown_brand_rejected(
        self, client: TestClient, create_brand, create_collection
    ) -> None:
        """Should validate the brand reference on update."""
        brand = create_brand()
        collection = create_collection(brand["id"])

        response = client.put(
            f"/collections/{collection['id']}",
            json={"id": collection["id"], "brandId": 99, "code": "X", "description": "Y"},
        )
        assert response.status_code == 400


class TestDeleteCollection:
    """Tests for DELETE /collections/{collection_id} endpoint."""

    def test_delete_collection_clears_product_reference(
        self, client: TestClient, create_brand, create_collection, create_product
    ) -> None:
        """Products keep existing with their collection reference cleared."""
        brand = create_brand()
        collection = create_collection(brand["id"])
        product = create_product(
            "P1", brandId=brand["id"], collectionId=collection["id"]
        )

        response = client.delete(f"/collections/{collection['id']}")
        assert response.status_code == 204

        data = client.get(f"/products/{product['id']}").json()
        assert data["collectionId"] is None
        assert data["brandId"] == brand["id"]

    def test_delete_collection_then_brand(
        self, client: TestClient, create_brand, create_collection
    ) -> None:
        """The brand can be deleted once its collections are gone."""
        brand = create_brand()
        collection = create_collection(brand["id"])

        assert client.delete(f"/collections/{collection['id']}").status_code == 204
        assert client.delete(f"/brands/{brand['id']}").status_code == 204
