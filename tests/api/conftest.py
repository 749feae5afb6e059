"""Shared fixtures for API tests."""

from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def create_brand(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Return a helper that creates a brand through the API."""

    def _create(code: str = "ACME", description: str = "Acme Furniture") -> dict[str, Any]:
        response = client.post("/brands", json={"code": code, "description": description})
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_collection(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Return a helper that creates a collection through the API."""

    def _create(
        brand_id: int,
        code: str = "OFFICE",
        description: str = "Office seating",
    ) -> dict[str, Any]:
        response = client.post(
            "/collections",
            json={"brandId": brand_id, "code": code, "description": description},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_product(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Return a helper that creates a product through the API."""

    def _create(code: str = "P1", description: str = "d", **fields: Any) -> dict[str, Any]:
        response = client.post(
            "/products",
            json={"code": code, "description": description, **fields},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
