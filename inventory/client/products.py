from typing import Any, Optional

from inventory.client.api import ApiClient


class ProductsClient:
    """Product CRUD calls against the inventory API."""

    def __init__(self, api: ApiClient):
        self.api = api

    def list(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        active: Optional[str] = None,
    ) -> dict[str, Any]:
        """Return ``{"products": [...], "pagination": {...}}``; unset params use server defaults."""
        params = {
            key: value
            for key, value in {"page": page, "limit": limit, "active": active}.items()
            if value is not None
        }
        return self.api.get("/products", params=params).json()

    def get(self, product_id: int) -> dict[str, Any]:
        return self.api.get(f"/products/{product_id}").json()

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        return self.api.post("/products", json=data).json()

    def update(self, product_id: int, data: dict[str, Any]) -> dict[str, Any]:
        return self.api.put(f"/products/{product_id}", json=data).json()

    def delete(self, product_id: int) -> None:
        self.api.delete(f"/products/{product_id}")
