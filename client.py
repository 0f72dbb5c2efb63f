"""
Back-office state kept on the admin side of the API.

`AdminClient` holds the product and category lists an admin screen works
with. Mutations are applied locally first and rolled back if the server
refuses them. It accepts any `httpx.Client`, including FastAPI's TestClient.
"""

import logging
from copy import deepcopy
from typing import Any, Dict, List, Optional

import httpx

from category_tree import build_tree, move_subcategory, order_updates, reorder_categories, reorder_subcategories
from fallback import fallback_categories, fallback_products
from database import to_dict
from pagination import paginate

logger = logging.getLogger(__name__)

OFFLINE_MESSAGE = "Using offline data - API connection failed"


class ClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AdminClient:
    def __init__(self, http: httpx.Client, base_path: str = "/api"):
        self.http = http
        self.base_path = base_path.rstrip("/")
        self.products: List[Dict[str, Any]] = []
        self.categories: List[Dict[str, Any]] = []
        self.error: Optional[str] = None

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        response = self.http.request(method, f"{self.base_path}{path}", **kwargs)
        try:
            body = response.json()
        except ValueError:
            raise ClientError(f"Invalid API response ({response.status_code})", response.status_code)
        if response.is_error or not body.get("success"):
            raise ClientError(body.get("message") or body.get("error") or "Request failed", response.status_code)
        return body

    # Products

    def refresh_products(self) -> List[Dict[str, Any]]:
        try:
            self.products = self._request("GET", "/products")["data"]
            self.error = None
        except (httpx.HTTPError, ClientError) as e:
            logger.warning("Failed to fetch products, using fallback data: %s", e)
            self.error = OFFLINE_MESSAGE
            self.products = [to_dict(p) for p in fallback_products()]
        return self.products

    def add_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        temp_id = f"temp-{len(self.products) + 1}"
        self.products.append(dict(data, id=temp_id, _id=temp_id))
        try:
            product = self._request("POST", "/products", json=data)["data"]
        except (httpx.HTTPError, ClientError):
            self.products = [p for p in self.products if p["id"] != temp_id]
            raise
        self.products = [product if p["id"] == temp_id else p for p in self.products]
        return product

    def update_product(self, product_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        snapshot = deepcopy(self.products)
        self.products = [dict(p, **changes) if p["id"] == product_id else p for p in self.products]
        try:
            product = self._request("PUT", f"/products/{product_id}", json=changes)["data"]
        except (httpx.HTTPError, ClientError):
            self.products = snapshot
            raise
        self.products = [product if p["id"] == product_id else p for p in self.products]
        return product

    def delete_product(self, product_id: str):
        snapshot = deepcopy(self.products)
        self.products = [p for p in self.products if p["id"] != product_id]
        try:
            self._request("DELETE", f"/products/{product_id}")
        except (httpx.HTTPError, ClientError):
            self.products = snapshot
            raise

    def product_page(self, page: int = 1, per_page: int = 12) -> Dict[str, Any]:
        return paginate(self.products, page, per_page)

    # Categories

    def refresh_categories(self, search: Optional[str] = None, active: Optional[bool] = None) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"limit": 100}
        if search:
            params["search"] = search
        if active is not None:
            params["active"] = str(active).lower()
        try:
            self.categories = self._request("GET", "/categories", params=params)["data"]
            self.error = None
        except (httpx.HTTPError, ClientError) as e:
            logger.warning("Failed to fetch categories: %s", e)
            self.error = e.message if isinstance(e, ClientError) else str(e)
            self.categories = [to_dict(c) for c in fallback_categories()]
        return self.categories

    @property
    def tree(self) -> List[Dict[str, Any]]:
        flat = [{k: v for k, v in c.items() if k != "subcategories"} for c in self.categories]
        return build_tree(flat)

    def create_category(self, data: Dict[str, Any]) -> Dict[str, Any]:
        category = self._request("POST", "/categories", json=data)["data"]
        self.refresh_categories()
        return category

    def update_category(self, category_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        category = self._request("PUT", f"/categories/{category_id}", json=changes)["data"]
        self.refresh_categories()
        return category

    def toggle_category(self, category_id: str) -> Dict[str, Any]:
        snapshot = deepcopy(self.categories)
        self.categories = [
            dict(c, isActive=not c.get("isActive", True)) if c["id"] == category_id else c
            for c in self.categories
        ]
        try:
            return self._request("PATCH", f"/categories/{category_id}/toggle-status")["data"]
        except (httpx.HTTPError, ClientError):
            self.categories = snapshot
            raise

    def delete_category(self, category_id: str):
        snapshot = deepcopy(self.categories)
        self.categories = [c for c in self.categories if c["id"] != category_id]
        try:
            self._request("DELETE", f"/categories/{category_id}")
        except (httpx.HTTPError, ClientError):
            self.categories = snapshot
            raise

    def _apply_tree(self, tree: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Write tree positions back into the flat list and return the updates."""
        updates = order_updates(tree)
        by_id = {u["id"]: u for u in updates}
        self.categories = [
            dict(c, sortOrder=by_id[c["id"]]["sortOrder"], parentId=by_id[c["id"]]["parentId"])
            if c["id"] in by_id else c
            for c in self.categories
        ]
        return updates

    def _save_order(self, tree: List[Dict[str, Any]]) -> Dict[str, Any]:
        snapshot = deepcopy(self.categories)
        updates = self._apply_tree(tree)
        try:
            return self._request("PATCH", "/categories/bulk/order", json={"categories": updates})["data"]
        except (httpx.HTTPError, ClientError):
            self.categories = snapshot
            raise

    def reorder_category(self, active_id: str, over_id: str) -> Dict[str, Any]:
        """Drop top-level category `active_id` onto `over_id`."""
        return self._save_order(reorder_categories(self.tree, active_id, over_id))

    def reorder_subcategory(self, parent_id: str, active_id: str, over_id: str) -> Dict[str, Any]:
        return self._save_order(reorder_subcategories(self.tree, parent_id, active_id, over_id))

    def move_subcategory(self, subcategory_id: str, new_parent_id: str) -> Dict[str, Any]:
        """Move a subcategory under another parent, appending it after its new siblings.

        Only the moved entry changes locally; the old siblings keep their
        sortOrder, as they do on the server. The server's copy replaces the
        optimistic one once the request succeeds.
        """
        snapshot = deepcopy(self.categories)
        tree = self.tree
        if move_subcategory(tree, subcategory_id, new_parent_id) is not tree:
            siblings = [c.get("sortOrder", 0) for c in self.categories
                        if c.get("parentId") == new_parent_id and c["id"] != subcategory_id]
            sort_order = max(siblings) + 1 if siblings else 1
            self.categories = [
                dict(c, parentId=new_parent_id, sortOrder=sort_order) if c["id"] == subcategory_id else c
                for c in self.categories
            ]
        try:
            moved = self._request("PATCH", f"/categories/{subcategory_id}/move",
                                  json={"parentId": new_parent_id})["data"]
        except (httpx.HTTPError, ClientError):
            self.categories = snapshot
            raise
        self.categories = [dict(c, **moved) if c["id"] == moved["id"] else c for c in self.categories]
        return moved
