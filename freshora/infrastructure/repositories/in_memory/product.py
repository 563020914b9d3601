"""In-memory ProductRepository (tests / dev local)."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ....domain.entities import Product

_UPDATABLE_FIELDS = ("name", "price", "description", "category", "stock", "image_url")


class InMemoryProductRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._products: Dict[UUID, Product] = {}

    def create_product(self, product: Product) -> Product:
        stored = (
            product
            if product.created_at
            else replace(product, created_at=datetime.now(timezone.utc))
        )
        with self._lock:
            self._products[stored.id] = stored
        return stored

    def update_product(self, product_id: UUID, **fields: object) -> Optional[Product]:
        changes = {k: v for k, v in fields.items() if k in _UPDATABLE_FIELDS}
        with self._lock:
            current = self._products.get(product_id)
            if current is None:
                return None
            updated = replace(current, **changes)
            self._products[product_id] = updated
            return updated

    def delete_product(self, product_id: UUID) -> bool:
        with self._lock:
            return self._products.pop(product_id, None) is not None

    def count_products(self) -> int:
        with self._lock:
            return len(self._products)
