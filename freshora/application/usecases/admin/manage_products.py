"""
===============================================================================
USE CASES: Admin product management (create / update / delete)
===============================================================================

Responsibilities:
    - Validar invariantes de producto (nombre no vacío, price >= 0, stock >= 0).
    - Delegar persistencia a ProductRepository.
    - NOT_FOUND cuando el id no existe.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from ....crosscutting.logger import logger
from ....domain.entities import Product
from ....domain.repositories import ProductRepository
from .admin_results import (
    DeleteResult,
    ProductResult,
    not_found_error,
    validation_error,
)

_RESOURCE = "Producto"


@dataclass(frozen=True)
class ProductInput:
    name: str
    price: float
    description: str = ""
    category: str = ""
    stock: int = 0
    image_url: str | None = None


def _check_numbers(price: float | None, stock: int | None) -> str | None:
    if price is not None and price < 0:
        return "El precio no puede ser negativo."
    if stock is not None and stock < 0:
        return "El stock no puede ser negativo."
    return None


class CreateProductUseCase:
    def __init__(self, products: ProductRepository) -> None:
        self._products = products

    def execute(self, input_data: ProductInput) -> ProductResult:
        name = (input_data.name or "").strip()
        if not name:
            return ProductResult(error=validation_error("El nombre es obligatorio."))
        problem = _check_numbers(input_data.price, input_data.stock)
        if problem:
            return ProductResult(error=validation_error(problem))

        created = self._products.create_product(
            Product(
                id=uuid4(),
                name=name,
                price=float(input_data.price),
                description=(input_data.description or "").strip(),
                category=(input_data.category or "").strip(),
                stock=int(input_data.stock),
                image_url=input_data.image_url or None,
            )
        )
        logger.info("Producto creado", extra={"product_id": str(created.id)})
        return ProductResult(product=created)


class UpdateProductUseCase:
    def __init__(self, products: ProductRepository) -> None:
        self._products = products

    def execute(self, product_id: UUID, **fields: object) -> ProductResult:
        """Actualiza solo los campos recibidos (None se ignora)."""
        changes = {k: v for k, v in fields.items() if v is not None}

        if "name" in changes:
            changes["name"] = str(changes["name"]).strip()
            if not changes["name"]:
                return ProductResult(
                    error=validation_error("El nombre no puede estar vacío.")
                )
        problem = _check_numbers(changes.get("price"), changes.get("stock"))
        if problem:
            return ProductResult(error=validation_error(problem))

        updated = self._products.update_product(product_id, **changes)
        if updated is None:
            return ProductResult(error=not_found_error(_RESOURCE, product_id))
        return ProductResult(product=updated)


class DeleteProductUseCase:
    def __init__(self, products: ProductRepository) -> None:
        self._products = products

    def execute(self, product_id: UUID) -> DeleteResult:
        if not self._products.delete_product(product_id):
            return DeleteResult(
                deleted=False, error=not_found_error(_RESOURCE, product_id)
            )
        logger.info("Producto eliminado", extra={"product_id": str(product_id)})
        return DeleteResult(deleted=True)
