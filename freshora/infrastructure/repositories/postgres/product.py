"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/product.py
============================================================
Class: PostgresProductRepository

Responsibilities:
  - Alta / modificación / baja de productos (rutas admin).
  - Conteo para el dashboard.

Collaborators:
  - SqlRunner (postgres/_sql.py)
  - domain.entities.Product
============================================================
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Product
from ._sql import Row, SqlRunner

_COLUMNS = "id, name, price, description, category, stock, image_url, created_at"
_EDITABLE = ("name", "price", "description", "category", "stock", "image_url")


def _to_product(row: Row) -> Product:
    return Product(
        id=row["id"],
        name=row["name"],
        price=float(row["price"]),
        description=row["description"] or "",
        category=row["category"] or "",
        stock=int(row["stock"] or 0),
        image_url=row["image_url"],
        created_at=row["created_at"],
    )


class PostgresProductRepository:
    def __init__(self, pool: ConnectionPool | None = None) -> None:
        self._sql = SqlRunner(pool, "PostgresProductRepository")

    def create_product(self, product: Product) -> Product:
        row = self._sql.one(
            "create_product",
            "INSERT INTO products "
            "(id, name, price, description, category, stock, image_url) "
            f"VALUES (%s, %s, %s, %s, %s, %s, %s) RETURNING {_COLUMNS}",
            (
                product.id,
                product.name,
                product.price,
                product.description,
                product.category,
                product.stock,
                product.image_url,
            ),
            product_id=str(product.id),
        )
        if row is None:
            raise DatabaseError("create_product: INSERT sin RETURNING")
        return _to_product(row)

    def update_product(self, product_id: UUID, **fields: object) -> Optional[Product]:
        changes = {k: fields[k] for k in _EDITABLE if k in fields}
        if changes:
            assignments = ", ".join(f"{column} = %s" for column in changes)
            row = self._sql.one(
                "update_product",
                f"UPDATE products SET {assignments} WHERE id = %s RETURNING {_COLUMNS}",
                (*changes.values(), product_id),
                product_id=str(product_id),
                columns=list(changes),
            )
        else:
            row = self._sql.one(
                "get_product",
                f"SELECT {_COLUMNS} FROM products WHERE id = %s",
                (product_id,),
                product_id=str(product_id),
            )
        return _to_product(row) if row else None

    def delete_product(self, product_id: UUID) -> bool:
        return (
            self._sql.rowcount(
                "delete_product",
                "DELETE FROM products WHERE id = %s",
                (product_id,),
                product_id=str(product_id),
            )
            > 0
        )

    def count_products(self) -> int:
        row = self._sql.one("count_products", "SELECT COUNT(*) AS n FROM products")
        return int(row["n"]) if row else 0
