"""Data access for products.

``ProductRepository`` is the persistence contract the catalog service depends
on. Two adapters implement it: ``SqlProductRepository`` over a SQLModel
session and ``InMemoryProductRepository`` for process-local storage. The
adapter is chosen at startup from ``database.backend``.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from loguru import logger
from sqlmodel import Session, col, select

from src.catalog.entities.core._base import utcnow

from .entity import Product
from .table import ProductTable

# Signed 64-bit INTEGER range of the id column
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


class ProductRepository(ABC):
    """Persistence contract for products.

    Every method is a single atomic unit from the caller's point of view.
    """

    @abstractmethod
    def find_all(self) -> list[Product]:
        """Return every stored product."""

    @abstractmethod
    def find_by_id(self, product_id: int) -> Product | None:
        """Return the product stored at ``product_id`` or None."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Insert when ``product.id`` is None, otherwise overwrite that record.

        Returns the persisted record, including its generated id on insert.
        """

    @abstractmethod
    def exists_by_id(self, product_id: int) -> bool:
        """Whether a product is stored at ``product_id``."""

    @abstractmethod
    def delete_by_id(self, product_id: int) -> None:
        """Remove the product at ``product_id``. A missing id is a no-op."""

    @abstractmethod
    def find_by_name_containing(self, name_part: str) -> list[Product]:
        """Return products whose name contains ``name_part``, ignoring case."""


class SqlProductRepository(ProductRepository):
    """Relational adapter backed by a SQLModel session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def _to_entity(row: ProductTable) -> Product:
        return Product.model_validate(row, from_attributes=True)

    def _get_row(self, product_id: int) -> ProductTable | None:
        if not _MIN_ID <= product_id <= _MAX_ID:
            return None
        return self._session.get(ProductTable, product_id)

    def find_all(self) -> list[Product]:
        statement = select(ProductTable).order_by(col(ProductTable.id))
        return [self._to_entity(row) for row in self._session.exec(statement).all()]

    def find_by_id(self, product_id: int) -> Product | None:
        row = self._get_row(product_id)
        if row is None:
            return None
        return self._to_entity(row)

    def save(self, product: Product) -> Product:
        fields = product.business_fields()
        row = None if product.id is None else self._get_row(product.id)

        if row is None:
            row = ProductTable(id=product.id, **fields)
            self._session.add(row)
        else:
            for name, value in fields.items():
                setattr(row, name, value)
            row.updated_at = utcnow()

        self._session.commit()
        self._session.refresh(row)
        return self._to_entity(row)

    def exists_by_id(self, product_id: int) -> bool:
        return self._get_row(product_id) is not None

    def delete_by_id(self, product_id: int) -> None:
        row = self._get_row(product_id)
        if row is None:
            return
        self._session.delete(row)
        self._session.commit()

    def find_by_name_containing(self, name_part: str) -> list[Product]:
        statement = (
            select(ProductTable)
            .where(col(ProductTable.name).icontains(name_part, autoescape=True))
            .order_by(col(ProductTable.id))
        )
        return [self._to_entity(row) for row in self._session.exec(statement).all()]


class InMemoryProductRepository(ProductRepository):
    """Process-local adapter; ids are assigned above every id stored so far."""

    def __init__(self) -> None:
        self._items: dict[int, Product] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def find_all(self) -> list[Product]:
        with self._lock:
            return [item.model_copy() for _, item in sorted(self._items.items())]

    def find_by_id(self, product_id: int) -> Product | None:
        with self._lock:
            item = self._items.get(product_id)
            return None if item is None else item.model_copy()

    def save(self, product: Product) -> Product:
        now = utcnow()
        with self._lock:
            existing = None if product.id is None else self._items.get(product.id)
            product_id = self._next_id if product.id is None else product.id
            self._next_id = max(self._next_id, product_id + 1)
            stored = Product(
                **product.business_fields(),
                id=product_id,
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )
            self._items[product_id] = stored
            logger.debug("Stored product {} in memory", product_id)
            return stored.model_copy()

    def exists_by_id(self, product_id: int) -> bool:
        with self._lock:
            return product_id in self._items

    def delete_by_id(self, product_id: int) -> None:
        with self._lock:
            self._items.pop(product_id, None)

    def find_by_name_containing(self, name_part: str) -> list[Product]:
        needle = name_part.lower()
        with self._lock:
            return [
                item.model_copy()
                for _, item in sorted(self._items.items())
                if needle in item.name.lower()
            ]
