"""Entities module with hybrid entity-centric structure.

This module organizes entities by business concept rather than technical layer.
Each entity has its own package containing:
- entity.py: Domain model with business logic
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .service.product import (
    InMemoryProductRepository,
    Product,
    ProductRepository,
    ProductTable,
    SqlProductRepository,
)

__all__ = [
    "Product",
    "ProductTable",
    "ProductRepository",
    "SqlProductRepository",
    "InMemoryProductRepository",
]
