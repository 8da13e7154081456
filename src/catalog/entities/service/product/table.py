"""Product database table model."""

from decimal import Decimal

from sqlmodel import Field

from src.catalog.entities.core._base import EntityTable

from .entity import MAX_PRICE_DIGITS


class ProductTable(EntityTable, table=True):
    """Database persistence model for products.

    Rows are converted to ``Product`` entities by the repository before they
    leave the data layer.
    """

    __tablename__ = "products"
    # Never hand out the id of a deleted row again
    __table_args__ = {"sqlite_autoincrement": True}

    name: str = Field(index=True)
    description: str | None = None
    price: Decimal = Field(max_digits=MAX_PRICE_DIGITS, decimal_places=2)
    image_url: str | None = None
