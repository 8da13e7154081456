"""Entity: Product."""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import Field, PlainSerializer, field_validator

from src.catalog.entities.core._base import Entity

# SQLite keeps NUMERIC as REAL, exact only up to 15 significant digits
MAX_PRICE_DIGITS = 15

# Serialized as a JSON number rather than pydantic's default string form.
Price = Annotated[
    Decimal,
    Field(gt=0, max_digits=MAX_PRICE_DIGITS, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class Product(Entity):
    """Product entity representing a catalog item.

    This is the domain model and also the request/response body of the HTTP
    API, so field validation here is the validation boundary: ``name`` must be
    non-blank and ``price`` strictly positive.
    """

    name: str = Field(description="Display name")
    description: str | None = Field(default=None, description="Free-form description")
    price: Price = Field(description="Unit price")
    image_url: str | None = Field(default=None, description="Image location")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        return value

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.description == other.description
            and self.price == other.price
            and self.image_url == other.image_url
        )
