"""Unit tests for the Product entity and its table model."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.catalog.entities.service.product import Product, ProductTable


class TestProductEntity:
    """Test Product domain entity."""

    def test_product_creation(self):
        """Product can be created with the required fields only."""
        product = Product(name="Widget", price=Decimal("9.99"))

        assert product.id is None
        assert product.name == "Widget"
        assert product.price == Decimal("9.99")
        assert product.description is None
        assert product.image_url is None

    def test_optional_fields(self):
        product = Product(
            name="Lamp",
            price=Decimal("25.00"),
            description="Desk lamp",
            image_url="https://img.example/lamp.png",
        )

        assert product.description == "Desk lamp"
        assert product.image_url == "https://img.example/lamp.png"

    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_blank_name_rejected(self, name: str):
        with pytest.raises(ValidationError, match="Name is required"):
            Product(name=name, price=Decimal("1.00"))

    def test_missing_name_rejected(self):
        with pytest.raises(ValidationError):
            Product.model_validate({"price": 1})

    @pytest.mark.parametrize("price", ["0", "-0.01", "-10"])
    def test_non_positive_price_rejected(self, price: str):
        with pytest.raises(ValidationError):
            Product(name="Widget", price=Decimal(price))

    def test_missing_price_rejected(self):
        with pytest.raises(ValidationError):
            Product.model_validate({"name": "Widget"})

    def test_price_limited_to_cents(self):
        with pytest.raises(ValidationError):
            Product(name="Widget", price=Decimal("9.999"))

    def test_price_limited_to_fifteen_digits(self):
        assert Product(name="Widget", price=Decimal("9999999999999.99")).price == Decimal(
            "9999999999999.99"
        )

        with pytest.raises(ValidationError):
            Product(name="Widget", price=Decimal("12345678901234567.89"))

    def test_accepts_camel_case_and_snake_case_input(self):
        camel = Product.model_validate(
            {"name": "A", "price": "1.50", "imageUrl": "a.png"}
        )
        snake = Product.model_validate(
            {"name": "A", "price": "1.50", "image_url": "a.png"}
        )

        assert camel.image_url == "a.png"
        assert snake.image_url == "a.png"

    def test_json_serialization(self):
        """Price is a JSON number and fields use camelCase aliases."""
        product = Product(id=1, name="Widget", price=Decimal("12.50"), image_url="w.png")

        data = product.model_dump(mode="json", by_alias=True)

        assert data["id"] == 1
        assert data["price"] == 12.5
        assert isinstance(data["price"], float)
        assert data["imageUrl"] == "w.png"
        assert "createdAt" in data

    def test_equality_ignores_timestamps(self):
        first = Product(
            id=1,
            name="Widget",
            price=Decimal("9.99"),
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
        )
        second = Product(
            id=1,
            name="Widget",
            price=Decimal("9.99"),
            created_at=datetime(2025, 6, 1, tzinfo=UTC),
        )
        other = Product(id=2, name="Widget", price=Decimal("9.99"))

        assert first == second
        assert first != other
        assert first != "Widget"

    def test_products_are_not_hashable(self):
        product = Product(name="Widget", price=Decimal("9.99"))

        with pytest.raises(TypeError):
            hash(product)

    def test_business_fields_exclude_system_fields(self):
        product = Product(id=7, name="Widget", price=Decimal("9.99"))

        fields = product.business_fields()

        assert set(fields) == {"name", "description", "price", "image_url"}


class TestProductTable:
    """Test the persistence model."""

    def test_table_name(self):
        assert ProductTable.__tablename__ == "products"

    def test_entity_from_row(self, session):
        row = ProductTable(name="Widget", price=Decimal("9.99"), image_url="w.png")
        session.add(row)
        session.commit()
        session.refresh(row)

        product = Product.model_validate(row, from_attributes=True)

        assert isinstance(product, Product)
        assert product.id == row.id
        assert product.image_url == "w.png"
        assert product.created_at is not None
