"""Contract tests run against every ProductRepository adapter."""

from decimal import Decimal

import pytest
from sqlmodel import Session

from src.catalog.entities.service.product import (
    InMemoryProductRepository,
    Product,
    ProductRepository,
    ProductTable,
    SqlProductRepository,
)


class TestProductRepositoryContract:
    """Behaviour shared by the SQL and in-memory adapters."""

    def test_save_assigns_new_ids(self, repository: ProductRepository, product_factory):
        first = repository.save(product_factory(name="Widget"))
        second = repository.save(product_factory(name="Gadget"))

        assert first.id is not None
        assert second.id is not None
        assert first.id != second.id

    def test_save_returns_persisted_fields(self, repository: ProductRepository, product_factory):
        saved = repository.save(
            product_factory(description="Blue", image_url="w.png", price="12.50")
        )

        assert saved.name == "Widget"
        assert saved.description == "Blue"
        assert saved.price == Decimal("12.50")
        assert saved.image_url == "w.png"
        assert saved.created_at is not None
        assert saved.updated_at is not None

    def test_find_by_id(self, repository: ProductRepository, product_factory):
        saved = repository.save(product_factory())

        assert repository.find_by_id(saved.id) == saved
        assert repository.find_by_id(9999) is None

    def test_find_all(self, repository: ProductRepository, product_factory):
        assert repository.find_all() == []

        repository.save(product_factory(name="Widget"))
        repository.save(product_factory(name="Gadget"))

        names = {product.name for product in repository.find_all()}
        assert names == {"Widget", "Gadget"}

    def test_save_with_id_overwrites(self, repository: ProductRepository, product_factory):
        saved = repository.save(product_factory(description="Old"))

        replacement = product_factory(name="Widget XL", price="12.50", id=saved.id)
        updated = repository.save(replacement)

        assert updated.id == saved.id
        assert updated.name == "Widget XL"
        assert updated.description is None
        assert len(repository.find_all()) == 1
        assert repository.find_by_id(saved.id).name == "Widget XL"

    @pytest.mark.parametrize("product_id", [2**63, -(2**63) - 1, 10**30])
    def test_ids_beyond_storage_range_are_absent(
        self, repository: ProductRepository, product_factory, product_id: int
    ):
        repository.save(product_factory())

        assert repository.find_by_id(product_id) is None
        assert repository.exists_by_id(product_id) is False
        repository.delete_by_id(product_id)
        assert len(repository.find_all()) == 1

    @pytest.mark.parametrize("price", ["9999999999999.99", "1234567890123.45", "0.01"])
    def test_price_round_trips_exactly(
        self, repository: ProductRepository, product_factory, price: str
    ):
        saved = repository.save(product_factory(price=price))

        assert saved.price == Decimal(price)
        assert repository.find_by_id(saved.id).price == Decimal(price)

    def test_overwrite_keeps_created_at(self, repository: ProductRepository, product_factory):
        saved = repository.save(product_factory())

        updated = repository.save(product_factory(name="Other", id=saved.id))

        assert updated.created_at == saved.created_at

    def test_exists_by_id(self, repository: ProductRepository, product_factory):
        saved = repository.save(product_factory())

        assert repository.exists_by_id(saved.id) is True
        assert repository.exists_by_id(saved.id + 1) is False

    def test_delete_by_id(self, repository: ProductRepository, product_factory):
        saved = repository.save(product_factory())

        repository.delete_by_id(saved.id)

        assert repository.exists_by_id(saved.id) is False
        assert repository.find_by_id(saved.id) is None

    def test_delete_missing_is_noop(self, repository: ProductRepository, product_factory):
        repository.save(product_factory())

        repository.delete_by_id(12345)

        assert len(repository.find_all()) == 1

    def test_ids_are_not_reused_after_delete(self, repository: ProductRepository, product_factory):
        first = repository.save(product_factory(name="A"))
        second = repository.save(product_factory(name="B"))
        repository.delete_by_id(second.id)

        third = repository.save(product_factory(name="C"))

        assert third.id > second.id
        assert repository.find_by_id(first.id).name == "A"

    def test_find_by_name_containing_ignores_case(
        self, repository: ProductRepository, product_factory
    ):
        repository.save(product_factory(name="Blue Widget"))
        repository.save(product_factory(name="WIDGET XL"))
        repository.save(product_factory(name="Gadget"))

        for needle in ("widget", "WIDGET", "wIdGeT"):
            names = {p.name for p in repository.find_by_name_containing(needle)}
            assert names == {"Blue Widget", "WIDGET XL"}

    def test_find_by_name_containing_empty_matches_all(
        self, repository: ProductRepository, product_factory
    ):
        repository.save(product_factory(name="Widget"))
        repository.save(product_factory(name="Gadget"))

        assert len(repository.find_by_name_containing("")) == 2

    def test_find_by_name_containing_no_match(self, repository: ProductRepository, product_factory):
        repository.save(product_factory(name="Widget"))

        assert repository.find_by_name_containing("lamp") == []

    @pytest.mark.parametrize("needle", ["%", "_", "W_dget"])
    def test_wildcards_match_literally(
        self, repository: ProductRepository, product_factory, needle: str
    ):
        repository.save(product_factory(name="Widget"))
        repository.save(product_factory(name="100% Cotton"))

        names = {p.name for p in repository.find_by_name_containing(needle)}

        assert "Widget" not in names
        if needle == "%":
            assert names == {"100% Cotton"}


class TestSqlProductRepository:
    """Adapter-specific behaviour of the SQL repository."""

    def test_returns_domain_entity(self, sql_repository: SqlProductRepository, product_factory):
        saved = sql_repository.save(product_factory())

        result = sql_repository.find_by_id(saved.id)

        assert isinstance(result, Product)
        assert not isinstance(result, ProductTable)

    def test_writes_are_committed(self, sql_repository: SqlProductRepository, session: Session, product_factory):
        saved = sql_repository.save(product_factory())
        session.rollback()

        assert session.get(ProductTable, saved.id) is not None

    def test_sequential_ids(self, sql_repository: SqlProductRepository, product_factory):
        first = sql_repository.save(product_factory())
        second = sql_repository.save(product_factory())

        assert first.id == 1
        assert second.id == 2


class TestInMemoryProductRepository:
    """Adapter-specific behaviour of the in-memory repository."""

    def test_returns_copies(self, memory_repository: InMemoryProductRepository, product_factory):
        saved = memory_repository.save(product_factory())
        saved.name = "Mutated"

        assert memory_repository.find_by_id(saved.id).name == "Widget"

    def test_explicit_id_advances_counter(
        self, memory_repository: InMemoryProductRepository, product_factory
    ):
        memory_repository.save(product_factory(id=5))

        created = memory_repository.save(product_factory())

        assert created.id == 6
