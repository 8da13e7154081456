from loguru import logger

from src.catalog.entities.service.product import Product, ProductRepository


class ProductNotFoundError(LookupError):
    """Raised when an operation references a product id that is not stored."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product not found with id: {product_id}")


class CatalogService:
    """Business operations over the product repository.

    The service owns the not-found rules and id handling; field validation has
    already happened on the ``Product`` model by the time a call arrives here.
    """

    def __init__(self, repository: ProductRepository):
        self._repository = repository

    def get_all_products(self) -> list[Product]:
        return self._repository.find_all()

    def get_product_by_id(self, product_id: int) -> Product:
        """Return the product stored at ``product_id``.

        Raises:
            ProductNotFoundError: if no product has that id.
        """
        product = self._repository.find_by_id(product_id)
        if product is None:
            logger.warning("Product {} not found", product_id)
            raise ProductNotFoundError(product_id)
        return product

    def create_product(self, product: Product) -> Product:
        """Persist a new product; any id in the payload is discarded."""
        created = self._repository.save(product.model_copy(update={"id": None}))
        logger.info("Created product {}", created.id)
        return created

    def update_product(self, product_id: int, product: Product) -> Product:
        """Replace the product at ``product_id`` with ``product``.

        The path id always wins over an id in the payload, and the record is
        replaced as a whole: attributes missing from ``product`` are cleared.

        Raises:
            ProductNotFoundError: if no product has that id.
        """
        if self._repository.find_by_id(product_id) is None:
            logger.warning("Cannot update missing product {}", product_id)
            raise ProductNotFoundError(product_id)

        updated = self._repository.save(product.model_copy(update={"id": product_id}))
        logger.info("Updated product {}", product_id)
        return updated

    def delete_product(self, product_id: int) -> None:
        """Permanently remove the product at ``product_id``.

        Raises:
            ProductNotFoundError: if no product has that id.
        """
        if not self._repository.exists_by_id(product_id):
            logger.warning("Cannot delete missing product {}", product_id)
            raise ProductNotFoundError(product_id)

        self._repository.delete_by_id(product_id)
        logger.info("Deleted product {}", product_id)

    def search_products(self, name_part: str) -> list[Product]:
        """Case-insensitive substring search on name; an empty string matches all."""
        results = self._repository.find_by_name_containing(name_part)
        logger.debug("Search for {!r} matched {} products", name_part, len(results))
        return results
