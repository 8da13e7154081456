"""Product API router with CRUD and search operations."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from src.catalog.api.http.deps import get_catalog_service
from src.catalog.core.services import CatalogService, ProductNotFoundError
from src.catalog.entities.service.product import Product

router = APIRouter()


@router.get("", response_model=list[Product])
def list_products(
    service: CatalogService = Depends(get_catalog_service),
) -> list[Product]:
    """List all products."""
    return service.get_all_products()


@router.get("/search", response_model=list[Product])
def search_products(
    name: str = Query(default="", description="Case-insensitive part of the name"),
    service: CatalogService = Depends(get_catalog_service),
) -> list[Product]:
    """Search products by name."""
    return service.search_products(name)


@router.get("/{product_id}", response_model=Product)
def get_product(
    product_id: int,
    service: CatalogService = Depends(get_catalog_service),
) -> Product:
    """Get a product by ID."""
    try:
        return service.get_product_by_id(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(
    product: Product,
    service: CatalogService = Depends(get_catalog_service),
) -> Product:
    """Create a new product."""
    return service.create_product(product)


@router.put("/{product_id}", response_model=Product)
def update_product(
    product_id: int,
    product: Product,
    service: CatalogService = Depends(get_catalog_service),
) -> Product:
    """Replace a product."""
    try:
        return service.update_product(product_id, product)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    service: CatalogService = Depends(get_catalog_service),
) -> Response:
    """Delete a product."""
    try:
        service.delete_product(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
