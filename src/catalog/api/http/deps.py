"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services import CatalogService
from src.catalog.entities.service.product import ProductRepository, SqlProductRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependencies built during application startup."""
    return request.app.state.app_dependencies


def get_product_repository(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> Iterator[ProductRepository]:
    """Yield the configured repository, scoping a database session to the request."""
    if app_deps.memory_repository is not None:
        yield app_deps.memory_repository
        return

    if app_deps.database_service is None:
        raise RuntimeError("No product storage configured")

    session = app_deps.database_service.get_session()
    try:
        yield SqlProductRepository(session)
    finally:
        session.close()


def get_catalog_service(
    repository: ProductRepository = Depends(get_product_repository),
) -> CatalogService:
    """Get the catalog service bound to the request's repository."""
    return CatalogService(repository)
