"""Core services exports."""

# Catalog Services
from .catalog.catalog_service import CatalogService, ProductNotFoundError

# Database Services
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService

__all__ = [
    # Catalog Services
    "CatalogService",
    "ProductNotFoundError",
    # Database Services
    "DbManageService",
    "DbSessionService",
]
