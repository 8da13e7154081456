from dataclasses import dataclass

from loguru import logger

from src.catalog.core.services import DbManageService, DbSessionService
from src.catalog.entities.service.product import InMemoryProductRepository
from src.catalog.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    """Process-wide collaborators created once at startup.

    Exactly one of ``database_service`` and ``memory_repository`` is set,
    depending on ``database.backend``.
    """

    database_service: DbSessionService | None = None
    memory_repository: InMemoryProductRepository | None = None

    def close(self) -> None:
        if self.database_service is not None:
            self.database_service.dispose()


def build_application_dependencies(config: ConfigData) -> ApplicationDependencies:
    """Select the storage adapter for this process."""
    if config.database.backend == "memory":
        logger.info("Using in-memory product storage")
        return ApplicationDependencies(memory_repository=InMemoryProductRepository())

    database_service = DbSessionService(config)
    if config.database.create_tables:
        DbManageService(database_service.engine).create_all()
    return ApplicationDependencies(database_service=database_service)
