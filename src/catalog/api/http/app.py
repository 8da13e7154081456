"""FastAPI application for the product catalog."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.responses import JSONResponse

from src.catalog import __version__
from src.catalog.api.http.app_data import (
    ApplicationDependencies,
    build_application_dependencies,
)
from src.catalog.api.http.middleware.api_key import ApiKeyMiddleware
from src.catalog.api.http.middleware.request_logging import RequestLoggingMiddleware
from src.catalog.api.http.middleware.security_headers import SecurityHeadersMiddleware
from src.catalog.api.http.routers.service.product import router as product_router
from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.runtime.context import get_config

main_config = get_config()
is_production = main_config.app.environment == "production"

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


app = FastAPI(
    title="Product Catalog",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if is_production else "/docs",
    redoc_url=None if is_production else "/redoc",
)

__all__ = ["app", "startup", "shutdown"]

if is_production and "*" in main_config.app.cors.origins:
    raise RuntimeError(
        "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
    )

# Starlette runs the middleware added last first. Order on the way in:
# request logging, CORS, API key check, security headers.
app.add_middleware(SecurityHeadersMiddleware, enable_hsts=is_production)
app.add_middleware(
    ApiKeyMiddleware,
    api_key=main_config.security.api_key,
    header_name=main_config.security.api_key_header,
    path_prefix=main_config.security.protected_prefix,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=main_config.app.cors.origins,
    allow_credentials=main_config.app.cors.allow_credentials,
    allow_methods=main_config.app.cors.allow_methods,
    allow_headers=main_config.app.cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(
    product_router,
    prefix=f"{main_config.security.protected_prefix.rstrip('/')}/products",
    tags=["products"],
)


async def startup() -> None:
    config = get_config()
    logger.info("Starting product catalog ({})", config.app.environment)
    app.state.app_dependencies = build_application_dependencies(config)


async def shutdown() -> None:
    logger.info("Stopping product catalog")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.close()


@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "healthy"}


@app.get("/ready")
def readiness(request: Request):
    """Readiness probe; pings the database when the SQL backend is in use."""
    app_dependencies: ApplicationDependencies = request.app.state.app_dependencies
    database_service = app_dependencies.database_service
    if database_service is not None and not database_service.health_check():
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ready"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=main_config.app.host,
        port=main_config.app.port,
        access_log=False,
    )
