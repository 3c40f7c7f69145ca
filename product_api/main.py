from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from product_api.api.routes import router as products_router
from product_api.core.config import settings
from product_api.core.db import create_tables, get_sessionmaker
from product_api.core.errors import register_exception_handlers
from product_api.core.logging import configure_logging, get_logger
from product_api.middlewares.request_id import RequestIdMiddleware
from product_api.repositories import ProductRepository
from product_api.seed import seed_sample_products

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.db_create_tables:
        create_tables()
    if settings.seed_sample_data:
        with get_sessionmaker()() as db:
            seed_sample_products(ProductRepository(db))

    logger.info(
        "%s started (env=%s, version=%s)",
        settings.app_name,
        settings.environment,
        settings.app_version,
    )
    yield


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

    # Correlation ID (X-Request-Id) para trazabilidad end-to-end
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "X-Request-Id"],
        expose_headers=["X-Request-Id"],
    )

    register_exception_handlers(app)

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "service": settings.app_name,
            "env": settings.environment,
            "version": settings.app_version,
        }

    app.include_router(products_router)
    return app


app = create_app()
