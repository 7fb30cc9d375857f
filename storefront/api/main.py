"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..catalog.loader import load_catalog
from ..catalog.service import CatalogService
from ..config import config
from ..database import get_engine, init_db
from .routers import cart, orders, products

logger = logging.getLogger(__name__)


async def seed_catalog(service: CatalogService, catalog_path: str) -> int:
    """Load the bundled catalog into an empty database."""
    if await service.count() > 0:
        return 0
    if not Path(catalog_path).exists():
        logger.warning("Catalog file %s not found, starting with an empty catalog", catalog_path)
        return 0
    return await service.seed(await load_catalog(catalog_path))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: initialize database and catalog on startup."""
    engine = get_engine()
    await init_db(engine)

    if config.seed_catalog:
        await seed_catalog(CatalogService(engine), config.catalog_path)

    # Store engine in app state for routers
    products._engine = engine
    cart._engine = engine
    orders._engine = engine

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    app = FastAPI(
        title="Gaming Storefront API",
        description="Catalog browsing, cart and order API for the gaming storefront",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(products.router, prefix="/api/products", tags=["products"])
    app.include_router(cart.router, prefix="/api/cart", tags=["cart"])
    app.include_router(orders.router, prefix="/api/orders", tags=["orders"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
