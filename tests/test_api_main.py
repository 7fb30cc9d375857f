"""Tests for application setup and catalog seeding."""

import pytest
from httpx import AsyncClient, ASGITransport

from storefront.api.main import create_app, seed_catalog
from storefront.catalog.service import CatalogService
from storefront.config import config
from storefront.database import get_engine, init_db


@pytest.fixture
async def db_engine(tmp_path):
    engine = get_engine(str(tmp_path / "test.db"))
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.mark.asyncio
async def test_seed_catalog_only_fills_empty_database(db_engine):
    service = CatalogService(db_engine)

    inserted = await seed_catalog(service, config.catalog_path)
    assert inserted > 0
    assert await service.count() == inserted

    assert await seed_catalog(service, config.catalog_path) == 0
    assert await service.count() == inserted


@pytest.mark.asyncio
async def test_seed_catalog_missing_file(db_engine, tmp_path):
    service = CatalogService(db_engine)

    assert await seed_catalog(service, str(tmp_path / "missing.json")) == 0
    assert await service.count() == 0


@pytest.mark.asyncio
async def test_health_check():
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
