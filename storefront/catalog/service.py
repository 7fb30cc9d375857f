"""Catalog service layer."""

import logging
from datetime import datetime
from typing import Optional
from uuid import uuid4

from pydantic import ValidationError
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncEngine

from ..database import get_session
from ..errors import DuplicateProduct
from ..filters import filter_products, is_on_sale
from ..filters.engine import matches_search
from ..models import FilterConfiguration, Product
from .models import ProductORM, ProductCreate

logger = logging.getLogger(__name__)


def _price_text(value) -> Optional[str]:
    return None if value is None else str(value)


class CatalogService:
    """Service for reading and maintaining the product catalog."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    def _build_row(self, data: ProductCreate) -> ProductORM:
        return ProductORM(
            id=data.id or str(uuid4()),
            name=data.name,
            description=data.description,
            price=_price_text(data.price),
            original_price=_price_text(data.original_price),
            category=data.category,
            brand=data.brand,
            in_stock=data.in_stock,
            stock_quantity=data.stock_quantity,
            is_pre_order=data.is_pre_order,
            release_date=data.release_date,
            rating=_price_text(data.rating),
            review_count=data.review_count,
            features=data.features,
            tags=data.tags,
            compatibility=data.compatibility,
            image_urls=data.image_urls,
            specifications=data.specifications,
            created_at=data.created_at or datetime.utcnow(),
        )

    async def create_product(self, data: ProductCreate) -> Product:
        """
        Add a product to the end of the catalog.

        Raises:
            DuplicateProduct: a product with the same ID already exists
        """
        row = self._build_row(data)
        async with get_session(self.engine) as session:
            existing = await session.execute(
                select(ProductORM.id).where(ProductORM.id == row.id)
            )
            if existing.scalar_one_or_none() is not None:
                raise DuplicateProduct(row.id)
            session.add(row)
        return row.to_product()

    async def seed(self, products: list[ProductCreate]) -> int:
        """Insert catalog records in order. Returns number inserted."""
        async with get_session(self.engine) as session:
            for data in products:
                session.add(self._build_row(data))
                # flush per row so autoincrement positions follow file order
                await session.flush()
        logger.info("Seeded %d products into catalog", len(products))
        return len(products)

    async def count(self) -> int:
        async with get_session(self.engine) as session:
            result = await session.execute(select(func.count()).select_from(ProductORM))
            return result.scalar()

    async def list_products(self) -> list[Product]:
        """Fetch the full catalog in catalog order."""
        async with get_session(self.engine) as session:
            result = await session.execute(select(ProductORM).order_by(ProductORM.position))
            rows = list(result.scalars())

        products = []
        for row in rows:
            try:
                products.append(row.to_product())
            except ValidationError as e:
                logger.error(
                    "Excluding product %s from catalog: malformed data (%s)",
                    row.id, e.errors()[0]["msg"],
                )
        return products

    async def get_product(self, product_id: str) -> Optional[Product]:
        """Get product by ID."""
        async with get_session(self.engine) as session:
            result = await session.execute(
                select(ProductORM).where(ProductORM.id == product_id)
            )
            row = result.scalar_one_or_none()

        if not row:
            return None
        try:
            return row.to_product()
        except ValidationError as e:
            logger.error("Product %s has malformed data (%s)", product_id, e.errors()[0]["msg"])
            return None

    async def filter(self, config: FilterConfiguration) -> list[Product]:
        """Fetch the catalog and apply a filter configuration."""
        return filter_products(await self.list_products(), config)

    async def search_products(self, query: str) -> list[Product]:
        return [p for p in await self.list_products() if matches_search(p, query)]

    async def get_deals(self) -> list[Product]:
        """Products whose original price is above the current price."""
        return [p for p in await self.list_products() if is_on_sale(p)]

    async def get_pre_orders(self) -> list[Product]:
        return [p for p in await self.list_products() if p.is_pre_order]
