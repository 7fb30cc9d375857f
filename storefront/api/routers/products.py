"""API endpoints for browsing the product catalog."""

from decimal import Decimal
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from ...catalog.models import ProductCreate, ProductResponse, ProductListResponse
from ...catalog.service import CatalogService
from ...config import config
from ...database import get_engine
from ...errors import DuplicateProduct
from ...models import Availability, FilterConfiguration, SortKey

router = APIRouter()

# Global engine (initialized on startup)
_engine = None


def get_catalog_service() -> CatalogService:
    """Dependency to get catalog service."""
    global _engine
    if _engine is None:
        _engine = get_engine()
    return CatalogService(_engine)


def _list_response(products, filters: FilterConfiguration = None) -> ProductListResponse:
    return ProductListResponse(
        total=len(products),
        filters=filters,
        products=[ProductResponse.from_product(p) for p in products],
    )


@router.get("", response_model=ProductListResponse)
async def list_products(
    search: str = "",
    min_price: Decimal = Query(Decimal("0"), ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    category: list[str] = Query(default=[]),
    brand: list[str] = Query(default=[]),
    availability: Availability = Availability.ALL,
    min_rating: int = Query(0, ge=0, le=5),
    deals: bool = False,
    feature: list[str] = Query(default=[]),
    sort: SortKey = SortKey.FEATURED,
    service: CatalogService = Depends(get_catalog_service),
):
    """
    List catalog products matching the browsing filters.

    - search: Text matched against name, description and tags
    - min_price / max_price: Inclusive price bounds
    - category / brand / feature: Repeatable; empty means no restriction
    - availability: all, inStock or preOrder
    - min_rating: Minimum rating, 0-5
    - deals: Only discounted products
    - sort: featured, price-low, price-high, rating or newest
    """
    try:
        filters = FilterConfiguration(
            search_query=search,
            price_range=(min_price, config.max_price if max_price is None else max_price),
            selected_categories=tuple(category),
            selected_brands=tuple(brand),
            availability=availability,
            min_rating=min_rating,
            show_deals_only=deals,
            selected_features=tuple(feature),
            sort_by=sort,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors()[0]["msg"])

    products = await service.filter(filters)
    return _list_response(products, filters)


@router.get("/deals", response_model=ProductListResponse)
async def list_deals(service: CatalogService = Depends(get_catalog_service)):
    """Discounted products, in catalog order."""
    return _list_response(await service.get_deals())


@router.get("/pre-orders", response_model=ProductListResponse)
async def list_pre_orders(service: CatalogService = Depends(get_catalog_service)):
    """Products available for pre-order, in catalog order."""
    return _list_response(await service.get_pre_orders())


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    service: CatalogService = Depends(get_catalog_service),
):
    """Get product by ID."""
    product = await service.get_product(product_id)

    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    return ProductResponse.from_product(product)


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    data: ProductCreate,
    service: CatalogService = Depends(get_catalog_service),
):
    """Add a product to the end of the catalog. 409 if the ID is taken."""
    try:
        product = await service.create_product(data)
    except DuplicateProduct as e:
        raise HTTPException(status_code=409, detail=str(e))
    return ProductResponse.from_product(product)
