"""Catalog persistence and API schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text, JSON
from sqlalchemy.orm import declarative_base

from ..filters import category_display_name, discount_percentage, format_price, is_on_sale, product_slug
from ..models import FilterConfiguration, Product, as_naive_utc

Base = declarative_base()


# ============ SQLAlchemy ORM Models ============

class ProductORM(Base):
    """SQLAlchemy model for products table."""
    __tablename__ = "products"

    # Insertion order is the catalog ("featured") order
    position = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, default="")
    # Decimal strings, parsed into Decimal when loaded
    price = Column(String, nullable=False)
    original_price = Column(String)
    category = Column(String, index=True)
    brand = Column(String, index=True)
    in_stock = Column(Boolean, default=True)
    stock_quantity = Column(Integer, default=0)
    is_pre_order = Column(Boolean, default=False)
    release_date = Column(DateTime)
    rating = Column(String, default="0")
    review_count = Column(Integer, default=0)
    features = Column(JSON, default=list)
    tags = Column(JSON, default=list)
    compatibility = Column(JSON, default=list)
    image_urls = Column(JSON, default=list)
    specifications = Column(JSON, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)

    def to_product(self) -> Product:
        """Convert row to a Product. Raises ValidationError on malformed fields."""
        return Product(
            id=self.id,
            name=self.name,
            description=self.description or "",
            price=self.price,
            original_price=self.original_price,
            category=self.category,
            brand=self.brand,
            in_stock=self.in_stock,
            stock_quantity=self.stock_quantity or 0,
            is_pre_order=self.is_pre_order,
            release_date=self.release_date,
            rating=self.rating or "0",
            review_count=self.review_count or 0,
            features=self.features or [],
            tags=self.tags or [],
            compatibility=self.compatibility or [],
            image_urls=self.image_urls or [],
            specifications=self.specifications or {},
            created_at=self.created_at,
        )


# ============ Pydantic Models (API) ============

class ProductCreate(BaseModel):
    """Schema for adding a product to the catalog."""
    name: str
    description: str = ""
    price: Decimal = Field(..., ge=0)
    original_price: Optional[Decimal] = Field(None, alias="originalPrice", ge=0)
    category: str
    brand: str
    in_stock: bool = Field(True, alias="inStock")
    stock_quantity: int = Field(0, alias="stockQuantity", ge=0)
    is_pre_order: bool = Field(False, alias="isPreOrder")
    release_date: Optional[datetime] = Field(None, alias="releaseDate")
    rating: Decimal = Field(Decimal("0"), ge=0, le=5)
    review_count: int = Field(0, alias="reviewCount", ge=0)
    features: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    compatibility: list[str] = Field(default_factory=list)
    image_urls: list[str] = Field(default_factory=list, alias="imageUrls")
    specifications: dict[str, str] = Field(default_factory=dict)
    # Optional explicit values, used when seeding from a catalog file
    id: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    class Config:
        populate_by_name = True

    @field_validator("created_at", "release_date")
    @classmethod
    def normalize_timestamp(cls, value: Optional[datetime]) -> Optional[datetime]:
        # SQLite DateTime columns drop the offset, so store UTC
        return as_naive_utc(value)


class ProductResponse(BaseModel):
    """Schema for product response, with display fields."""
    id: str
    name: str
    description: str
    price: Decimal
    original_price: Optional[Decimal] = None
    category: str
    category_name: str
    brand: str
    in_stock: bool
    stock_quantity: int
    is_pre_order: bool
    release_date: Optional[datetime] = None
    rating: Decimal
    review_count: int
    features: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    compatibility: list[str] = Field(default_factory=list)
    image_urls: list[str] = Field(default_factory=list)
    specifications: dict[str, str] = Field(default_factory=dict)
    created_at: datetime
    slug: str
    on_sale: bool
    discount_percentage: int
    display_price: str
    display_original_price: Optional[str] = None

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(
            **product.model_dump(by_alias=False),
            category_name=category_display_name(product.category),
            slug=product_slug(product.name),
            on_sale=is_on_sale(product),
            discount_percentage=discount_percentage(product.price, product.original_price),
            display_price=format_price(product.price),
            display_original_price=(
                format_price(product.original_price) if product.original_price is not None else None
            ),
        )


class ProductListResponse(BaseModel):
    """Schema for a filtered product list."""
    total: int
    filters: Optional[FilterConfiguration] = None
    products: list[ProductResponse]
