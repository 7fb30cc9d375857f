"""Data models for the product catalog and browsing filters."""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from .config import config


PRODUCT_CATEGORIES = (
    "Gaming Mice",
    "Keyboards",
    "Headsets",
    "Monitors",
    "Pre-built PCs",
    "Components",
    "Consoles",
    "Chairs",
    "Controllers",
    "Software",
    "PS5 Games",
    "PS4 Games",
)

PRODUCT_BRANDS = (
    "Razer",
    "Corsair",
    "SteelSeries",
    "ASUS",
    "NexTech",
    "SecretLab",
    "Sony",
    "Microsoft",
    "NVIDIA",
    "AMD",
    "Adobe",
    "Activision",
)

PRODUCT_FEATURES = (
    "RGB Lighting",
    "Wireless",
    "Mechanical",
    "Ergonomic",
    "High-Res Audio",
    "Ray Tracing",
    "G-SYNC",
    "HDR10",
    "Retractable Mic",
    "Premium Drivers",
    "4-Way Lumbar",
    "Magnetic Cushions",
    "Cold-Cure Foam",
    "Haptic Feedback",
    "3D Audio",
    "Dual Character",
    "Open World",
    "DLSS 3",
    "AV1 Encoding",
    "Zen 4 Architecture",
    "5nm Process",
    "PCIe 5.0",
    "Textured Grips",
    "Hybrid D-pad",
    "All Adobe Apps",
    "Cloud Storage",
    "Regular Updates",
)

COMPATIBILITY_PLATFORMS = ("PC", "Mac", "PS5", "PS4", "Xbox", "Switch", "Console", "Universal")

CATEGORY_GROUPS = {
    "peripherals": ("Gaming Mice", "Keyboards", "Headsets", "Controllers"),
    "hardware": ("Monitors", "Pre-built PCs", "Components", "Consoles"),
    "accessories": ("Chairs", "Software"),
    "games": ("PS5 Games", "PS4 Games"),
}


def as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC already."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class Availability(str, Enum):
    """Availability filter values."""
    ALL = "all"
    IN_STOCK = "inStock"
    PRE_ORDER = "preOrder"


class SortKey(str, Enum):
    """Sort orders offered on the catalog page."""
    FEATURED = "featured"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    RATING = "rating"
    NEWEST = "newest"


class Product(BaseModel):
    """Catalog product. Read-only once loaded."""

    id: str = Field(..., description="Opaque unique product key")
    name: str
    description: str = ""
    price: Decimal = Field(..., ge=0, description="Current selling price")
    original_price: Optional[Decimal] = Field(
        None, alias="originalPrice", ge=0, description="Price before discount"
    )
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
    created_at: datetime = Field(default_factory=datetime.utcnow, alias="createdAt")

    class Config:
        frozen = True
        populate_by_name = True

    @field_validator("created_at", "release_date")
    @classmethod
    def normalize_timestamp(cls, value: Optional[datetime]) -> Optional[datetime]:
        # newest ordering compares these, so all of them must be naive UTC
        return as_naive_utc(value)

    def get_primary_image(self) -> Optional[str]:
        """Get the first product image URL."""
        return self.image_urls[0] if self.image_urls else None


class FilterConfiguration(BaseModel):
    """
    Snapshot of the user's browsing criteria.

    Empty selections mean "no restriction". Values are immutable; FilterStore
    derives a new validated configuration for every change.
    """

    search_query: str = ""
    price_range: tuple[Decimal, Decimal] = Field(default_factory=lambda: config.default_price_range)
    selected_categories: tuple[str, ...] = ()
    selected_brands: tuple[str, ...] = ()
    availability: Availability = Availability.ALL
    min_rating: int = Field(0, ge=0, le=5)
    show_deals_only: bool = False
    selected_features: tuple[str, ...] = ()
    sort_by: SortKey = SortKey.FEATURED

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_price_range(self) -> "FilterConfiguration":
        low, high = self.price_range
        if low < 0:
            raise ValueError("price_range minimum must not be negative")
        if low > high:
            raise ValueError("price_range minimum must not exceed maximum")
        return self

    @property
    def min_price(self) -> Decimal:
        return self.price_range[0]

    @property
    def max_price(self) -> Decimal:
        return self.price_range[1]
