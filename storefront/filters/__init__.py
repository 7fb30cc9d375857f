"""Catalog filtering, sorting and price display."""

from .display import category_display_name, product_slug
from .engine import excluding_stages, filter_products, product_matches, sort_products
from .pricing import discount_percentage, format_price, is_deal, is_on_sale, parse_price
from .store import FilterStore

__all__ = [
    "FilterStore",
    "category_display_name",
    "discount_percentage",
    "excluding_stages",
    "filter_products",
    "format_price",
    "is_deal",
    "is_on_sale",
    "parse_price",
    "product_matches",
    "product_slug",
    "sort_products",
]
