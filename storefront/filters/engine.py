"""
Product filter engine.

Derives the products to show from the full catalog and a filter
configuration. Every function here is pure: inputs are never mutated and
identical inputs always give identical output.
"""

from typing import Callable, Iterable, Sequence

from ..models import Availability, FilterConfiguration, Product, SortKey
from .pricing import is_on_sale


def matches_search(product: Product, query: str) -> bool:
    """Case-insensitive substring match against name, description and tags."""
    if not query:
        return True
    needle = query.lower()
    return (
        needle in product.name.lower()
        or needle in product.description.lower()
        or any(needle in tag.lower() for tag in product.tags)
    )


def within_price_range(product: Product, config: FilterConfiguration) -> bool:
    """Inclusive on both bounds."""
    return config.min_price <= product.price <= config.max_price


def in_selection(value: str, selected: Sequence[str]) -> bool:
    """Allow-list check; an empty selection lets everything through."""
    return not selected or value in selected


def matches_availability(product: Product, availability: Availability) -> bool:
    if availability == Availability.IN_STOCK:
        return product.in_stock
    if availability == Availability.PRE_ORDER:
        return product.is_pre_order
    return True


def meets_min_rating(product: Product, min_rating: int) -> bool:
    return product.rating >= min_rating


def has_any_feature(product: Product, selected: Sequence[str]) -> bool:
    """At least one selected feature must be present (OR semantics)."""
    if not selected:
        return True
    return not set(selected).isdisjoint(product.features)


# Stages are ANDed together; order matches the filter panel.
FILTER_STAGES: list[tuple[str, Callable[[Product, FilterConfiguration], bool]]] = [
    ("search", lambda p, c: matches_search(p, c.search_query)),
    ("price", within_price_range),
    ("category", lambda p, c: in_selection(p.category, c.selected_categories)),
    ("brand", lambda p, c: in_selection(p.brand, c.selected_brands)),
    ("availability", lambda p, c: matches_availability(p, c.availability)),
    ("rating", lambda p, c: meets_min_rating(p, c.min_rating)),
    ("deals", lambda p, c: not c.show_deals_only or is_on_sale(p)),
    ("features", lambda p, c: has_any_feature(p, c.selected_features)),
]

# sort key -> (key function, descending)
SORT_ORDERS = {
    SortKey.PRICE_LOW: (lambda p: p.price, False),
    SortKey.PRICE_HIGH: (lambda p: p.price, True),
    SortKey.RATING: (lambda p: p.rating, True),
    SortKey.NEWEST: (lambda p: p.created_at, True),
}


def product_matches(product: Product, config: FilterConfiguration) -> bool:
    """Check a single product against every filter stage."""
    return all(stage(product, config) for _, stage in FILTER_STAGES)


def excluding_stages(product: Product, config: FilterConfiguration) -> list[str]:
    """Names of the filter stages that reject the product (empty if it passes)."""
    return [name for name, stage in FILTER_STAGES if not stage(product, config)]


def sort_products(products: Iterable[Product], sort_by: SortKey) -> list[Product]:
    """
    Order products by the given sort key.

    The sort is stable, so products with equal keys keep their catalog
    order. ``featured`` keeps catalog order as is.
    """
    ordered = list(products)
    if sort_by in SORT_ORDERS:
        key, descending = SORT_ORDERS[sort_by]
        # reverse=True keeps equal items in their original relative order
        ordered.sort(key=key, reverse=descending)
    return ordered


def filter_products(products: Iterable[Product], config: FilterConfiguration) -> list[Product]:
    """
    Apply a filter configuration to a catalog.

    Args:
        products: Full catalog, in catalog order
        config: Filter configuration snapshot

    Returns:
        Products passing every active filter, ordered by ``config.sort_by``
    """
    matched = [p for p in products if product_matches(p, config)]
    return sort_products(matched, config.sort_by)
