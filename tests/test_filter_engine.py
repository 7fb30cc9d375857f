"""Tests for the product filter engine."""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from storefront.filters import (
    discount_percentage, excluding_stages, filter_products, product_matches, sort_products,
)
from storefront.models import Availability, FilterConfiguration, Product, SortKey


_BASE_TIME = datetime(2024, 1, 1)


def make_product(id: str, **overrides) -> Product:
    """Build a product with sensible defaults."""
    data = {
        "id": id,
        "name": f"Product {id}",
        "description": "A gaming product",
        "price": "100",
        "category": "Keyboards",
        "brand": "Corsair",
        "in_stock": True,
        "is_pre_order": False,
        "rating": "4.5",
        "created_at": _BASE_TIME,
    }
    data.update(overrides)
    return Product(**data)


def config(**kwargs) -> FilterConfiguration:
    return FilterConfiguration(**kwargs)


@pytest.fixture
def catalog():
    """Small mixed catalog."""
    return [
        make_product(
            "mouse", name="Razer DeathAdder", price="129.99", original_price="159.99",
            category="Gaming Mice", brand="Razer", rating="4.8",
            features=["Wireless", "RGB Lighting"], tags=["gaming", "wireless"],
            created_at=_BASE_TIME + timedelta(days=1),
        ),
        make_product(
            "keyboard", name="Corsair K95", price="189.99", category="Keyboards",
            brand="Corsair", rating="4.6", features=["Mechanical", "RGB Lighting"],
            tags=["mechanical"], created_at=_BASE_TIME + timedelta(days=5),
        ),
        make_product(
            "chair", name="SecretLab Titan", price="549.99", category="Chairs",
            brand="SecretLab", rating="4.8", in_stock=False, is_pre_order=True,
            features=["4-Way Lumbar"], created_at=_BASE_TIME + timedelta(days=3),
        ),
        make_product(
            "game", name="God of War", description="Norse mythology epic",
            price="59.99", original_price="69.99", category="PS5 Games", brand="Sony",
            rating="4.9", features=["Open World"], tags=["ps5", "action"],
            created_at=_BASE_TIME + timedelta(days=2),
        ),
        make_product(
            "retired", name="Old Headset", price="19.99", category="Headsets",
            brand="SteelSeries", rating="3.2", in_stock=False, is_pre_order=False,
            created_at=_BASE_TIME,
        ),
    ]


def ids(products):
    return [p.id for p in products]


# ============ Defaults and general properties ============

def test_default_configuration_keeps_catalog_order(catalog):
    assert ids(filter_products(catalog, config())) == ids(catalog)


def test_empty_catalog():
    assert filter_products([], config(search_query="anything")) == []


def test_output_is_subset_without_duplicates(catalog):
    result = filter_products(catalog, config(selected_features=("RGB Lighting",), sort_by=SortKey.RATING))
    assert len(ids(result)) == len(set(ids(result)))
    assert set(ids(result)) <= set(ids(catalog))


def test_idempotent(catalog):
    cfg = config(search_query="o", sort_by=SortKey.PRICE_HIGH, min_rating=4)
    assert filter_products(catalog, cfg) == filter_products(catalog, cfg)


def test_inputs_not_mutated(catalog):
    before = list(catalog)
    filter_products(catalog, config(sort_by=SortKey.PRICE_LOW))
    assert catalog == before


def test_every_excluded_product_has_a_reason(catalog):
    cfg = config(
        search_query="a",
        price_range=(Decimal("50"), Decimal("500")),
        availability=Availability.IN_STOCK,
        selected_features=("RGB Lighting", "Open World"),
    )
    result = filter_products(catalog, cfg)
    kept = set(ids(result))

    for product in catalog:
        if product.id in kept:
            assert excluding_stages(product, cfg) == []
            assert product_matches(product, cfg)
        else:
            assert excluding_stages(product, cfg) != []


# ============ Individual filter stages ============

@pytest.mark.parametrize("query,expected", [
    ("razer", ["mouse"]),
    ("RAZER", ["mouse"]),
    ("norse", ["game"]),        # description
    ("mechanical", ["keyboard"]),  # tag
    ("PS5", ["game"]),
    ("no such thing", []),
])
def test_search(catalog, query, expected):
    assert ids(filter_products(catalog, config(search_query=query))) == expected


def test_empty_search_matches_everything(catalog):
    assert len(filter_products(catalog, config(search_query=""))) == len(catalog)


def test_price_range_is_inclusive(catalog):
    cfg = config(price_range=(Decimal("59.99"), Decimal("189.99")))
    assert ids(filter_products(catalog, cfg)) == ["mouse", "keyboard", "game"]


def test_brand_allow_list(catalog):
    cfg = config(selected_brands=("Sony", "Razer"))
    assert ids(filter_products(catalog, cfg)) == ["mouse", "game"]


def test_empty_selections_do_not_restrict(catalog):
    cfg = config(selected_categories=(), selected_brands=(), selected_features=())
    assert len(filter_products(catalog, cfg)) == len(catalog)


def test_availability_all_keeps_unavailable_products(catalog):
    assert "retired" in ids(filter_products(catalog, config(availability=Availability.ALL)))


def test_availability_in_stock(catalog):
    result = ids(filter_products(catalog, config(availability=Availability.IN_STOCK)))
    assert result == ["mouse", "keyboard", "game"]


def test_availability_pre_order(catalog):
    result = ids(filter_products(catalog, config(availability=Availability.PRE_ORDER)))
    assert result == ["chair"]


def test_deals_only(catalog):
    assert ids(filter_products(catalog, config(show_deals_only=True))) == ["mouse", "game"]


def test_original_price_not_above_price_is_not_a_deal():
    products = [
        make_product("same", price="50", original_price="50"),
        make_product("inverted", price="50", original_price="40"),
    ]
    assert filter_products(products, config(show_deals_only=True)) == []


def test_features_use_or_semantics(catalog):
    cfg = config(selected_features=("Wireless", "Mechanical"))
    assert ids(filter_products(catalog, cfg)) == ["mouse", "keyboard"]


def test_dimensions_combine_with_and(catalog):
    cfg = config(selected_features=("RGB Lighting",), selected_brands=("Corsair",))
    assert ids(filter_products(catalog, cfg)) == ["keyboard"]


def test_min_rating_zero_is_no_op():
    products = [make_product("zero", rating="0")]
    assert ids(filter_products(products, config(min_rating=0))) == ["zero"]


# ============ Sorting ============

def test_sort_price_low(catalog):
    assert ids(filter_products(catalog, config(sort_by=SortKey.PRICE_LOW))) == [
        "retired", "game", "mouse", "keyboard", "chair",
    ]


def test_sort_price_high(catalog):
    assert ids(filter_products(catalog, config(sort_by=SortKey.PRICE_HIGH))) == [
        "chair", "keyboard", "mouse", "game", "retired",
    ]


def test_sort_newest(catalog):
    assert ids(filter_products(catalog, config(sort_by=SortKey.NEWEST))) == [
        "keyboard", "chair", "game", "mouse", "retired",
    ]


def test_sort_rating_keeps_catalog_order_for_ties(catalog):
    # mouse and chair share 4.8
    assert ids(filter_products(catalog, config(sort_by=SortKey.RATING))) == [
        "game", "mouse", "chair", "keyboard", "retired",
    ]


def test_price_high_is_price_low_reversed_except_ties():
    products = [
        make_product("a", price="10"),
        make_product("b", price="30"),
        make_product("c", price="10"),
        make_product("d", price="20"),
    ]
    low = ids(sort_products(products, SortKey.PRICE_LOW))
    high = ids(sort_products(products, SortKey.PRICE_HIGH))

    assert low == ["a", "c", "d", "b"]
    # equal prices keep catalog order in both directions
    assert high == ["b", "d", "a", "c"]
    assert sorted(low) == sorted(high)


def test_featured_sort_is_catalog_order_of_subset(catalog):
    cfg = config(availability=Availability.IN_STOCK, sort_by=SortKey.FEATURED)
    result = ids(filter_products(catalog, cfg))
    assert result == [p.id for p in catalog if p.in_stock]


# ============ Scenarios ============

def test_category_selection_keeps_only_that_category():
    products = [
        make_product("kb", price="100", category="Keyboards"),
        make_product("ms", price="50", category="Gaming Mice"),
    ]
    result = filter_products(products, config(selected_categories=("Gaming Mice",)))

    assert ids(result) == ["ms"]
    assert result[0].price == Decimal("50")


def test_discounted_product_shown_with_deals_and_price_sort():
    products = [make_product("gow", price="59.99", original_price="69.99")]
    result = filter_products(products, config(show_deals_only=True, sort_by=SortKey.PRICE_LOW))

    assert ids(result) == ["gow"]
    assert discount_percentage(result[0].price, result[0].original_price) == 14


def test_equal_ratings_keep_catalog_order():
    products = [make_product("X", rating="4.8"), make_product("Y", rating="4.8")]
    assert ids(filter_products(products, config(sort_by=SortKey.RATING))) == ["X", "Y"]


def test_availability_ignores_the_other_flag():
    purchasable = make_product("buy", in_stock=True, is_pre_order=False)
    reservable = make_product("reserve", in_stock=False, is_pre_order=True)
    products = [purchasable, reservable]

    assert ids(filter_products(products, config(availability=Availability.PRE_ORDER))) == ["reserve"]
    assert ids(filter_products(products, config(availability=Availability.IN_STOCK))) == ["buy"]


def test_min_rating_boundary_is_inclusive():
    products = [make_product("low", rating="3.9"), make_product("ok", rating="4.0")]
    assert ids(filter_products(products, config(min_rating=4))) == ["ok"]


def test_newest_sort_mixes_aware_and_naive_timestamps():
    """Aware timestamps are compared as their UTC instant."""
    products = [
        Product(id="zulu", name="Zulu", price="10", category="Software", brand="Adobe",
                createdAt="2024-01-01T00:00:00Z"),
        make_product("naive", created_at=datetime(2024, 1, 1, 12, 0)),
        make_product("offset", created_at=datetime(2024, 1, 1, 9, 0, tzinfo=timezone(timedelta(hours=-5)))),
    ]

    result = filter_products(products, config(sort_by=SortKey.NEWEST))

    # offset is 14:00 UTC
    assert ids(result) == ["offset", "naive", "zulu"]
    assert all(p.created_at.tzinfo is None for p in result)
