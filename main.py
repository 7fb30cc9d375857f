#!/usr/bin/env python3
"""
Demo script for the storefront catalog.

This script shows how to:
1. Seed the catalog database from the bundled catalog file
2. Browse the catalog with different filter settings
3. Put products in a cart and place an order
"""

import asyncio
import logging

from storefront.api.main import seed_catalog
from storefront.catalog.service import CatalogService
from storefront.checkout.models import CartItemCreate, OrderCreate
from storefront.checkout.service import CartService, OrderService
from storefront.config import config
from storefront.database import get_engine, init_db
from storefront.filters import FilterStore, discount_percentage, filter_products, format_price


def print_products(title: str, products):
    """Print a product listing."""
    print(f"\n{'='*50}")
    print(f"{title} ({len(products)} results)")
    print("=" * 50)

    for product in products:
        line = f"- {product.name[:40]:<40} {format_price(product.price):>10}"
        off = discount_percentage(product.price, product.original_price)
        if off:
            line += f"  (-{off}%)"
        print(line)


async def browse(catalog: CatalogService):
    """Apply a few filter combinations to the catalog."""
    products = await catalog.list_products()
    store = FilterStore()

    print_products("Featured", filter_products(products, store.snapshot()))

    store.toggle_category("PS5 Games")
    store.toggle_category("PS4 Games")
    store.set_sort_by("price-low")
    print_products("Games, cheapest first", filter_products(products, store.snapshot()))

    store.set_show_deals_only(True)
    print_products("Games on sale", filter_products(products, store.snapshot()))

    store.clear_filters()
    store.set_availability("preOrder")
    print_products("Pre-orders", filter_products(products, store.snapshot()))

    store.clear_filters()
    store.set_search_query("wireless")
    store.set_min_rating(4)
    store.set_sort_by("rating")
    print_products("'wireless', 4 stars and up", filter_products(products, store.snapshot()))

    return products


async def checkout(engine, products):
    """Fill a cart and place an order."""
    carts = CartService(engine)
    orders = OrderService(engine)
    user_id = "demo-user"

    for product in products[:2]:
        await carts.add_item(user_id, CartItemCreate(product_id=product.id, quantity=1))

    cart = await carts.get_cart(user_id)
    print(f"\nCart: {cart.item_count} items, total {cart.display_total}")

    order = await orders.place_order(user_id, OrderCreate(shipping_address="1 Demo Street"))
    print(f"Order {order.id}: {order.status}, total {order.display_total}")


async def main():
    """Main entry point."""
    logging.basicConfig(level=config.log_level)

    engine = get_engine()
    await init_db(engine)
    catalog = CatalogService(engine)
    await seed_catalog(catalog, config.catalog_path)

    products = await browse(catalog)
    if products:
        await checkout(engine, products)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
