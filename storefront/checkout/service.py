"""Cart and order service layer."""

import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from uuid import uuid4

from pydantic import ValidationError
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncEngine

from ..catalog.models import ProductORM, ProductResponse
from ..config import config
from ..database import get_session
from ..errors import CartItemNotFound, EmptyCartError, ProductNotFound
from ..filters import format_price
from ..filters.pricing import CENT
from ..models import Product
from .models import (
    CartItemORM, OrderORM,
    CartItemCreate, CartLine, CartResponse,
    OrderCreate, OrderItem, OrderResponse,
)

logger = logging.getLogger(__name__)


def checkout_totals(subtotal: Decimal) -> dict[str, Decimal]:
    """
    Compute tax, shipping and grand total for a subtotal, all in cents.

    Shipping is free when the subtotal is strictly above the threshold, and
    nothing is charged for an empty cart.
    """
    subtotal = subtotal.quantize(CENT, rounding=ROUND_HALF_UP)
    tax = (subtotal * config.tax_rate).quantize(CENT, rounding=ROUND_HALF_UP)
    if subtotal == 0 or subtotal > config.free_shipping_threshold:
        shipping = Decimal("0.00")
    else:
        shipping = config.shipping_fee.quantize(CENT, rounding=ROUND_HALF_UP)
    return {
        "subtotal": subtotal,
        "tax": tax,
        "shipping": shipping,
        "total": subtotal + tax + shipping,
    }


async def _cart_rows(session, user_id: str) -> list[tuple[CartItemORM, Product]]:
    """Cart lines joined with their products; lines whose product is malformed are skipped."""
    result = await session.execute(
        select(CartItemORM, ProductORM)
        .join(ProductORM, CartItemORM.product_id == ProductORM.id)
        .where(CartItemORM.user_id == user_id)
        .order_by(CartItemORM.created_at)
    )

    rows = []
    for item, row in result.all():
        try:
            rows.append((item, row.to_product()))
        except ValidationError as e:
            logger.error(
                "Skipping cart item %s: product %s has malformed data (%s)",
                item.id, row.id, e.errors()[0]["msg"],
            )
    return rows


def _order_response(order: OrderORM) -> OrderResponse:
    total = Decimal(order.total)
    return OrderResponse(
        id=order.id,
        user_id=order.user_id,
        items=[OrderItem(**item) for item in order.items or []],
        subtotal=Decimal(order.subtotal),
        tax=Decimal(order.tax),
        shipping=Decimal(order.shipping),
        total=total,
        display_total=format_price(total),
        status=order.status,
        shipping_address=order.shipping_address,
        created_at=order.created_at,
    )


class CartService:
    """Service for managing user carts."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def get_cart(self, user_id: str) -> CartResponse:
        """Get a user's cart lines with product details and totals."""
        async with get_session(self.engine) as session:
            rows = await _cart_rows(session, user_id)

        lines = [
            CartLine(
                id=item.id,
                product_id=item.product_id,
                quantity=item.quantity,
                line_total=product.price * item.quantity,
                product=ProductResponse.from_product(product),
            )
            for item, product in rows
        ]

        totals = checkout_totals(sum((line.line_total for line in lines), Decimal("0")))
        return CartResponse(
            user_id=user_id,
            items=lines,
            item_count=sum(line.quantity for line in lines),
            display_total=format_price(totals["total"]),
            **totals,
        )

    async def add_item(self, user_id: str, data: CartItemCreate) -> CartItemORM:
        """
        Add a product to the cart.

        Adding a product that is already in the cart increases that line's
        quantity instead of creating a second line.
        """
        async with get_session(self.engine) as session:
            product = await session.execute(
                select(ProductORM.id).where(ProductORM.id == data.product_id)
            )
            if product.scalar_one_or_none() is None:
                raise ProductNotFound(data.product_id)

            result = await session.execute(
                select(CartItemORM).where(
                    CartItemORM.user_id == user_id,
                    CartItemORM.product_id == data.product_id,
                )
            )
            existing = result.scalar_one_or_none()

            if existing:
                existing.quantity += data.quantity
                return existing

            item = CartItemORM(
                id=str(uuid4()),
                user_id=user_id,
                product_id=data.product_id,
                quantity=data.quantity,
                created_at=datetime.utcnow(),
            )
            session.add(item)
            return item

    async def update_quantity(self, user_id: str, item_id: str, quantity: int) -> Optional[CartItemORM]:
        """Set a line's quantity. Returns None when the line was removed."""
        async with get_session(self.engine) as session:
            item = await self._get_item(session, user_id, item_id)
            if quantity <= 0:
                await session.delete(item)
                return None
            item.quantity = quantity
            return item

    async def remove_item(self, user_id: str, item_id: str) -> None:
        async with get_session(self.engine) as session:
            item = await self._get_item(session, user_id, item_id)
            await session.delete(item)

    async def clear(self, user_id: str) -> None:
        """Remove every line from a user's cart."""
        async with get_session(self.engine) as session:
            await session.execute(delete(CartItemORM).where(CartItemORM.user_id == user_id))

    async def _get_item(self, session, user_id: str, item_id: str) -> CartItemORM:
        result = await session.execute(
            select(CartItemORM).where(
                CartItemORM.id == item_id,
                CartItemORM.user_id == user_id,
            )
        )
        item = result.scalar_one_or_none()
        if item is None:
            raise CartItemNotFound(item_id)
        return item


class OrderService:
    """Service for placing and reading orders."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def place_order(self, user_id: str, data: OrderCreate) -> OrderResponse:
        """
        Turn the user's cart into a pending order and empty the cart.

        The order insert and the removal of the ordered lines commit together;
        if either fails the cart is left as it was.
        """
        async with get_session(self.engine) as session:
            rows = await _cart_rows(session, user_id)
            if not rows:
                raise EmptyCartError(user_id)

            items = [
                OrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    price=product.price,
                    quantity=item.quantity,
                )
                for item, product in rows
            ]
            totals = checkout_totals(
                sum((i.price * i.quantity for i in items), Decimal("0"))
            )

            order = OrderORM(
                id=str(uuid4()),
                user_id=user_id,
                items=[i.model_dump(mode="json") for i in items],
                status="pending",
                shipping_address=data.shipping_address,
                created_at=datetime.utcnow(),
                **{name: str(value) for name, value in totals.items()},
            )
            session.add(order)
            # only the lines that were read; anything added meanwhile stays
            await session.execute(
                delete(CartItemORM).where(CartItemORM.id.in_([item.id for item, _ in rows]))
            )

        logger.info("Placed order %s for user %s (%d lines, total %s)",
                    order.id, user_id, len(items), totals["total"])
        return _order_response(order)

    async def get_order(self, user_id: str, order_id: str) -> Optional[OrderResponse]:
        """Get an order; orders belonging to other users are not returned."""
        async with get_session(self.engine) as session:
            result = await session.execute(
                select(OrderORM).where(OrderORM.id == order_id)
            )
            order = result.scalar_one_or_none()

        if not order or order.user_id != user_id:
            return None
        return _order_response(order)

    async def list_orders(self, user_id: str) -> list[OrderResponse]:
        async with get_session(self.engine) as session:
            result = await session.execute(
                select(OrderORM)
                .where(OrderORM.user_id == user_id)
                .order_by(OrderORM.created_at.desc())
            )
            return [_order_response(o) for o in result.scalars()]
