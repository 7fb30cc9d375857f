"""API endpoints for placing and viewing orders."""

from fastapi import APIRouter, Depends, HTTPException

from ...checkout.models import OrderCreate, OrderResponse
from ...checkout.service import OrderService
from ...database import get_engine
from ...errors import EmptyCartError

router = APIRouter()

# Global engine (initialized on startup)
_engine = None


def get_order_service() -> OrderService:
    """Dependency to get order service."""
    global _engine
    if _engine is None:
        _engine = get_engine()
    return OrderService(_engine)


@router.post("/{user_id}", response_model=OrderResponse, status_code=201)
async def place_order(
    user_id: str,
    data: OrderCreate,
    service: OrderService = Depends(get_order_service),
):
    """
    Place an order for everything in the user's cart.

    - Snapshots product name and price onto the order
    - Empties the cart
    """
    try:
        return await service.place_order(user_id, data)
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{user_id}", response_model=list[OrderResponse])
async def list_orders(
    user_id: str,
    service: OrderService = Depends(get_order_service),
):
    """List the user's orders, newest first."""
    return await service.list_orders(user_id)


@router.get("/{user_id}/{order_id}", response_model=OrderResponse)
async def get_order(
    user_id: str,
    order_id: str,
    service: OrderService = Depends(get_order_service),
):
    order = await service.get_order(user_id, order_id)

    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    return order
