"""API endpoints for user carts."""

from fastapi import APIRouter, Depends, HTTPException

from ...checkout.models import CartItemCreate, CartItemUpdate, CartResponse
from ...checkout.service import CartService
from ...database import get_engine
from ...errors import CartItemNotFound, ProductNotFound

router = APIRouter()

# Global engine (initialized on startup)
_engine = None


def get_cart_service() -> CartService:
    """Dependency to get cart service."""
    global _engine
    if _engine is None:
        _engine = get_engine()
    return CartService(_engine)


@router.get("/{user_id}", response_model=CartResponse)
async def get_cart(
    user_id: str,
    service: CartService = Depends(get_cart_service),
):
    """Get the user's cart with line totals."""
    return await service.get_cart(user_id)


@router.post("/{user_id}/items", response_model=CartResponse)
async def add_item(
    user_id: str,
    data: CartItemCreate,
    service: CartService = Depends(get_cart_service),
):
    """
    Add a product to the cart.

    Adding a product already in the cart increases its quantity.
    """
    try:
        await service.add_item(user_id, data)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return await service.get_cart(user_id)


@router.put("/{user_id}/items/{item_id}", response_model=CartResponse)
async def update_item(
    user_id: str,
    item_id: str,
    data: CartItemUpdate,
    service: CartService = Depends(get_cart_service),
):
    """Change a line's quantity; zero or less removes it."""
    try:
        await service.update_quantity(user_id, item_id, data.quantity)
    except CartItemNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return await service.get_cart(user_id)


@router.delete("/{user_id}/items/{item_id}", response_model=CartResponse)
async def remove_item(
    user_id: str,
    item_id: str,
    service: CartService = Depends(get_cart_service),
):
    try:
        await service.remove_item(user_id, item_id)
    except CartItemNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return await service.get_cart(user_id)


@router.delete("/{user_id}", response_model=CartResponse)
async def clear_cart(
    user_id: str,
    service: CartService = Depends(get_cart_service),
):
    await service.clear(user_id)
    return await service.get_cart(user_id)
