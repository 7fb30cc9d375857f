"""Cart and order data models."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from sqlalchemy import Column, String, Integer, DateTime, Text, JSON, ForeignKey

from ..catalog.models import Base, ProductResponse


# ============ SQLAlchemy ORM Models ============

class CartItemORM(Base):
    """SQLAlchemy model for cart_items table."""
    __tablename__ = "cart_items"

    id = Column(String, primary_key=True)
    user_id = Column(String, index=True, nullable=False)
    product_id = Column(String, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, default=1)
    created_at = Column(DateTime, default=datetime.utcnow)


class OrderORM(Base):
    """SQLAlchemy model for orders table."""
    __tablename__ = "orders"

    id = Column(String, primary_key=True)
    user_id = Column(String, index=True, nullable=False)
    items = Column(JSON, default=list)
    # Decimal strings, quantized to cents
    subtotal = Column(String, nullable=False)
    tax = Column(String, nullable=False)
    shipping = Column(String, nullable=False)
    total = Column(String, nullable=False)
    status = Column(String, default="pending")
    shipping_address = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)


# ============ Pydantic Models (API) ============

class CartItemCreate(BaseModel):
    """Schema for adding a product to the cart."""
    product_id: str
    quantity: int = Field(1, ge=1)


class CartItemUpdate(BaseModel):
    """Schema for changing a cart line quantity. Zero or less removes the line."""
    quantity: int


class CartLine(BaseModel):
    """A cart line joined with its product."""
    id: str
    product_id: str
    quantity: int
    line_total: Decimal
    product: ProductResponse


class CartResponse(BaseModel):
    """Schema for a user's cart."""
    user_id: str
    items: list[CartLine] = Field(default_factory=list)
    item_count: int = 0
    subtotal: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    shipping: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    display_total: str = ""


class OrderCreate(BaseModel):
    """Schema for placing an order from the cart."""
    shipping_address: Optional[str] = None


class OrderItem(BaseModel):
    """Product snapshot stored on an order."""
    product_id: str
    product_name: str
    price: Decimal
    quantity: int


class OrderResponse(BaseModel):
    """Schema for order response."""
    id: str
    user_id: str
    items: list[OrderItem]
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal
    display_total: str
    status: str
    shipping_address: Optional[str] = None
    created_at: datetime
