"""Storefront exceptions."""


class StorefrontError(Exception):
    """Base class for storefront errors."""


class ProductNotFound(StorefrontError):
    """Raised when a product ID is not in the catalog."""

    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class CartItemNotFound(StorefrontError):
    """Raised when a cart line does not exist for the user."""

    def __init__(self, item_id: str):
        super().__init__(f"Cart item not found: {item_id}")
        self.item_id = item_id


class EmptyCartError(StorefrontError):
    """Raised when placing an order with nothing in the cart."""

    def __init__(self, user_id: str):
        super().__init__(f"Cart is empty for user {user_id}")
        self.user_id = user_id


class DuplicateProduct(StorefrontError):
    """Raised when adding a product whose ID is already in the catalog."""

    def __init__(self, product_id: str):
        super().__init__(f"Product already exists: {product_id}")
        self.product_id = product_id
