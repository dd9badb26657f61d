"""Store exceptions.

Each maps onto an HTTP status through storefront.core.exceptions.ApiError.
"""

from storefront.core.exceptions import ApiError, Forbidden, InvalidRequest, NotFound


class CategoryNotFound(NotFound):
    default_message = "Category not found"


class ProductNotFound(NotFound):
    default_message = "Product not found"


class CartItemNotFound(NotFound):
    default_message = "Cart item not found"


class OrderNotFound(NotFound):
    default_message = "Order not found"


class InsufficientStock(ApiError):
    """Requested quantity is more than the product has in stock."""

    status_code = 400
    default_message = "Not enough stock available"

    def __init__(self, product=None, requested: int = None, message: str = None):
        self.product = product
        self.requested = requested
        if message is None and product is not None:
            message = f"Not enough stock available for {product.name}"
        super().__init__(message)


class EmptyCart(ApiError):
    status_code = 400
    default_message = "Cart is empty"


__all__ = [
    "CartItemNotFound",
    "CategoryNotFound",
    "EmptyCart",
    "Forbidden",
    "InsufficientStock",
    "InvalidRequest",
    "OrderNotFound",
    "ProductNotFound",
]
