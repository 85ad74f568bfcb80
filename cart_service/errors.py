"""Error kinds raised by the cart collaborators and recovered by the engine."""

from typing import Optional


class CartError(Exception):
    """Base class for every failure a cart operation can end with."""

    kind = "cart_error"

    def __init__(self, message: str, product_id: Optional[int] = None):
        self.message = message
        self.product_id = product_id
        super().__init__(message)


class StockUnavailable(CartError):
    """Inventory lookup failed (not found or transport error)."""

    kind = "stock_unavailable"


class StockUpdateFailed(CartError):
    """Writing the new stock amount back to the inventory failed."""

    kind = "stock_update_failed"


class ProductNotFound(CartError):
    """Catalog lookup failed."""

    kind = "product_not_found"


class OutOfStock(CartError):
    """Requested amount exceeds the available stock."""

    kind = "out_of_stock"


class ProductNotInCart(CartError):
    """Operation targets a line that does not exist."""

    kind = "product_not_in_cart"


class InvalidAmount(CartError):
    """Target quantity is not positive."""

    kind = "invalid_amount"


class CartNotPersisted(CartError):
    """The cart snapshot could not be written to the durable cache."""

    kind = "cart_not_persisted"
