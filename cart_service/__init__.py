"""Shopping cart that reserves inventory stock for every unit it holds."""

from cart_service.engine import CartEngine
from cart_service.errors import (
    CartError,
    CartNotPersisted,
    InvalidAmount,
    OutOfStock,
    ProductNotFound,
    ProductNotInCart,
    StockUnavailable,
    StockUpdateFailed,
)
from cart_service.models import CartLineItem, CartState, ProductRecord, StockRecord

__all__ = [
    "CartEngine",
    "CartError",
    "CartLineItem",
    "CartNotPersisted",
    "CartState",
    "InvalidAmount",
    "OutOfStock",
    "ProductNotFound",
    "ProductNotInCart",
    "ProductRecord",
    "StockRecord",
    "StockUnavailable",
    "StockUpdateFailed",
]
