"""Collaborator protocols the cart engine is constructed with."""
from typing import Optional, Protocol, runtime_checkable

from cart_service.models import CartState, ProductRecord, StockRecord


@runtime_checkable
class Inventory(Protocol):
    """
    Remote stock counters. get_stock raises StockUnavailable,
    put_stock raises StockUpdateFailed.
    """

    async def get_stock(self, product_id: int) -> StockRecord:
        ...

    async def put_stock(self, product_id: int, stock: StockRecord) -> None:
        ...


@runtime_checkable
class Catalog(Protocol):
    """Product metadata lookup. Raises ProductNotFound."""

    async def get_product(self, product_id: int) -> ProductRecord:
        ...


@runtime_checkable
class CartStore(Protocol):
    """Single durable slot holding the cart snapshot. save raises CartNotPersisted when the write fails."""

    def load(self) -> Optional[CartState]:
        ...

    def save(self, cart: CartState) -> None:
        ...


@runtime_checkable
class Notifier(Protocol):
    """Fire-and-forget outcome messages for the shopper."""

    def notify_success(self, message: str) -> None:
        ...

    def notify_failure(self, message: str) -> None:
        ...
