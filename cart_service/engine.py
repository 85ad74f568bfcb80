"""
Cart engine: keeps the local cart and the remote stock counters consistent.

Every unit held in the cart is a unit taken out of the inventory, so for each
product ``cart amount + stock amount`` stays constant across operations.
Each mutating operation runs as:

    1. read stock
    2. write the adjusted stock back
    3. save the new cart snapshot (on failure, write the original stock back)
    4. swap the in-memory cart

Mutating operations are queued behind one asyncio.Lock, so overlapping calls
run one after the other instead of interleaving their stock round trips.

Operations never raise CartError to the caller: the failure is reported
through the notifier and returned.
"""

import asyncio
import logging
from typing import Optional
from uuid import uuid4

from cart_service.errors import (
    CartError,
    CartNotPersisted,
    InvalidAmount,
    OutOfStock,
    ProductNotFound,
    ProductNotInCart,
)
from cart_service.models import CartLineItem, CartState, ProductRecord, StockRecord
from cart_service.protocols import CartStore, Catalog, Inventory, Notifier

logger = logging.getLogger(__name__)


class CartEngine:
    """In-memory cart with write-through persistence and stock reservation."""

    def __init__(self, inventory: Inventory, catalog: Catalog, store: CartStore, notifier: Notifier):
        self.inventory = inventory
        self.catalog = catalog
        self.store = store
        self.notifier = notifier
        self._lock = asyncio.Lock()
        self._state = store.load() or CartState()
        logger.info(f"Cart engine started with {self._state.distinct_count} lines")

    @property
    def cart(self) -> CartState:
        """Current cart. CartState is immutable, so callers cannot edit it."""
        return self._state

    async def add_product(self, product_id: int) -> Optional[CartError]:
        """Add one unit of product_id, creating its line if needed."""
        async with self._lock:
            return await self._run("add_product", product_id, self._add(product_id))

    async def remove_product(self, product_id: int) -> Optional[CartError]:
        """Drop the line for product_id and give its units back to the inventory."""
        async with self._lock:
            return await self._run("remove_product", product_id, self._remove(product_id))

    async def update_product_amount(self, product_id: int, amount: int) -> Optional[CartError]:
        """Set the line for product_id to exactly amount units."""
        async with self._lock:
            return await self._run("update_product_amount", product_id, self._update(product_id, amount))

    async def _run(self, operation: str, product_id: int, step) -> Optional[CartError]:
        extra = {"operation": operation, "product_id": product_id, "correlation_id": str(uuid4())}
        try:
            message = await step
        except CartError as e:
            logger.warning(f"{operation} failed: {e.kind}: {e.message}", extra=extra)
            self._notify(self.notifier.notify_failure, e.message)
            return e
        logger.info(message, extra=extra)
        self._notify(self.notifier.notify_success, message)
        return None

    async def _add(self, product_id: int) -> str:
        line = self._state.find(product_id)
        current_amount = line.amount if line else 0

        stock = await self.inventory.get_stock(product_id)
        requested = current_amount + 1
        if requested > stock.amount:
            raise OutOfStock(f"Requested quantity of product {product_id} is out of stock", product_id)

        product = line.product if line else await self._fetch_product(product_id)
        new_state = self._state.with_line(CartLineItem(product=product, amount=requested))

        await self._commit(product_id, stock, stock.amount - 1, new_state)
        return f"Added {product.title} to cart (amount={requested})"

    async def _fetch_product(self, product_id: int) -> ProductRecord:
        product = await self.catalog.get_product(product_id)
        if product.id != product_id:
            raise ProductNotFound(f"Catalog returned product {product.id} for product {product_id}", product_id)
        return product

    async def _remove(self, product_id: int) -> str:
        line = self._state.find(product_id)
        if line is None:
            raise ProductNotInCart(f"Product {product_id} is not in the cart", product_id)

        stock = await self.inventory.get_stock(product_id)
        await self._commit(product_id, stock, stock.amount + line.amount, self._state.without(product_id))
        return f"Removed {line.product.title} from cart"

    async def _update(self, product_id: int, amount: int) -> str:
        if amount < 1:
            raise InvalidAmount(f"Amount for product {product_id} must be at least 1, got {amount}", product_id)

        line = self._state.find(product_id)
        if line is None:
            raise ProductNotInCart(f"Product {product_id} is not in the cart", product_id)

        stock = await self.inventory.get_stock(product_id)
        if amount > stock.amount:
            raise OutOfStock(f"Requested quantity of product {product_id} is out of stock", product_id)

        delta = amount - line.amount
        new_state = self._state.with_line(CartLineItem(product=line.product, amount=amount))
        await self._commit(product_id, stock, stock.amount - delta, new_state)
        return f"Updated {line.product.title} amount to {amount}"

    async def _commit(self, product_id: int, stock: StockRecord, new_amount: int, new_state: CartState) -> None:
        """Write stock, then the cart snapshot, then swap the in-memory cart."""
        await self.inventory.put_stock(product_id, StockRecord(product_id=product_id, amount=new_amount))

        try:
            self.store.save(new_state)
        except CartNotPersisted as e:
            await self._restore_stock(product_id, stock.amount)
            e.product_id = product_id
            raise
        except Exception as e:
            logger.exception("Cart store raised an unexpected error", extra={"product_id": product_id})
            await self._restore_stock(product_id, stock.amount)
            raise CartNotPersisted("Cart could not be saved", product_id) from e

        self._state = new_state

    async def _restore_stock(self, product_id: int, amount: int) -> None:
        try:
            await self.inventory.put_stock(product_id, StockRecord(product_id=product_id, amount=amount))
        except CartError as e:
            logger.error(
                f"Could not restore stock of product {product_id} to {amount}: {e.message}",
                extra={"product_id": product_id},
            )
        else:
            logger.info(f"Restored stock of product {product_id} to {amount}", extra={"product_id": product_id})

    def _notify(self, send, message: str) -> None:
        try:
            send(message)
        except Exception:
            logger.exception("Notifier raised, outcome not delivered")
