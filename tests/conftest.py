"""Pytest configuration and fixtures"""
import asyncio
from decimal import Decimal
from typing import Dict, List, Optional
from unittest.mock import Mock

import pytest

from cart_service.cart_repository import CartRepository
from cart_service.engine import CartEngine
from cart_service.errors import CartNotPersisted, ProductNotFound, StockUnavailable, StockUpdateFailed
from cart_service.models import CartLineItem, CartState, ProductRecord, StockRecord


class FakeInventory:
    """In-memory stock counters. Yields to the event loop on every call."""

    def __init__(self, stock: Dict[int, int]):
        self.stock = dict(stock)
        self.initial = dict(stock)
        self.fail_get = set()
        self.fail_put = set()
        # Errors (or None for success) consumed by upcoming put_stock calls
        self.put_outcomes: List[Optional[Exception]] = []
        self.gets: List[int] = []
        self.puts: List[tuple] = []

    async def get_stock(self, product_id: int) -> StockRecord:
        await asyncio.sleep(0)
        self.gets.append(product_id)
        if product_id in self.fail_get or product_id not in self.stock:
            raise StockUnavailable(f"Stock for product {product_id} is unavailable", product_id)
        return StockRecord(product_id=product_id, amount=self.stock[product_id])

    async def put_stock(self, product_id: int, stock: StockRecord) -> None:
        await asyncio.sleep(0)
        self.puts.append((product_id, stock.amount))
        outcome = self.put_outcomes.pop(0) if self.put_outcomes else None
        if outcome is not None:
            raise outcome
        if product_id in self.fail_put:
            raise StockUpdateFailed(f"Could not update stock for product {product_id}", product_id)
        self.stock[product_id] = stock.amount


class FakeCatalog:
    def __init__(self, products: Dict[int, ProductRecord]):
        self.products = products
        self.lookups: List[int] = []

    async def get_product(self, product_id: int) -> ProductRecord:
        await asyncio.sleep(0)
        self.lookups.append(product_id)
        if product_id not in self.products:
            raise ProductNotFound(f"Product {product_id} was not found", product_id)
        return self.products[product_id]


class MemoryCartStore:
    def __init__(self, saved: Optional[CartState] = None):
        self.saved = saved
        self.fail_save = False
        self.saves: List[CartState] = []

    def load(self) -> Optional[CartState]:
        return self.saved

    def save(self, cart: CartState) -> None:
        if self.fail_save:
            raise CartNotPersisted("Cart could not be saved")
        self.saves.append(cart)
        self.saved = cart


class RecordingNotifier:
    def __init__(self):
        self.successes: List[str] = []
        self.failures: List[str] = []

    def notify_success(self, message: str) -> None:
        self.successes.append(message)

    def notify_failure(self, message: str) -> None:
        self.failures.append(message)

    @property
    def total(self) -> int:
        return len(self.successes) + len(self.failures)


@pytest.fixture
def products():
    """Sample catalog"""
    return {
        1: ProductRecord(
            id=1,
            title="Tênis de Caminhada Leve Confortável",
            price=Decimal("179.9"),
            image="https://rocketseat-cdn.s3-sa-east-1.amazonaws.com/modulo-redux/tenis1.jpg",
        ),
        2: ProductRecord(
            id=2,
            title="Tênis VR Caminhada Confortável Detalhes Couro Masculino",
            price=Decimal("139.9"),
            image="https://rocketseat-cdn.s3-sa-east-1.amazonaws.com/modulo-redux/tenis2.jpg",
        ),
        3: ProductRecord(
            id=3,
            title="Tênis Adidas Duramo Lite 2.0",
            price=Decimal("219.9"),
            image="https://rocketseat-cdn.s3-sa-east-1.amazonaws.com/modulo-redux/tenis3.jpg",
        ),
    }


@pytest.fixture
def inventory():
    return FakeInventory({1: 3, 2: 5, 3: 2})


@pytest.fixture
def catalog(products):
    return FakeCatalog(products)


@pytest.fixture
def store():
    return MemoryCartStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def engine(inventory, catalog, store, notifier):
    return CartEngine(inventory=inventory, catalog=catalog, store=store, notifier=notifier)


@pytest.fixture
def make_engine(inventory, catalog, notifier):
    """Build an engine whose store already holds the given lines."""

    def _make(lines=(), stock=None):
        if stock is not None:
            inventory.stock = dict(stock)
            inventory.initial = dict(stock)
        store = MemoryCartStore(CartState(items=tuple(lines)) if lines else None)
        return CartEngine(inventory=inventory, catalog=catalog, store=store, notifier=notifier)

    return _make


@pytest.fixture
def line(products):
    def _line(product_id: int, amount: int) -> CartLineItem:
        return CartLineItem(product=products[product_id], amount=amount)

    return _line


@pytest.fixture
def mock_redis():
    """Mock Redis client backed by a dict"""
    data = {}
    client = Mock()
    client.data = data
    client.get.side_effect = lambda key: data.get(key)

    def _set(key, value, ex=None):
        data[key] = value.decode("utf-8") if isinstance(value, bytes) else value
        return True

    client.set.side_effect = _set
    return client


@pytest.fixture
def repository(mock_redis):
    return CartRepository(mock_redis)
