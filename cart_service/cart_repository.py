"""
Cart Repository Module

This module provides Redis-based persistence for the cart snapshot.
It implements the repository pattern so the cart engine only sees
load() and save().

Key Features:
    - One Redis key holds the whole cart (default "@RocketShoes:cart")
    - Whole-value overwrite on every save (last writer wins)
    - Optional TTL; 0 keeps the cart until it is overwritten
    - JSON serialization through Pydantic, Decimal prices kept exact

Data Format (Redis):
    Key: "@RocketShoes:cart"
    Value: '[
        {"product": {"id": 1, "title": "Tenis", "price": "179.9", "image": "https://..."}, "amount": 2},
        {"product": {"id": 3, "title": "Tenis Adidas", "price": "219.9", "image": "https://..."}, "amount": 1}
    ]'

Example Usage:
    ```python
    redis_client = redis.Redis(host="localhost", port=6379, decode_responses=True)
    repo = CartRepository(redis_client)

    repo.save(cart)
    cart = repo.load()  # None when nothing was saved yet
    ```
"""

import logging
from typing import List, Optional

import redis
from pydantic import TypeAdapter, ValidationError

from cart_service.errors import CartNotPersisted
from cart_service.models import CartLineItem, CartState

logger = logging.getLogger(__name__)

_LINES = TypeAdapter(List[CartLineItem])


class CartRepository:
    """Repository for the persisted cart snapshot in Redis."""

    DEFAULT_KEY = "@RocketShoes:cart"

    def __init__(self, redis_client: redis.Redis, key: str = DEFAULT_KEY, ttl: int = 0):
        """Initialize cart repository. ttl is in seconds, 0 disables expiry."""
        self.redis = redis_client
        self.key = key
        self.ttl = ttl

    def load(self) -> Optional[CartState]:
        """Return the saved cart, or None if there is no usable snapshot."""
        try:
            cart_json = self.redis.get(self.key)
        except redis.RedisError as e:
            logger.warning(f"Could not read cart snapshot from {self.key}: {e}")
            return None

        if cart_json is None:
            return None

        try:
            return CartState(items=tuple(_LINES.validate_json(cart_json)))
        except ValidationError as e:
            logger.warning(f"Discarding unreadable cart snapshot in {self.key}: {e}")
            return None

    def save(self, cart: CartState) -> None:
        """Overwrite the snapshot with cart. Raises CartNotPersisted."""
        payload = _LINES.dump_json(list(cart.items))
        try:
            self.redis.set(self.key, payload, ex=self.ttl or None)
        except redis.RedisError as e:
            logger.error(f"Could not write cart snapshot to {self.key}: {e}")
            raise CartNotPersisted("Cart could not be saved") from e
        logger.info(f"Saved cart with {cart.distinct_count} lines to {self.key}")
