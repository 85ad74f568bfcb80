"""
HTTP adapters for the inventory and product catalog APIs.

Both clients share one httpx.AsyncClient created with the API base URL, so
paths are relative to it:

    GET products/{id}  -> {"id", "title", "price", "image"}
    GET stock/{id}     -> {"id", "amount"}
    PUT stock/{id}     <- {"id", "amount"}

Transport errors, non-2xx responses and malformed payloads are turned into
the cart error kinds the engine understands.
"""

import logging

import httpx
from pydantic import ValidationError

from cart_service.errors import ProductNotFound, StockUnavailable, StockUpdateFailed
from cart_service.models import ProductRecord, StockRecord

logger = logging.getLogger(__name__)


class InventoryClient:
    """Reads and writes stock counters over HTTP."""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def get_stock(self, product_id: int) -> StockRecord:
        try:
            response = await self.http.get(f"stock/{product_id}")
            response.raise_for_status()
            payload = response.json()
            # Some stock endpoints only return {"amount": n}
            if isinstance(payload, dict):
                payload.setdefault("id", product_id)
            return StockRecord.model_validate(payload)
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"Stock lookup for product {product_id} returned {e.response.status_code}",
                extra={"product_id": product_id},
            )
            raise StockUnavailable(f"Stock for product {product_id} is unavailable", product_id) from e
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.warning(f"Stock lookup for product {product_id} failed: {e}", extra={"product_id": product_id})
            raise StockUnavailable(f"Stock for product {product_id} is unavailable", product_id) from e

    async def put_stock(self, product_id: int, stock: StockRecord) -> None:
        try:
            response = await self.http.put(f"stock/{product_id}", json=stock.model_dump(by_alias=True))
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Stock update for product {product_id} failed: {e}", extra={"product_id": product_id})
            raise StockUpdateFailed(f"Could not update stock for product {product_id}", product_id) from e
        logger.debug(f"Stock for product {product_id} set to {stock.amount}", extra={"product_id": product_id})


class CatalogClient:
    """Fetches product metadata over HTTP."""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def get_product(self, product_id: int) -> ProductRecord:
        try:
            response = await self.http.get(f"products/{product_id}")
            response.raise_for_status()
            return ProductRecord.model_validate(response.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.warning(f"Product lookup for {product_id} failed: {e}", extra={"product_id": product_id})
            raise ProductNotFound(f"Product {product_id} was not found", product_id) from e
