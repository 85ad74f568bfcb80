"""
cart_service/main.py - Stock-Reconciled Shopping Cart Service

PURPOSE:
    Exposes the cart engine over HTTP. The engine keeps one shopper's cart in
    memory, reserves units in the remote inventory for every unit in the cart,
    and writes the cart through to Redis after every change.

RESPONSIBILITIES:
    - Add one unit of a product to the cart
    - Remove a product line and give its units back to the inventory
    - Set a line's quantity within the available stock
    - Show the current cart with item count and subtotal
    - Publish an outcome notification for every operation

API ENDPOINTS:
    GET    /cart                         - View cart contents
    POST   /cart/items/{product_id}      - Add one unit of a product
    PUT    /cart/items/{product_id}      - Set a line's amount ({"amount": n})
    DELETE /cart/items/{product_id}      - Remove a product line
    GET    /health                       - Health check endpoint

ERROR STATUS CODES:
    400 invalid_amount, 404 product_not_in_cart / product_not_found,
    409 out_of_stock, 502 stock_unavailable / stock_update_failed,
    503 cart_not_persisted

UPSTREAM APIs:
    - Inventory: GET/PUT {API_BASE_URL}/stock/{product_id}
    - Catalog:   GET {API_BASE_URL}/products/{product_id}

KAFKA EVENTS PUBLISHED (only when KAFKA_BOOTSTRAP_SERVERS is set):
    - cart.notification on topic cart.notifications

DATA STORAGE:
    - Redis: Cart snapshot (key: CART_STORAGE_KEY, default "@RocketShoes:cart")

TESTING COMMANDS:
    1. Health Check:
        curl -X GET http://localhost:8001/health

    2. Add product 1 to the cart:
        curl -X POST http://localhost:8001/cart/items/1

    3. Set product 1 to 3 units:
        curl -X PUT http://localhost:8001/cart/items/1 \
          -H "Content-Type: application/json" \
          -d '{"amount": 3}'

    4. Remove product 1:
        curl -X DELETE http://localhost:8001/cart/items/1

    5. View cart:
        curl -X GET http://localhost:8001/cart
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import httpx  # Inventory and catalog HTTP client
import redis  # Cart snapshot storage
from fastapi import FastAPI, HTTPException, status  # Web framework
from pydantic_settings import BaseSettings  # Configuration management

from cart_service.cart_repository import CartRepository
from cart_service.clients import CatalogClient, InventoryClient
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
from cart_service.notifier import KafkaNotifier, LoggingNotifier
from cart_service.schemas import CartResponse, HealthResponse, UpdateAmountRequest
from shared.kafka_client import BaseKafkaProducer
from shared.logging_config import setup_logging
from shared.topic_initializer import create_topics


class Settings(BaseSettings):
    """Application settings."""

    api_base_url: str = os.getenv("API_BASE_URL", "http://localhost:3333")
    http_timeout_seconds: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "5"))
    redis_host: str = os.getenv("REDIS_HOST", "localhost")
    redis_port: int = int(os.getenv("REDIS_PORT", "6379"))
    cart_storage_key: str = os.getenv("CART_STORAGE_KEY", CartRepository.DEFAULT_KEY)
    cart_ttl_seconds: int = int(os.getenv("CART_TTL_SECONDS", "0"))
    kafka_bootstrap_servers: str = os.getenv("KAFKA_BOOTSTRAP_SERVERS", "")
    cart_service_port: int = int(os.getenv("CART_SERVICE_PORT", "8001"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()

setup_logging("cart-service", level=settings.log_level)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidAmount: status.HTTP_400_BAD_REQUEST,
    ProductNotInCart: status.HTTP_404_NOT_FOUND,
    ProductNotFound: status.HTTP_404_NOT_FOUND,
    OutOfStock: status.HTTP_409_CONFLICT,
    StockUnavailable: status.HTTP_502_BAD_GATEWAY,
    StockUpdateFailed: status.HTTP_502_BAD_GATEWAY,
    CartNotPersisted: status.HTTP_503_SERVICE_UNAVAILABLE,
}

# Global instances
engine: CartEngine = None


# Startup builds the collaborators and the engine; shutdown closes connections
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    global engine

    logger.info("Starting Cart Service...")

    try:
        redis_client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            decode_responses=True,
        )
        redis_client.ping()
        logger.info("Redis connected")
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        raise

    producer = None
    if settings.kafka_bootstrap_servers:
        try:
            create_topics(settings.kafka_bootstrap_servers)
            producer = BaseKafkaProducer(settings.kafka_bootstrap_servers, client_id="cart-producer")
            logger.info("Kafka producer initialized")
        except Exception as e:
            logger.error(f"Failed to initialize Kafka producer: {e}")
            raise
    notifier = KafkaNotifier(producer) if producer else LoggingNotifier()

    http = httpx.AsyncClient(base_url=settings.api_base_url, timeout=settings.http_timeout_seconds)
    engine = CartEngine(
        inventory=InventoryClient(http),
        catalog=CatalogClient(http),
        store=CartRepository(redis_client, key=settings.cart_storage_key, ttl=settings.cart_ttl_seconds),
        notifier=notifier,
    )

    yield  # Application is now ready to handle requests

    logger.info("Shutting down Cart Service...")
    await http.aclose()
    redis_client.close()
    if producer:
        producer.close()


app = FastAPI(title="Cart Service", version="1.0.0", lifespan=lifespan)


def _respond(error: Optional[CartError]) -> CartResponse:
    """Turn an engine outcome into the HTTP response."""
    if error is not None:
        raise HTTPException(
            status_code=ERROR_STATUS.get(type(error), status.HTTP_400_BAD_REQUEST),
            detail={"error": error.kind, "message": error.message},
        )
    return CartResponse.from_state(engine.cart)


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        service="cart-service",
        version="1.0.0",
    )


@app.get("/cart", response_model=CartResponse)
async def get_cart() -> CartResponse:
    """Get the current cart."""
    return CartResponse.from_state(engine.cart)


@app.post("/cart/items/{product_id}", response_model=CartResponse)
async def add_product(product_id: int) -> CartResponse:
    """Add one unit of a product."""
    return _respond(await engine.add_product(product_id))


@app.put("/cart/items/{product_id}", response_model=CartResponse)
async def update_product_amount(product_id: int, request: UpdateAmountRequest) -> CartResponse:
    """Set the amount of a product already in the cart."""
    return _respond(await engine.update_product_amount(product_id, request.amount))


@app.delete("/cart/items/{product_id}", response_model=CartResponse)
async def remove_product(product_id: int) -> CartResponse:
    """Remove a product line from the cart."""
    return _respond(await engine.remove_product(product_id))


# Uvicorn is the ASGI server that runs the FastAPI app
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.cart_service_port)
