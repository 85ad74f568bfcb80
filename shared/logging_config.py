"""
logging_config.py - Centralized JSON Logging Configuration

PURPOSE:
    Provides structured JSON logging for the cart service with timezone-aware
    timestamps, correlation tracking and service-specific context injection.

KEY FEATURES:
    - JSON Format: Every log line is a single JSON object
    - Timezone Aware: Timestamps use Los Angeles timezone via ZoneInfo
    - Service Context: service_name is added to every record by a filter
    - Cart Context: Optional operation/product_id fields for cart diagnostics
    - Exception Handling: Full stack traces included in log entries

JSON LOG FIELDS:
    - timestamp: ISO 8601 format (e.g., "2026-02-23T22:48:51.001014-08:00")
    - level: Log level (INFO, ERROR, WARNING, DEBUG, CRITICAL)
    - logger: Module where the log originated (e.g., "cart_service.engine")
    - message: The actual log message
    - service_name: Name of the service (injected automatically)
    - correlation_id: Optional tracing ID
    - event_type: Optional Kafka event type being published
    - operation: Optional cart operation (add_product, remove_product, ...)
    - product_id: Optional product the operation targets
    - exception: Full stack trace (only when exc_info is set)

USAGE:
    from shared.logging_config import setup_logging
    setup_logging("cart-service", level="INFO")

    logger = logging.getLogger(__name__)
    logger.info("Product added", extra={"operation": "add_product", "product_id": 3})

EXAMPLE JSON OUTPUT:
    {
        "timestamp": "2026-02-23T22:48:51.001014-08:00",
        "level": "INFO",
        "logger": "cart_service.engine",
        "message": "Added product 3 to cart (amount=2)",
        "service_name": "cart-service",
        "operation": "add_product",
        "product_id": 3
    }
"""

import json
import logging
import sys
from datetime import datetime
from zoneinfo import ZoneInfo
from typing import Any, Dict

# Optional record attributes copied into the JSON payload when present
CONTEXT_FIELDS = ("correlation_id", "service_name", "event_type", "operation", "product_id")


class JsonFormatter(logging.Formatter):
    """Custom formatter that outputs JSON logs with correlation context."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(ZoneInfo("America/Los_Angeles")).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ServiceFilter(logging.Filter):
    """Adds the service name to every record passing through the handler."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = self.service_name
        return True


def setup_logging(service_name: str, level: str = "INFO") -> None:
    """Setup JSON logging for a service."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    # Filter on the handler so records from child loggers get the service name too
    handler.addFilter(ServiceFilter(service_name))

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.addHandler(handler)
