"""
events.py - Kafka Event Schema Definitions

PURPOSE:
    Defines the event schemas the cart service publishes to Kafka.
    Uses Pydantic for data validation and serialization.

EVENT CATEGORIES:
    1. Cart Notification Events: Outcome of every cart operation
       - cart.notification (published to the "cart.notifications" topic)

COMMON FIELDS (BaseEvent):
    - event_id: Unique identifier (UUID)
    - event_type: Event category and action
    - timestamp: Timezone-aware timestamp of event creation
    - correlation_id: Tracing ID, generated per event unless the publisher sets one

USAGE:
    Creating an event:
        event = CartNotificationEvent(
            correlation_id="9a63a606-...",
            level="success",
            message="Product added to cart",
        )

    Serializing to JSON:
        json_data = event.model_dump_json()

    Deserializing from JSON:
        event = CartNotificationEvent.model_validate_json(json_string)
"""

from datetime import datetime  # For event timestamps with timezone
from zoneinfo import ZoneInfo  # For timezone support
from typing import Literal  # Type hints
from uuid import uuid4  # For unique event IDs

from pydantic import BaseModel, Field  # Data validation and serialization


class BaseEvent(BaseModel):
    """
    Base event model for all Kafka events.

    All events inherit from this class and include:
    - Unique event ID
    - Event type identifier
    - Los Angeles timezone-aware timestamp
    - Correlation ID
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))  # Auto-generated unique ID
    event_type: str  # Event category (e.g., "cart.notification")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(ZoneInfo("America/Los_Angeles")))
    correlation_id: str = Field(default_factory=lambda: str(uuid4()))


# ============================================================================
# CART NOTIFICATION EVENTS - Outcome of cart operations
# ============================================================================

class CartNotificationEvent(BaseEvent):
    """
    Event published for every cart operation outcome.
    Triggers: Cart Service notifier after add/remove/update
    Consumers: Whatever surfaces toasts/messages to the shopper
    """

    event_type: str = "cart.notification"
    level: Literal["success", "failure"]
    message: str  # Human-readable text


NOTIFICATION_TOPIC = "cart.notifications"

ALL_TOPICS = [
    NOTIFICATION_TOPIC,
]
