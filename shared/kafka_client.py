"""
kafka_client.py - Kafka Producer Client Wrapper

PURPOSE:
    Provides a reusable Kafka producer with built-in error handling,
    serialization and delivery guarantees.

CLASSES:
    BaseKafkaProducer: Publishes events to Kafka topics
       - JSON serialization (Pydantic events or plain dicts)
       - Delivery acknowledgments
       - Retry logic (3 attempts)
       - Compression (snappy)

USAGE:
    producer = BaseKafkaProducer("localhost:9092", "cart-service")
    producer.publish("cart.notifications", event_object)
    producer.close()

ERROR HANDLING:
    - Automatic retries on transient failures (librdkafka "retries")
    - Logging of all delivery failures
    - publish() re-raises after logging so callers decide how to degrade
"""

import json  # For dict event serialization
import logging  # For error and info logging
from typing import Optional, Union  # Type hints

from confluent_kafka import Producer  # Kafka client library
from confluent_kafka.error import KafkaError  # Kafka error types

from shared.events import BaseEvent

logger = logging.getLogger(__name__)


class BaseKafkaProducer:
    """
    Base Kafka producer with JSON serialization and delivery callbacks.

    Features:
        - Automatic JSON serialization of events
        - Delivery acknowledgment from all replicas (acks=all)
        - 3 retry attempts on failure
        - Snappy compression for efficiency
    """

    def __init__(self, bootstrap_servers: str, client_id: str = "producer", flush_timeout: float = 5.0):
        """
        Initialize Kafka producer.

        Args:
            bootstrap_servers: Comma-separated Kafka broker addresses
            client_id: Unique identifier for this producer instance
            flush_timeout: Seconds to wait for delivery on each publish
        """
        self.config = {
            "bootstrap.servers": bootstrap_servers,  # Kafka broker addresses
            "client.id": client_id,  # Producer identifier
            "acks": "all",  # Wait for all replicas to acknowledge
            "retries": 3,  # Retry failed sends 3 times
            "compression.type": "snappy",  # Compress before sending
        }
        self.flush_timeout = flush_timeout
        self.producer = Producer(self.config)

    def _delivery_report(self, err: Optional[KafkaError], msg) -> None:
        """Delivery report handler called by producer on message delivery."""
        if err is not None:
            logger.error(f"Message delivery failed: {err}")
        else:
            logger.info(
                f"Message delivered to topic={msg.topic()}, "
                f"partition={msg.partition()}, offset={msg.offset()}"
            )

    def publish(self, topic: str, event: Union[BaseEvent, dict]) -> None:
        """Publish event to Kafka topic."""
        try:
            if isinstance(event, dict):
                message = json.dumps(event, default=str)
                event_type = event.get("event_type", "unknown")
                correlation_id = event.get("correlation_id", "unknown")
            else:
                message = event.model_dump_json()
                event_type = event.event_type
                correlation_id = event.correlation_id

            self.producer.produce(
                topic=topic,
                value=message.encode("utf-8"),
                callback=self._delivery_report,
            )
            self.producer.flush(self.flush_timeout)
            logger.info(
                f"Published event to {topic}",
                extra={"event_type": event_type, "correlation_id": correlation_id},
            )
        except Exception as e:
            logger.error(f"Error publishing event to {topic}: {e}")
            raise

    def flush(self) -> None:
        """Flush any pending messages."""
        self.producer.flush(self.flush_timeout)

    def close(self) -> None:
        """Deliver outstanding messages before shutdown."""
        remaining = self.producer.flush(self.flush_timeout)
        if remaining:
            logger.warning(f"{remaining} Kafka messages not delivered at shutdown")
