"""
Notifiers that surface cart operation outcomes.

LoggingNotifier only writes to the service log. KafkaNotifier also publishes a
CartNotificationEvent to the "cart.notifications" topic so a front end can
render it. Neither raises: a lost notification must not fail the operation
that produced it.
"""

import logging

from shared.events import NOTIFICATION_TOPIC, CartNotificationEvent
from shared.kafka_client import BaseKafkaProducer

logger = logging.getLogger(__name__)


class LoggingNotifier:
    def notify_success(self, message: str) -> None:
        logger.info(message)

    def notify_failure(self, message: str) -> None:
        logger.warning(message)


class KafkaNotifier(LoggingNotifier):
    """Publishes every outcome to Kafka in addition to logging it."""

    def __init__(self, producer: BaseKafkaProducer, topic: str = NOTIFICATION_TOPIC):
        self.producer = producer
        self.topic = topic

    def notify_success(self, message: str) -> None:
        super().notify_success(message)
        self._publish("success", message)

    def notify_failure(self, message: str) -> None:
        super().notify_failure(message)
        self._publish("failure", message)

    def _publish(self, level: str, message: str) -> None:
        try:
            self.producer.publish(self.topic, CartNotificationEvent(level=level, message=message))
        except Exception as e:
            logger.error(f"Dropped {level} notification {message!r}: {e}")
