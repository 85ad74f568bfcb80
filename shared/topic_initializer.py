"""
topic_initializer.py - Kafka Topic Auto-Creation Utility

PURPOSE:
    Creates the Kafka topics the cart service publishes to on startup.

TOPICS CREATED:
    - cart.notifications

CONFIGURATION:
    - Default partitions: 1 (notifications for one cart must stay ordered)
    - Default replication factor: 1
    - Idempotent: Safe to call multiple times

RETRY LOGIC:
    - Retries topic creation if Kafka brokers are not ready
    - Logs all creation attempts and failures
"""

import logging  # For status and error logging
import time  # For retry delays
from typing import List  # Type hints

from confluent_kafka.admin import AdminClient, NewTopic  # Kafka admin operations

from shared.events import ALL_TOPICS

logger = logging.getLogger(__name__)


def create_topics(
    bootstrap_servers: str,
    num_partitions: int = 1,
    replication_factor: int = 1,
    max_retries: int = 10,
    retry_delay: float = 3,
) -> None:
    """
    Create all Kafka topics with specified partitions and replication factor.

    Existing topics are ignored. Retries up to max_retries times if the
    brokers are not ready yet, then re-raises the last error.
    """
    admin_client = AdminClient({"bootstrap.servers": bootstrap_servers})

    topics_to_create: List[NewTopic] = [
        NewTopic(topic, num_partitions=num_partitions, replication_factor=replication_factor)
        for topic in ALL_TOPICS
    ]

    for attempt in range(max_retries):
        try:
            logger.info(f"Creating topics (attempt {attempt + 1}/{max_retries})...")

            fs = admin_client.create_topics(topics_to_create, validate_only=False)

            for topic, future in fs.items():
                try:
                    future.result(timeout=10)
                    logger.info(f"Topic '{topic}' created successfully")
                except Exception as e:
                    if "already exists" in str(e) or "TOPIC_ALREADY_EXISTS" in str(e):
                        logger.info(f"Topic '{topic}' already exists")
                    else:
                        logger.warning(f"Error creating topic '{topic}': {e}")

            logger.info("All topics processed successfully")
            break

        except Exception as e:
            if attempt < max_retries - 1:
                logger.warning(f"Failed to create topics (attempt {attempt + 1}): {e}. Retrying in {retry_delay}s...")
                time.sleep(retry_delay)
            else:
                logger.error(f"Failed to create topics after {max_retries} attempts: {e}")
                raise
