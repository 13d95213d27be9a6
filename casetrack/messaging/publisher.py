# casetrack/messaging/publisher.py
import json
import logging
import time
from datetime import datetime
from threading import Lock
from typing import Any, Dict

import pika

from casetrack.core.constants import UserEvent
from .connection import BrokerConnection

logger = logging.getLogger(__name__)

PUBLISH_ATTEMPTS = 2


def build_event(event: UserEvent, data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "event": event.value,
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "data": data,
    }


class UserEventPublisher:
    """
    Fire-and-forget publisher for user lifecycle events.

    ``publish`` never raises: a broker failure is logged and reported as
    ``False`` so the HTTP request that triggered it still succeeds.
    """

    def __init__(self, connection: BrokerConnection, enabled: bool = True):
        self.connection = connection
        self.enabled = enabled
        self._lock = Lock()

    def publish(self, routing_key: str, message: Dict[str, Any]) -> bool:
        if not self.enabled:
            logger.debug(f"Messaging disabled, dropping {routing_key}")
            return False

        body = json.dumps(message, default=str)
        properties = pika.BasicProperties(
            content_type="application/json",
            delivery_mode=2,
            timestamp=int(time.time()),
        )

        with self._lock:
            # A connection dropped while idle still reports open
            for attempt in range(1, PUBLISH_ATTEMPTS + 1):
                try:
                    channel = self.connection.channel()
                    channel.basic_publish(
                        exchange=self.connection.exchange,
                        routing_key=routing_key,
                        body=body,
                        properties=properties,
                    )
                    break
                except Exception as e:
                    self.connection.close()
                    if attempt == PUBLISH_ATTEMPTS:
                        logger.error(f"Error publishing {routing_key}: {e}")
                        return False
                    logger.warning(f"Publishing {routing_key} failed, reconnecting: {e}")

        logger.info(f"Published {routing_key}")
        return True

    def publish_user_created(self, user_data: Dict[str, Any]) -> bool:
        return self.publish(UserEvent.CREATED.value, build_event(UserEvent.CREATED, user_data))

    def publish_user_updated(self, user_data: Dict[str, Any]) -> bool:
        return self.publish(UserEvent.UPDATED.value, build_event(UserEvent.UPDATED, user_data))

    def publish_user_deleted(self, user_id: str, tenant_id: str = None) -> bool:
        data = {"id": user_id}
        if tenant_id:
            data["tenant_id"] = tenant_id
        return self.publish(UserEvent.DELETED.value, build_event(UserEvent.DELETED, data))

    def ping(self):
        """Make sure the connection is up; raises on failure"""
        with self._lock:
            self.connection.open()

    def close(self):
        with self._lock:
            self.connection.close()
