# casetrack/messaging/consumer.py
"""
Consumer for user lifecycle events.

Reads ``usuarios_queue`` with manual acknowledgement. A message that cannot
be processed is rejected without requeue, i.e. dropped; there is no
dead-letter queue behind it.
"""
import json
import logging
import threading
from typing import Any, Callable, Dict, Optional

from casetrack.core.constants import UserEvent
from .connection import BrokerConnection
from .message_log import MessageLog

logger = logging.getLogger(__name__)


class UserEventConsumer:
    def __init__(self, connection: BrokerConnection, message_log: MessageLog, prefetch_count: int = 10):
        self.connection = connection
        self.message_log = message_log
        self.prefetch_count = prefetch_count
        self.running = False
        self._thread: Optional[threading.Thread] = None
        self._handlers: Dict[str, Callable[[Dict[str, Any]], None]] = {
            UserEvent.CREATED.value: self.on_user_created,
            UserEvent.UPDATED.value: self.on_user_updated,
            UserEvent.DELETED.value: self.on_user_deleted,
        }

    # Event handlers

    def on_user_created(self, data):
        logger.info(f"User created: {data.get('username')} ({data.get('email')})")

    def on_user_updated(self, data):
        logger.info(f"User updated: {data.get('username') or data.get('id')}")

    def on_user_deleted(self, data):
        logger.info(f"User deleted: {data.get('id')}")

    # Delivery

    def process(self, body) -> Dict[str, Any]:
        """Decode one message body, log it and dispatch it by event name"""
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        event = json.loads(body)
        if not isinstance(event, dict):
            raise ValueError("Message body must be a JSON object")

        name = event.get("event")
        data = event.get("data") or {}
        self.message_log.record(name, data)

        handler = self._handlers.get(name)
        if handler is None:
            logger.info(f"Unknown event: {name}")
        else:
            handler(data)
        return event

    def on_message(self, channel, method, properties, body):
        try:
            self.process(body)
        except Exception as e:
            logger.error(f"Error processing message {method.delivery_tag}: {e}", exc_info=True)
            channel.basic_nack(delivery_tag=method.delivery_tag, requeue=False)
            return
        channel.basic_ack(delivery_tag=method.delivery_tag)

    def start(self):
        """Consume until ``stop()`` is called; blocks the calling thread"""
        channel = self.connection.open()
        channel.basic_qos(prefetch_count=self.prefetch_count)
        channel.basic_consume(
            queue=self.connection.queue,
            on_message_callback=self.on_message,
            auto_ack=False,
        )
        self.running = True
        logger.info(f"Waiting for messages on {self.connection.queue}")

        try:
            channel.start_consuming()
        finally:
            self.running = False
            self.connection.close()
            logger.info("User event consumer stopped")

    def start_in_background(self) -> threading.Thread:
        if self._thread is not None and self._thread.is_alive():
            return self._thread

        def run():
            try:
                self.start()
            except Exception as e:
                logger.error(f"User event consumer failed: {e}", exc_info=True)

        self._thread = threading.Thread(target=run, name="user-event-consumer", daemon=True)
        self._thread.start()
        return self._thread

    def stop(self):
        """Ask the consuming thread to stop; safe from any thread"""
        connection = self.connection.connection
        channel = self.connection.current_channel
        if connection is None or channel is None or not self.running:
            return
        connection.add_callback_threadsafe(channel.stop_consuming)
