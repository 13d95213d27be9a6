# casetrack/messaging/connection.py
import logging
from typing import Callable, Optional

import pika

from casetrack.core.constants import USER_EVENTS_BINDING, USER_EVENTS_QUEUE

logger = logging.getLogger(__name__)


class BrokerConnection:
    """
    One AMQP connection plus channel with an explicit lifecycle.

    ``open()`` connects and declares the topology (durable topic exchange,
    durable user-events queue and its ``usuario.*`` binding); ``channel()``
    hands out the live channel, reconnecting if the previous one died;
    ``close()`` releases both. Not thread-safe: give each thread its own.
    """

    def __init__(
        self,
        url: str,
        exchange: str,
        queue: str = USER_EVENTS_QUEUE,
        binding_key: str = USER_EVENTS_BINDING,
        connection_factory: Optional[Callable] = None,
    ):
        self.url = url
        self.exchange = exchange
        self.queue = queue
        self.binding_key = binding_key
        self._connection_factory = connection_factory or self._blocking_connection
        self._connection = None
        self._channel = None

    def _blocking_connection(self):
        return pika.BlockingConnection(pika.URLParameters(self.url))

    @property
    def is_open(self) -> bool:
        return (
            self._connection is not None
            and self._connection.is_open
            and self._channel is not None
            and self._channel.is_open
        )

    @property
    def connection(self):
        return self._connection

    @property
    def current_channel(self):
        return self._channel

    def open(self):
        if self.is_open:
            return self._channel

        self.close()
        self._connection = self._connection_factory()
        self._channel = self._connection.channel()
        self.declare_topology(self._channel)
        logger.info(f"Connected to RabbitMQ exchange {self.exchange}")
        return self._channel

    def declare_topology(self, channel):
        channel.exchange_declare(exchange=self.exchange, exchange_type="topic", durable=True)
        channel.queue_declare(queue=self.queue, durable=True)
        channel.queue_bind(queue=self.queue, exchange=self.exchange, routing_key=self.binding_key)

    def channel(self):
        """Live channel, reconnecting when needed"""
        return self.open()

    def close(self):
        channel, connection = self._channel, self._connection
        self._channel = None
        self._connection = None

        try:
            if channel is not None and channel.is_open:
                channel.close()
            if connection is not None and connection.is_open:
                connection.close()
        except pika.exceptions.AMQPError as e:
            logger.warning(f"Error closing RabbitMQ connection: {e}")
