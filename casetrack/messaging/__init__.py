# casetrack/messaging/__init__.py
import atexit
import logging

from casetrack.core.constants import USER_EVENTS_QUEUE
from .connection import BrokerConnection
from .consumer import UserEventConsumer
from .message_log import MessageLog
from .publisher import UserEventPublisher, build_event

logger = logging.getLogger(__name__)


class MessageBroker:
    """
    Flask extension owning the RabbitMQ publisher, consumer and message log.

    The publisher and the consumer each get their own ``BrokerConnection``;
    pika connections must not be shared between threads.
    """

    def __init__(self, app=None, connection_factory=None):
        self.connection_factory = connection_factory
        self.enabled = False
        self.url = None
        self.exchange = None
        self.publisher = None
        self.consumer = None
        self.message_log = MessageLog()
        self._shutdown_registered = False
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.enabled = app.config.get("RABBITMQ_ENABLED", False)
        self.url = app.config.get("RABBITMQ_URL")
        self.exchange = app.config.get("EXCHANGE_NAME")
        self.message_log = MessageLog()
        self.publisher = UserEventPublisher(self.new_connection(), enabled=self.enabled)
        self.consumer = None

        app.extensions["message_broker"] = self
        if not self._shutdown_registered:
            atexit.register(self.shutdown)
            self._shutdown_registered = True
        if not self.enabled:
            logger.info("RabbitMQ messaging disabled")

    def new_connection(self) -> BrokerConnection:
        return BrokerConnection(
            self.url, self.exchange, connection_factory=self.connection_factory
        )

    # Publishing

    def publish_user_created(self, user) -> bool:
        return self.publisher.publish_user_created(user.to_event_data())

    def publish_user_updated(self, user) -> bool:
        return self.publisher.publish_user_updated(user.to_event_data())

    def publish_user_deleted(self, user_id, tenant_id=None) -> bool:
        return self.publisher.publish_user_deleted(user_id, tenant_id)

    # Consuming

    def create_consumer(self) -> UserEventConsumer:
        return UserEventConsumer(self.new_connection(), self.message_log)

    def start_consumer(self):
        """Run the user event consumer on a daemon thread"""
        if not self.enabled:
            logger.info("RabbitMQ disabled, consumer not started")
            return None
        if self.consumer is None:
            self.consumer = self.create_consumer()
        return self.consumer.start_in_background()

    @property
    def consumer_running(self) -> bool:
        return self.consumer is not None and self.consumer.running

    def status(self):
        return {
            "enabled": self.enabled,
            "connected": self.publisher.connection.is_open if self.publisher else False,
            "consumer": "running" if self.consumer_running else "stopped",
            "queue": USER_EVENTS_QUEUE,
            "exchange": self.exchange,
        }

    def ping(self):
        """Open (or reuse) the publisher connection; returns (healthy, message)"""
        if not self.enabled:
            return True, "Disabled"
        try:
            self.publisher.ping()
        except Exception as e:
            return False, str(e)
        return True, "Healthy"

    def shutdown(self):
        if self.consumer is not None:
            self.consumer.stop()
        if self.publisher is not None:
            self.publisher.close()


__all__ = [
    "BrokerConnection",
    "MessageBroker",
    "MessageLog",
    "UserEventConsumer",
    "UserEventPublisher",
    "build_event",
]
