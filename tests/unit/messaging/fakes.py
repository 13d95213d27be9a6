# tests/unit/messaging/fakes.py
from types import SimpleNamespace


class FakeChannel:
    def __init__(self, fail_publish=False):
        self.is_open = True
        self.fail_publish = fail_publish
        self.published = []
        self.declared = []
        self.acks = []
        self.nacks = []
        self.consuming = False

    def exchange_declare(self, exchange, exchange_type, durable):
        self.declared.append(("exchange", exchange, exchange_type, durable))

    def queue_declare(self, queue, durable):
        self.declared.append(("queue", queue, durable))

    def queue_bind(self, queue, exchange, routing_key):
        self.declared.append(("bind", queue, exchange, routing_key))

    def basic_publish(self, exchange, routing_key, body, properties):
        if self.fail_publish:
            raise ConnectionError("broker went away")
        self.published.append(
            SimpleNamespace(exchange=exchange, routing_key=routing_key, body=body, properties=properties)
        )

    def basic_qos(self, prefetch_count):
        self.prefetch_count = prefetch_count

    def basic_consume(self, queue, on_message_callback, auto_ack):
        self.consumer = SimpleNamespace(queue=queue, callback=on_message_callback, auto_ack=auto_ack)

    def basic_ack(self, delivery_tag):
        self.acks.append(delivery_tag)

    def basic_nack(self, delivery_tag, requeue):
        self.nacks.append((delivery_tag, requeue))

    def start_consuming(self):
        self.consuming = True

    def stop_consuming(self):
        self.consuming = False

    def close(self):
        self.is_open = False


class FakeConnection:
    def __init__(self, channel):
        self.is_open = True
        self._channel = channel
        self.callbacks = []

    def channel(self):
        return self._channel

    def add_callback_threadsafe(self, callback):
        self.callbacks.append(callback)
        callback()

    def close(self):
        self.is_open = False


class FakeFactory:
    """Connection factory handing out a fresh fake connection per call"""

    def __init__(self, fail_publish=False, fail_connect=False, stale_connections=0):
        self.fail_publish = fail_publish
        self.fail_connect = fail_connect
        self.stale_connections = stale_connections
        self.connections = []

    def __call__(self):
        if self.fail_connect:
            raise ConnectionError("connection refused")
        stale = len(self.connections) < self.stale_connections
        connection = FakeConnection(FakeChannel(fail_publish=self.fail_publish or stale))
        self.connections.append(connection)
        return connection

    @property
    def channel(self):
        return self.connections[-1]._channel


def delivery(tag=1):
    return SimpleNamespace(delivery_tag=tag)
