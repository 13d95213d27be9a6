# tests/unit/messaging/test_connection.py
from casetrack.messaging import BrokerConnection
from tests.unit.messaging.fakes import FakeFactory


def make_connection(factory):
    return BrokerConnection("amqp://test", "casetrack.events", connection_factory=factory)


class TestBrokerConnection:
    def test_open_declares_topology(self):
        factory = FakeFactory()
        connection = make_connection(factory)

        channel = connection.open()

        assert connection.is_open
        assert channel.declared == [
            ("exchange", "casetrack.events", "topic", True),
            ("queue", "usuarios_queue", True),
            ("bind", "usuarios_queue", "casetrack.events", "usuario.*"),
        ]

    def test_channel_reuses_open_connection(self):
        factory = FakeFactory()
        connection = make_connection(factory)

        first = connection.channel()
        second = connection.channel()

        assert first is second
        assert len(factory.connections) == 1

    def test_channel_reconnects_after_failure(self):
        factory = FakeFactory()
        connection = make_connection(factory)
        connection.channel().is_open = False

        connection.channel()

        assert len(factory.connections) == 2
        assert factory.connections[0].is_open is False

    def test_close_releases_everything(self):
        factory = FakeFactory()
        connection = make_connection(factory)
        channel = connection.open()

        connection.close()

        assert not connection.is_open
        assert channel.is_open is False
        assert connection.connection is None
