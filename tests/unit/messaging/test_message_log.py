# tests/unit/messaging/test_message_log.py
from casetrack.messaging import MessageLog


class TestMessageLog:
    def test_newest_first(self):
        log = MessageLog()
        log.record("usuario.creado", {"id": 1})
        log.record("usuario.actualizado", {"id": 1})

        assert [entry["event"] for entry in log.messages()] == [
            "usuario.actualizado",
            "usuario.creado",
        ]

    def test_capacity_drops_oldest(self):
        log = MessageLog(capacity=100)
        for i in range(150):
            log.record("usuario.creado", {"n": i})

        messages = log.messages()
        assert len(log) == 100
        assert messages[0]["data"] == {"n": 149}
        assert messages[-1]["data"] == {"n": 50}

    def test_limit(self):
        log = MessageLog()
        for i in range(5):
            log.record("usuario.creado", {"n": i})

        assert [entry["data"]["n"] for entry in log.messages(2)] == [4, 3]

    def test_stats_and_clear(self):
        log = MessageLog()
        assert log.stats() == {"total": 0, "events": {}, "last_message": None}

        log.record("usuario.creado", {})
        log.record("usuario.creado", {})
        log.record("usuario.eliminado", {})
        stats = log.stats()

        assert stats["total"] == 3
        assert stats["events"] == {"usuario.creado": 2, "usuario.eliminado": 1}
        assert stats["last_message"]["event"] == "usuario.eliminado"

        log.clear()
        assert len(log) == 0
