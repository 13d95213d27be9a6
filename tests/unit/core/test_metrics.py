# tests/unit/core/test_metrics.py
from casetrack.core.metrics import Metrics, metrics


class TestMetrics:
    def test_empty_stats(self):
        assert Metrics().get_stats() == {
            "total_requests": 0,
            "error_count": 0,
            "error_rate": 0,
            "tenant_requests": None,
            "endpoints": {},
        }

    def test_tracks_requests_per_endpoint(self):
        stats = Metrics()
        stats.track_request("lawyers.list_lawyers", 0.2, 200)
        stats.track_request("lawyers.list_lawyers", 0.4, 200)
        stats.track_request("lawyers.get_lawyer", 0.1, 404)

        result = stats.get_stats()

        assert result["total_requests"] == 3
        assert result["error_count"] == 1
        assert round(result["error_rate"], 2) == 33.33
        assert result["endpoints"]["lawyers.list_lawyers"] == {
            "average_response_time": "0.300s",
            "max_response_time": "0.400s",
            "request_count": 2,
            "error_count": 0,
        }
        assert result["endpoints"]["lawyers.get_lawyer"]["error_count"] == 1

    def test_tenant_requests_only_for_the_asking_tenant(self):
        stats = Metrics()
        stats.track_request("roles.list_roles", 0.1, 200, tenant_id="t1")
        stats.track_request("roles.list_roles", 0.1, 200, tenant_id="t1")
        stats.track_request("roles.list_roles", 0.1, 200, tenant_id="t2")

        assert stats.get_stats("t1")["tenant_requests"] == 2
        assert stats.get_stats("t3")["tenant_requests"] == 0

    def test_reset(self):
        stats = Metrics()
        stats.track_request("x", 0.1, 500, tenant_id="t1")
        stats.reset()
        assert stats.get_stats("t1")["total_requests"] == 0
        assert stats.get_stats("t1")["tenant_requests"] == 0


def test_middleware_records_requests(app, client):
    client.get("/")

    stats = metrics.get_stats()
    assert stats["total_requests"] == 1
    assert stats["endpoints"]["root"]["request_count"] == 1
