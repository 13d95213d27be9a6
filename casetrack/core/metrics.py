# casetrack/core/metrics.py
import logging
from collections import Counter
from threading import Lock
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class EndpointStats:
    __slots__ = ("durations", "errors")

    def __init__(self):
        self.durations: List[float] = []
        self.errors = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "average_response_time": f"{sum(self.durations) / len(self.durations):.3f}s",
            "max_response_time": f"{max(self.durations):.3f}s",
            "request_count": len(self.durations),
            "error_count": self.errors,
        }


class Metrics:
    """In-process request counters, reported by /api/metrics"""

    def __init__(self):
        self._lock = Lock()
        self.reset()

    def track_request(
        self, endpoint: str, duration: float, status_code: int, tenant_id: Optional[str] = None
    ):
        with self._lock:
            self.request_count += 1
            stats = self.endpoints.setdefault(endpoint, EndpointStats())
            stats.durations.append(duration)

            if status_code >= 400:
                self.error_count += 1
                stats.errors += 1
            if tenant_id:
                self.tenant_requests[tenant_id] += 1

    def get_stats(self, tenant_id: Optional[str] = None) -> Dict[str, Any]:
        """Global counters; ``tenant_requests`` is only reported for ``tenant_id``"""
        with self._lock:
            return {
                "total_requests": self.request_count,
                "error_count": self.error_count,
                "error_rate": (
                    (self.error_count / self.request_count * 100) if self.request_count > 0 else 0
                ),
                "tenant_requests": self.tenant_requests.get(tenant_id, 0) if tenant_id else None,
                "endpoints": {
                    endpoint: stats.to_dict()
                    for endpoint, stats in self.endpoints.items()
                    if stats.durations
                },
            }

    def reset(self):
        with self._lock:
            self.request_count = 0
            self.error_count = 0
            self.endpoints: Dict[str, EndpointStats] = {}
            self.tenant_requests = Counter()


metrics = Metrics()


def get_current_metrics(tenant_id: Optional[str] = None):
    return metrics.get_stats(tenant_id)
