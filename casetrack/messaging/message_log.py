# casetrack/messaging/message_log.py
from collections import Counter, deque
from datetime import datetime
from threading import Lock
from typing import Any, Dict, List, Optional
import time

from casetrack.core.constants import MESSAGE_LOG_CAPACITY


class MessageLog:
    """
    Recently consumed user events, newest first.

    Diagnostic only: bounded, in-process and lost on restart.
    """

    def __init__(self, capacity: int = MESSAGE_LOG_CAPACITY):
        self._lock = Lock()
        self._entries = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def record(self, event: Optional[str], data: Any, processed: bool = True) -> Dict[str, Any]:
        entry = {
            "id": int(time.time() * 1000),
            "timestamp": datetime.utcnow().isoformat(),
            "event": event,
            "data": data,
            "processed": processed,
        }
        with self._lock:
            self._entries.appendleft(entry)
        return entry

    def messages(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        with self._lock:
            entries = list(self._entries)
        return entries[:limit] if limit is not None else entries

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            entries = list(self._entries)
        return {
            "total": len(entries),
            "events": dict(Counter(entry["event"] for entry in entries)),
            "last_message": entries[0] if entries else None,
        }

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self):
        with self._lock:
            return len(self._entries)
