from typing import Any, Dict, Optional, Tuple
from roster.config import settings
import threading
import time


class DisplayCache:
    """Кэш табло по части с ограниченным временем жизни"""

    def __init__(self, ttl_seconds: int):
        self.ttl_seconds = ttl_seconds
        self._entries: Dict[int, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, station_id: int) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(station_id)
            if entry is None:
                return None
            stored_at, value = entry
            if time.monotonic() - stored_at > self.ttl_seconds:
                del self._entries[station_id]
                return None
            return value

    def set(self, station_id: int, value: Any) -> None:
        with self._lock:
            self._entries[station_id] = (time.monotonic(), value)

    def invalidate(self, station_id: int) -> None:
        with self._lock:
            self._entries.pop(station_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


display_cache = DisplayCache(settings.display_cache_ttl_seconds)
