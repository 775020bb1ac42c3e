"""Session Cache - in-process TTL store for uploaded candidate pools."""
import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from etl.candidates.models import DetectedSchema, NormalizedCandidate

logger = logging.getLogger(__name__)

CACHE_TTL_MINUTES = 60
SWEEP_INTERVAL_SECONDS = 600


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_session_id() -> str:
    return f"session_{uuid.uuid4().hex}"


@dataclass
class SessionData:
    """One uploaded file's normalized pool. The store owns it; runs only read it."""
    session_id: str
    candidates: List[NormalizedCandidate]
    schema: DetectedSchema
    file_hash: str
    uploaded_at: datetime = field(default_factory=_utcnow)
    expires_at: Optional[datetime] = None

    def summary(self) -> Dict[str, Any]:
        return {
            'session_id': self.session_id,
            'candidate_count': len(self.candidates),
            'file_hash': self.file_hash,
            'uploaded_at': self.uploaded_at.isoformat(),
            'expires_at': self.expires_at.isoformat() if self.expires_at else None,
            'detected_fields': self.schema.to_dict(),
        }


class SessionStore:
    """
    Key-value store with per-entry expiry.

    Expired entries are evicted lazily on ``get`` and in bulk by
    ``clear_expired``, which the optional sweeper thread calls periodically.
    """

    def __init__(
        self,
        ttl_minutes: int = CACHE_TTL_MINUTES,
        sweep_interval_seconds: float = SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.ttl_minutes = ttl_minutes
        self.sweep_interval_seconds = sweep_interval_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, datetime]] = {}
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._sweeper: Optional[threading.Thread] = None

    def set(self, key: str, value: Any, ttl_minutes: Optional[int] = None) -> datetime:
        """Store a value and return its expiry time."""
        expires_at = self._clock() + timedelta(minutes=ttl_minutes or self.ttl_minutes)
        if isinstance(value, SessionData):
            value.expires_at = expires_at
        with self._lock:
            self._entries[key] = (value, expires_at)
        logger.debug(f"Cached {key} until {expires_at.isoformat()}")
        return expires_at

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                logger.debug(f"Evicted expired entry {key}")
                return None
            return value

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear_expired(self) -> int:
        """Remove every expired entry and return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.info(f"Cleared {len(expired)} expired session(s)")
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def start_sweeper(self) -> None:
        if self._sweeper and self._sweeper.is_alive():
            return
        self._stop_event.clear()
        self._sweeper = threading.Thread(target=self._sweep_loop, name="session-sweeper", daemon=True)
        self._sweeper.start()
        logger.info(f"Session sweeper started (every {self.sweep_interval_seconds}s)")

    def stop_sweeper(self, timeout: float = 5.0) -> None:
        self._stop_event.set()
        if self._sweeper:
            self._sweeper.join(timeout=timeout)
            self._sweeper = None

    def _sweep_loop(self) -> None:
        while not self._stop_event.wait(self.sweep_interval_seconds):
            try:
                self.clear_expired()
            except Exception as e:
                logger.error(f"Session sweep failed: {e}")
