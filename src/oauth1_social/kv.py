import time
from abc import ABC, abstractmethod
from logging import Logger, getLogger
from threading import Lock
from typing import Any, Callable, override

from flask.sessions import SessionMixin


class SessionStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Any | None:
        pass

    @abstractmethod
    def put(self, key: str, value: Any):
        pass

    @abstractmethod
    def forget(self, key: str):
        pass


class Cache(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None:
        pass

    @abstractmethod
    def put(self, key: str, value: str, ttl: int):
        """Stores value under key for ttl seconds."""
        pass

    @abstractmethod
    def forget(self, key: str):
        pass


class FlaskSessionStore(SessionStore):
    session: SessionMixin

    def __init__(self, session: SessionMixin):
        self.session = session

    @override
    def get(self, key: str) -> Any | None:
        return self.session.get(key)

    @override
    def put(self, key: str, value: Any):
        self.session[key] = value

    @override
    def forget(self, key: str):
        _ = self.session.pop(key, None)


class MemoryCache(Cache):
    """Process local cache, entries expire after their ttl."""

    logger: Logger = getLogger(__name__)

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = Lock()
        self._clock = clock

    @override
    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at <= self._clock():
                self.logger.debug(f"expired {key}")
                del self._entries[key]
                return None
        self.logger.debug(f"returning cached {key}")
        return value

    @override
    def put(self, key: str, value: str, ttl: int):
        self.logger.debug(f"caching {key} for {ttl}s")
        with self._lock:
            now = self._clock()
            expired = [k for k, (_, expires_at) in self._entries.items() if expires_at <= now]
            for k in expired:
                del self._entries[k]
            self._entries[key] = (value, now + ttl)

    @override
    def forget(self, key: str):
        with self._lock:
            _ = self._entries.pop(key, None)


class _NoCache(Cache):
    logger: Logger = getLogger(__name__)

    @override
    def get(self, key: str) -> str | None:
        self.logger.debug(f"NoCache get({key})")
        return None

    @override
    def put(self, key: str, value: str, ttl: int):
        self.logger.debug(f"NoCache put({key}, ttl={ttl})")
        pass

    @override
    def forget(self, key: str):
        pass


nocache = _NoCache()
