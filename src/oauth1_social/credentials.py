import json
from logging import getLogger

from .kv import Cache, SessionStore
from .types import TemporaryCredentials

logger = getLogger(__name__)

SESSION_KEY = "oauth.temp"
CACHE_TTL = 60


class SessionCredentials:
    """Temporary credentials kept in the user's session."""

    def __init__(self, sessions: SessionStore, key: str = SESSION_KEY):
        self.sessions = sessions
        self.key = key

    def save(self, temp: TemporaryCredentials):
        logger.debug(f"storing temporary credentials {temp.identifier} in session")
        self.sessions.put(self.key, temp._asdict())

    def pop(self) -> TemporaryCredentials | None:
        stored = self.sessions.get(self.key)
        if stored is None:
            return None
        self.sessions.forget(self.key)

        try:
            return TemporaryCredentials(**stored)
        except TypeError as exception:
            logger.debug(f"unable to load {self.key}")
            logger.debug(exception)
            return None


class CacheCredentials:
    """Temporary credentials kept in a shared cache, keyed by a correlation id."""

    def __init__(self, cache: Cache, prefix: str, ttl: int = CACHE_TTL):
        self.cache = cache
        self.prefix = prefix
        self.ttl = ttl

    def key(self, temp_id: str) -> str:
        return f"{self.prefix}:{temp_id}"

    def save(self, temp_id: str, temp: TemporaryCredentials):
        key = self.key(temp_id)
        logger.debug(f"storing temporary credentials {temp.identifier} as {key}")
        self.cache.put(key, json.dumps(temp._asdict()), self.ttl)

    def pop(self, temp_id: str | None) -> TemporaryCredentials | None:
        if not temp_id:
            return None

        key = self.key(temp_id)
        stored = self.cache.get(key)
        if stored is None:
            return None
        self.cache.forget(key)

        try:
            return TemporaryCredentials(**json.loads(stored))
        except (TypeError, ValueError) as exception:
            logger.debug(f"unable to load {key}")
            logger.debug(exception)
            return None
