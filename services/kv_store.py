# services/kv_store.py - key-value store with per-key expiry on top of SQLAlchemy
import logging
import time
from typing import Any, Callable, Optional, Sequence

from sqlalchemy import create_engine, delete, or_, select, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from models import Base, KVEntry
from services.errors import StoreError

logger = logging.getLogger(__name__)

Key = Sequence[str]


def _encode_key(key: Key) -> str:
    if isinstance(key, str):
        return key
    return ":".join(str(part) for part in key)


class KeyValueStore:
    """get / set / delete by composite key, each in its own transaction.

    Expiry is in seconds. Expired rows are invisible to reads and are removed
    lazily on read or by purge_expired().
    """

    def __init__(self, url: str, clock: Callable[[], float] = time.time):
        self.url = url
        self._clock = clock
        self._engine = None
        self._sessions = None

    # ------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------
    def connect(self) -> "KeyValueStore":
        if self._engine is not None:
            return self
        engine_opts: dict = {}
        if self.url.startswith("sqlite"):
            engine_opts["connect_args"] = {"check_same_thread": False}
            # In-memory SQLite is per-connection; share a single one
            if ":memory:" in self.url or self.url in ("sqlite://", "sqlite:///"):
                engine_opts["poolclass"] = StaticPool
        else:
            engine_opts["pool_pre_ping"] = True
        self._engine = create_engine(self.url, **engine_opts)
        Base.metadata.create_all(self._engine)
        self._sessions = sessionmaker(bind=self._engine, expire_on_commit=False)
        logger.info("kv store connected scheme=%s", self.url.split(":")[0])
        return self

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._sessions = None
        logger.info("kv store closed")

    @property
    def connected(self) -> bool:
        return self._engine is not None

    def _session(self):
        if self._sessions is None:
            raise StoreError()
        return self._sessions.begin()

    def _live(self, now):
        return or_(KVEntry.expires_at.is_(None), KVEntry.expires_at > now)

    # ------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------
    def get(self, key: Key) -> Optional[Any]:
        k = _encode_key(key)
        now = self._clock()
        with self._session() as s:
            entry = s.get(KVEntry, k)
            if entry is None:
                return None
            if entry.expires_at is not None and entry.expires_at <= now:
                s.delete(entry)
                return None
            return entry.value

    def set(self, key: Key, value: Any, expire_in: Optional[float] = None) -> None:
        k = _encode_key(key)
        expires_at = None
        if expire_in is not None and expire_in > 0:
            expires_at = self._clock() + expire_in
        with self._session() as s:
            entry = s.get(KVEntry, k)
            if entry is None:
                s.add(KVEntry(key=k, value=value, expires_at=expires_at))
            else:
                entry.value = value
                entry.expires_at = expires_at

    def delete(self, key: Key) -> bool:
        """Remove a live entry; True only for the caller that actually removed it."""
        k = _encode_key(key)
        now = self._clock()
        with self._session() as s:
            result = s.execute(delete(KVEntry).where(KVEntry.key == k, self._live(now)))
            removed = result.rowcount == 1
            # Drop an expired leftover, if any
            s.execute(delete(KVEntry).where(KVEntry.key == k))
        return removed

    def purge_expired(self) -> int:
        now = self._clock()
        with self._session() as s:
            result = s.execute(
                delete(KVEntry).where(KVEntry.expires_at.is_not(None), KVEntry.expires_at <= now)
            )
            count = result.rowcount or 0
        logger.info("purged %d expired entries", count)
        return count

    def clear(self) -> int:
        with self._session() as s:
            count = s.execute(delete(KVEntry)).rowcount or 0
        logger.info("cleared %d entries", count)
        return count

    def count(self, prefix: Optional[str] = None) -> int:
        now = self._clock()
        with self._session() as s:
            stmt = select(KVEntry.key).where(self._live(now))
            if prefix:
                stmt = stmt.where(KVEntry.key.startswith(prefix + ":"))
            return len(s.execute(stmt).all())

    def ping(self) -> bool:
        if self._engine is None:
            return False
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("kv store ping failed: %s", e)
            return False
