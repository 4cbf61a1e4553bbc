import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from supabase import create_client, Client

from .config import Settings
from .errors import StoreFailure

logger = logging.getLogger(__name__)


class Store:
    """
    Handle on the users table.

    The Supabase client is created on first use. Any failed call drops the
    client so the next call reconnects; the failed call itself is not retried.
    Read-modify-write sequences must run inside record_lock(user_id).
    """

    def __init__(self, url: str, key: str, table: str = "users"):
        self.url = url
        self.key = key
        self.table = table
        self._client: Client | None = None
        self._client_lock = threading.Lock()
        self._record_locks: dict[str, list] = {}
        self._record_locks_guard = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "Store":
        return cls(settings.supabase_url, settings.supabase_key, settings.users_table)

    # ── Connection lifecycle ──────────────────────────────────────────────────

    @property
    def client(self) -> Client:
        with self._client_lock:
            if self._client is None:
                if not self.url or not self.key:
                    raise StoreFailure("Store is not configured (SUPABASE_URL / SUPABASE_SERVICE_KEY)")
                try:
                    self._client = create_client(self.url, self.key)
                except Exception as e:
                    logger.error("Store connection failed: %s", e)
                    raise StoreFailure("Store unavailable") from e
                logger.info("Store connected: %s", self.url)
            return self._client

    def reset(self) -> None:
        with self._client_lock:
            self._client = None

    def close(self) -> None:
        self.reset()
        logger.info("Store closed")

    def _run(self, action: str, build: Callable[[Client], Any]) -> Any:
        client = self.client
        try:
            return build(client).execute()
        except Exception as e:
            logger.error("Store %s failed: %s", action, e)
            self.reset()
            raise StoreFailure(f"Store {action} failed") from e

    # ── Per-record serialization ──────────────────────────────────────────────

    @contextmanager
    def record_lock(self, user_id: str) -> Iterator[None]:
        with self._record_locks_guard:
            entry = self._record_locks.setdefault(user_id, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._record_locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._record_locks[user_id]

    # ── Queries ───────────────────────────────────────────────────────────────

    def ping(self) -> None:
        self._run("ping", lambda db: db.table(self.table).select("user_id").limit(1))

    def fetch_user(self, user_id: str, columns: str = "*") -> dict | None:
        res = self._run("read", lambda db: db.table(self.table).select(columns).eq("user_id", user_id))
        return res.data[0] if res.data else None

    def find_user_by_email(self, email: str) -> dict | None:
        res = self._run("read", lambda db: db.table(self.table).select("user_id").eq("email", email))
        return res.data[0] if res.data else None

    def insert_user(self, row: dict) -> None:
        self._run("insert", lambda db: db.table(self.table).insert(row))

    def update_user(self, user_id: str, updates: dict) -> None:
        self._run("update", lambda db: db.table(self.table).update(updates).eq("user_id", user_id))

    def top_by_experience(self, columns: str, limit: int) -> list[dict]:
        res = self._run(
            "leaderboard",
            lambda db: db.table(self.table).select(columns).order("experience", desc=True).limit(limit),
        )
        return res.data or []
