"""
In-memory Store used by ledger and API tests. Runs without a live Supabase
connection; only the query methods are replaced, locking is the real thing.
"""
import copy
import uuid

import pytest

from langlink.db import Store
from langlink.engine.languages import LANGUAGES
from langlink.errors import StoreFailure


class InMemoryStore(Store):
    def __init__(self):
        super().__init__("http://localhost", "test-key")
        self.rows: dict[str, dict] = {}
        self.updates: list[tuple[str, dict]] = []
        self.fail_on_update: int | None = None  # 1-based index of update call to fail

    def ping(self) -> None:
        return None

    def fetch_user(self, user_id, columns="*"):
        row = self.rows.get(user_id)
        return copy.deepcopy(row) if row else None

    def find_user_by_email(self, email):
        for row in self.rows.values():
            if row.get("email") == email:
                return {"user_id": row["user_id"]}
        return None

    def insert_user(self, row):
        self.rows[row["user_id"]] = dict(row)

    def update_user(self, user_id, updates):
        self.updates.append((user_id, dict(updates)))
        if self.fail_on_update == len(self.updates):
            raise StoreFailure("Store update failed")
        self.rows[user_id].update(updates)

    def top_by_experience(self, columns, limit):
        rows = sorted(self.rows.values(), key=lambda r: r.get("experience") or 0, reverse=True)
        return [copy.deepcopy(r) for r in rows[:limit]]


def make_user(store: InMemoryStore, **fields) -> str:
    user_id = fields.pop("user_id", None) or str(uuid.uuid4())
    row = {
        "user_id": user_id,
        "name": "Asha",
        "email": f"{user_id[:8]}@example.com",
        "learning_language": "Spanish",
        "score": 0,
        "experience": 0,
        "level": "Beginner",
        "streak": 0,
        "last_active_date": None,
        **{lang.progress_column: 0 for lang in LANGUAGES},
    }
    row.update(fields)
    store.insert_user(row)
    return user_id


@pytest.fixture
def store():
    return InMemoryStore()
