import itertools

import pytest
from fastapi.testclient import TestClient

from inkwell.api.main import create_app
from inkwell.memory.cache import ExpiringCache


# ============================================================
# FAKES
# ============================================================

class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeLLM:
    """
    Scripted stand-in for NetLLMClient.
    `replies` items are returned in order (last one repeats);
    an Exception item is raised instead.
    """

    provider = "fake"

    def __init__(self, *replies):
        self.replies = list(replies) or [""]
        self.calls = []

    def complete(self, system, user, max_tokens, temperature=0.7):
        self.calls.append(
            {"system": system, "user": user, "max_tokens": max_tokens, "temperature": temperature}
        )
        idx = min(len(self.calls) - 1, len(self.replies) - 1)
        reply = self.replies[idx]
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakePostStore:
    def __init__(self):
        self.rows = {}
        self._ids = itertools.count(1)

    def init_schema(self):
        pass

    def ping(self):
        return True

    def list_posts(self):
        rows = sorted(self.rows.values(), key=lambda r: r["updated_at"], reverse=True)
        return [{k: v for k, v in r.items() if k != "content"} for r in rows]

    def get_post(self, post_id):
        return self.rows.get(post_id)

    def create_post(self, title="", content="", outline="", style="", tone=""):
        post_id = next(self._ids)
        row = {
            "id": post_id, "title": title, "content": content,
            "outline": outline, "style": style, "tone": tone,
            "created_at": post_id, "updated_at": post_id,
        }
        self.rows[post_id] = row
        return row

    def update_post(self, post_id, **fields):
        row = self.rows.get(post_id)
        if row is None:
            return None
        for k, v in fields.items():
            if v is not None:
                row[k] = v
        row["updated_at"] = row["updated_at"] + 100
        return row

    def delete_post(self, post_id):
        return self.rows.pop(post_id, None) is not None


class FakeRedis:
    def __init__(self):
        self.data = {}
        self.ttls = {}

    def setex(self, key, ttl, value):
        self.data[key] = value
        self.ttls[key] = ttl

    def get(self, key):
        return self.data.get(key)

    def delete(self, *keys):
        for k in keys:
            self.data.pop(k, None)

    def ping(self):
        return True


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ExpiringCache(clock=clock)


@pytest.fixture
def llm():
    return FakeLLM("next few words here.")


@pytest.fixture
def posts():
    return FakePostStore()


@pytest.fixture
def client(cache, llm, posts):
    return TestClient(create_app(cache=cache, llm=llm, posts=posts))


class BrokenRedis:
    """Redis client whose every call fails, as when the server is down."""

    def setex(self, *a):
        raise ConnectionError("down")

    def get(self, *a):
        raise ConnectionError("down")

    def delete(self, *a):
        raise ConnectionError("down")

    def ping(self):
        raise ConnectionError("down")
