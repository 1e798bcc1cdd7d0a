import sys
import time
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

backend_dir = Path(__file__).resolve().parents[1]
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from quizboard.db.session import Database
from quizboard.main import create_app


class _MemoryRedis:
    def __init__(self):
        self._data: dict[str, tuple[str, float | None]] = {}

    def ping(self):
        return True

    def _now(self) -> float:
        return time.time()

    def _get_entry(self, key: str):
        v = self._data.get(key)
        if not v:
            return None
        value, exp = v
        if exp is not None and exp <= self._now():
            self._data.pop(key, None)
            return None
        return value, exp

    def get(self, key: str):
        entry = self._get_entry(key)
        return entry[0] if entry else None

    def incr(self, key: str):
        cur = self.get(key)
        n = int(cur or 0) + 1
        _, exp = self._data.get(key, ("", None))
        self._data[key] = (str(n), exp)
        return n

    def expire(self, key: str, seconds: int, nx: bool = False):
        entry = self._get_entry(key)
        if not entry:
            return False
        value, exp = entry
        if nx and exp is not None:
            return False
        self._data[key] = (value, self._now() + int(seconds))
        return True

    def pipeline(self):
        return _MemoryPipeline(self)

    def ttl(self, key: str):
        entry = self._get_entry(key)
        if not entry:
            return -2
        _, exp = entry
        if exp is None:
            return -1
        return max(0, int(exp - self._now()))

    def clear(self):
        self._data.clear()


class _MemoryPipeline:
    def __init__(self, redis):
        self._redis = redis
        self._calls: list[tuple[str, tuple, dict]] = []

    def __getattr__(self, name: str):
        def _queue(*args, **kwargs):
            self._calls.append((name, args, kwargs))
            return self

        return _queue

    def execute(self):
        calls, self._calls = self._calls, []
        return [getattr(self._redis, name)(*args, **kwargs) for name, args, kwargs in calls]


def make_memory_database() -> Database:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database = Database(engine=engine)
    database.create_schema()
    return database


# Stub Redis at import time (rate limiting + readiness).
_mem_redis = _MemoryRedis()
import quizboard.core.redis_client as redis_client_module

redis_client_module.get_redis = lambda: _mem_redis

import quizboard.core.rate_limit as rate_limit_module

rate_limit_module.get_redis = lambda: _mem_redis

import quizboard.routers.health as health_router_module

health_router_module.get_redis = lambda: _mem_redis


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    _mem_redis.clear()
    yield


@pytest.fixture()
def mem_redis():
    return _mem_redis


@pytest.fixture()
def database():
    database = make_memory_database()
    yield database
    database.close()


@pytest.fixture()
def db(database):
    with database.session() as session:
        yield session


@pytest.fixture()
def client(database):
    app = create_app(database=database)
    with TestClient(app) as c:
        yield c


def make_question(text="2 + 2 = ?", options=None, correct_option=None) -> dict:
    options = options or ["3", "4", "5", "22"]
    return {
        "text": text,
        "options": options,
        "correct_option": correct_option if correct_option is not None else options[1],
    }


@pytest.fixture()
def question_factory():
    return make_question
