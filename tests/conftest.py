from datetime import datetime, timedelta

import pytest

from contest_board.db import db_client
from contest_board.models.sql_models import Competition
from contest_board.sample_data import SAMPLE_COMPETITIONS
from contest_board.schemas.competitions import CompetitionInfo
from contest_board.services.competition_service import CompetitionService


class FakeCache:
    """与 RedisClient 接口一致的内存缓存"""

    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, ex=None):
        self.store[key] = value
        return True

    def incr(self, key):
        self.store[key] = str(int(self.store.get(key, "0")) + 1)
        return int(self.store[key])

    def delete(self, key):
        return self.store.pop(key, None) is not None


@pytest.fixture
def sample_records():
    return [
        CompetitionInfo(id=str(i), **item)
        for i, item in enumerate(SAMPLE_COMPETITIONS, start=1)
    ]


@pytest.fixture
def database(tmp_path):
    db_client.init(f"sqlite:///{tmp_path / 'test.db'}")
    yield db_client
    db_client.close()


@pytest.fixture
def cache():
    return FakeCache()


@pytest.fixture
def service(database, cache):
    return CompetitionService(db=database, cache=cache, cache_ttl=60)


@pytest.fixture
def seeded(database):
    """按示例顺序写入, created_at 依次递增（第一条最旧）"""
    base = datetime(2024, 1, 1, 9, 0)
    db = database.get_session()
    try:
        for i, item in enumerate(SAMPLE_COMPETITIONS):
            db.add(Competition(id=str(i + 1), created_at=base + timedelta(minutes=i), **item))
        db.commit()
    finally:
        db.close()
    return [item["title"] for item in SAMPLE_COMPETITIONS]
