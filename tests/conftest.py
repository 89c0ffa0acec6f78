"""
Pytest configuration and shared fixtures.
"""
import fnmatch
from typing import Dict

import pytest
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError

from logrelay.domain.api.logs.dependencies import get_secret_provider
from logrelay.main import get_application
from logrelay.services.security.signature import StaticSecretProvider
from logrelay.settings.local import LocalAppSettings

TEST_SECRET = "s3cr3t"


class InMemoryRedis:
    """Async stand-in for the handful of hash commands the log store uses."""

    def __init__(self):
        self.hashes: Dict[str, Dict[str, str]] = {}
        self.fail = False

    def _check(self):
        if self.fail:
            raise RedisConnectionError("redis is down")

    async def ping(self):
        self._check()
        return True

    async def hset(self, key, mapping):
        self._check()
        stored = self.hashes.setdefault(key, {})
        added = len(set(mapping) - set(stored))
        stored.update({k: str(v) for k, v in mapping.items()})
        return added

    async def hgetall(self, key):
        self._check()
        return dict(self.hashes.get(key, {}))

    async def scan_iter(self, match=None, count=None):
        self._check()
        for key in list(self.hashes):
            if match is None or fnmatch.fnmatchcase(key, match):
                yield key

    async def aclose(self):
        return None


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")


@pytest.fixture
def fake_redis():
    return InMemoryRedis()


@pytest.fixture
def secret():
    return TEST_SECRET


@pytest.fixture
def app(fake_redis, secret):
    application = get_application(LocalAppSettings())
    application.state.redis = fake_redis
    application.dependency_overrides[get_secret_provider] = lambda: StaticSecretProvider(secret)
    return application


@pytest.fixture
def client(app):
    # Not entered as a context manager: the lifespan would dial a real Redis.
    return TestClient(app)
