"""
Shared fixtures: an in-memory stand-in for the async Redis client that
implements just the commands the record store issues.
"""

from collections import OrderedDict

import pytest
from pydantic import BaseModel
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import DataError

from nedis import NedisClient, NedisConfig, SchemaDefinition


class MemoryRedis:
    """Async, decode_responses=True flavoured Redis double."""

    def __init__(self):
        self.hashes: dict[str, dict[str, str]] = {}
        self.lists: dict[str, list[str]] = {}
        self.closed = False
        self.pings = 0

    @staticmethod
    def _encode(value):
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise DataError(f"Invalid input of type: '{type(value).__name__}'.")
        return str(value)

    async def ping(self):
        self.pings += 1
        return True

    async def aclose(self):
        self.closed = True

    async def exists(self, *keys):
        return sum(1 for k in keys if k in self.hashes or k in self.lists)

    async def hset(self, key, mapping=None):
        encoded = {f: self._encode(v) for f, v in (mapping or {}).items()}
        if not encoded:
            raise DataError("'hset' with no key value pairs")
        current = self.hashes.setdefault(key, OrderedDict())
        added = sum(1 for f in encoded if f not in current)
        current.update(encoded)
        return added

    async def hgetall(self, key):
        return dict(self.hashes.get(key, {}))

    async def delete(self, *keys):
        removed = 0
        for k in keys:
            removed += int(self.hashes.pop(k, None) is not None)
            removed += int(self.lists.pop(k, None) is not None)
        return removed

    async def rpush(self, key, *values):
        items = self.lists.setdefault(key, [])
        items.extend(values)
        return len(items)

    async def lrem(self, key, count, value):
        items = self.lists.get(key, [])
        removed = 0
        while value in items and (count == 0 or removed < count):
            items.remove(value)
            removed += 1
        if not items:
            self.lists.pop(key, None)
        return removed

    async def lrange(self, key, start, end):
        items = self.lists.get(key, [])
        stop = None if end == -1 else end + 1
        return list(items[start:stop])


class UnreachableRedis(MemoryRedis):
    async def ping(self):
        raise RedisConnectionError("Error 111 connecting to localhost:6379.")


class Dog(BaseModel):
    id: str
    name: str
    paws: int

    model_config = {"extra": "forbid"}


class User(BaseModel):
    id: str
    name: str
    age: int

    model_config = {"extra": "forbid"}


@pytest.fixture
def dog_schema():
    return SchemaDefinition(name="dogs", pk="id", validator=Dog)


@pytest.fixture
def user_schema():
    return SchemaDefinition(name="users", pk="id", validator=User)


@pytest.fixture
def memory_redis():
    return MemoryRedis()


@pytest.fixture
def client(memory_redis):
    return NedisClient(NedisConfig(), redis=memory_redis)


@pytest.fixture
def dogs_client(client, dog_schema):
    client.register_schema(dog_schema)
    return client


@pytest.fixture
def unreachable_client(dog_schema):
    client = NedisClient({"host": "nowhere", "port": 1234}, redis=UnreachableRedis())
    client.register_schema(dog_schema)
    return client
