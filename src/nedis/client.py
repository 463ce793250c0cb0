"""
nedis.client  ──  One object that owns a schema registry and a record store.

Usage pattern in user code
--------------------------
    import nedis

    client = nedis.create_client(host="localhost")
    client.register_schema(nedis.SchemaDefinition(name="dogs", pk="id", validator=Dog))
    await client.insert("dogs", {"id": "1", "name": "ralph", "paws": "4"})
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping

import redis.asyncio as aioredis

from .config import NedisConfig
from .core.registry import SchemaRegistry
from .core.schema import SchemaDefinition, validate_data
from .persistence.store import Record, RecordStore


class NedisClient:
    """Facade over :class:`SchemaRegistry` + :class:`RecordStore`.

    Each client has its own registry, so two clients never see each other's
    schemas even when they point at the same Redis database.
    """

    def __init__(
        self,
        config: NedisConfig | Mapping[str, Any] | None = None,
        redis: aioredis.Redis | None = None,
    ):
        self.config = NedisConfig.coerce(config)
        self.registry = SchemaRegistry()
        self.store = RecordStore(self.registry, self.config, redis=redis)

    async def __aenter__(self) -> "NedisClient":
        await self.store.ensure_connected()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # ---------- schemas ----------
    def register_schema(self, definition: SchemaDefinition) -> None:
        self.registry.register(definition)

    def register_schemas(self, definitions: Iterable[SchemaDefinition]) -> None:
        self.registry.register_many(definitions)

    def get_registered_schemas(self) -> List[SchemaDefinition]:
        return self.registry.list()

    def validate_schema(self, table: str) -> SchemaDefinition:
        return self.registry.lookup(table)

    @staticmethod
    def validate_data(data: Mapping[str, Any], definition: SchemaDefinition) -> bool:
        return validate_data(dict(data), definition)

    # ---------- records ----------
    async def insert(self, table: str, data: Record) -> bool:
        return await self.store.insert(table, data)

    async def get(self, table: str, pk: str) -> Record:
        return await self.store.get(table, pk)

    async def get_all(self, table: str) -> List[Record]:
        return await self.store.get_all(table)

    async def update(self, table: str, pk: str, data: Record) -> Record:
        return await self.store.update(table, pk, data)

    async def delete(self, table: str, pk: str) -> bool:
        return await self.store.delete(table, pk)

    async def list_members(self, table: str) -> List[str]:
        return await self.store.list_members(table)

    # ---------- housekeeping ----------
    async def purge(self, keys: Iterable[str]) -> int:
        return await self.store.purge(keys)

    async def drop_table(self, table: str) -> int:
        return await self.store.drop_table(table)

    async def close(self) -> None:
        await self.store.close()

    def get_redis_client(self) -> aioredis.Redis:
        return self.store.redis


def create_client(
    config: NedisConfig | Mapping[str, Any] | None = None, **overrides: Any
) -> NedisClient:
    """
    One-liner constructor:
        client = create_client({"host": "cache", "port": 6380})
        client = create_client(host="cache")
    """
    if overrides:
        base = NedisConfig.coerce(config).model_dump()
        config = {**base, **overrides}
    return NedisClient(config)
