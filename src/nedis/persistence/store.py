"""
Thin data-access layer mapping tables onto Redis.

Each record is a hash at ``{table}:{pk}``; each table keeps an ordered list
at ``{table}`` naming its record keys. Redis gives no multi-key commit, so
every write is an ordered series of round trips: the index is always written
before the hash on insert, and cleared before the hash on delete. A failure
in between therefore leaves at most an index entry without a hash, which the
next insert of that key reports, never a hash that no index points at.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from ..config import NedisConfig
from ..core.registry import SchemaRegistry
from ..core.schema import check_storable, validate_data
from ..errors import (
    ConnectionError,
    DatabaseInsertError,
    IndexConsistencyError,
    ItemAlreadyExistsError,
    ItemNotFoundError,
    ValidationError,
)
from .keys import index_key, record_key

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


def _as_stored(data: Record) -> Record:
    """Numbers come back from a hash as strings; mirror that locally."""
    return {
        k: str(v) if isinstance(v, (int, float)) and not isinstance(v, bool) else v
        for k, v in data.items()
    }


class RecordStore:
    """Table-shaped CRUD over Redis hashes plus one index list per table."""

    def __init__(
        self,
        registry: SchemaRegistry,
        config: NedisConfig | None = None,
        redis: aioredis.Redis | None = None,
    ):
        self.registry = registry
        self.config = config or NedisConfig()
        self.redis = redis or aioredis.Redis(
            **self.config.redis_kwargs(), decode_responses=True
        )
        self._connected = False
        # one writer per table inside this process
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    # ---- connection -----------------------------------------------------
    async def ensure_connected(self) -> "RecordStore":
        if self._connected:
            return self
        try:
            await self.redis.ping()
        except (RedisError, OSError) as exc:
            raise ConnectionError(self.config.host, self.config.port) from exc
        self._connected = True
        logger.info("connected to redis at %s:%s", self.config.host, self.config.port)
        return self

    async def close(self) -> None:
        await self.redis.aclose()
        self._connected = False

    # ---- writes ---------------------------------------------------------
    async def insert(self, table: str, data: Record) -> bool:
        await self.ensure_connected()
        definition = self.registry.lookup(table)
        validate_data(data, definition)
        check_storable(data, definition)
        key = record_key(table, definition.primary_key_of(data))

        async with self._locks[table]:
            if await self.redis.exists(key):
                raise ItemAlreadyExistsError(key)

            try:
                await self._add_to_index(table, key)
                await self.redis.hset(key, mapping=dict(data))
            except DatabaseInsertError:
                raise
            except Exception as exc:
                logger.warning("insert of %s failed after indexing: %s", key, exc)
                raise DatabaseInsertError(key, str(exc)) from exc

        logger.debug("inserted %s", key)
        return True

    async def update(self, table: str, pk: str, data: Record) -> Record:
        """Merge ``data`` over the stored record and write the result back.

        The primary key cannot change, and the index is left alone. With
        ``config.validate_updates`` the merged record is re-checked against
        the table schema before anything is written.
        """
        await self.ensure_connected()
        definition = self.registry.lookup(table)

        async with self._locks[table]:
            item = await self.get(table, pk)
            if definition.pk in data and str(data[definition.pk]) != item[definition.pk]:
                raise ValidationError(
                    f'Primary key field "{definition.pk}" of "{table}" cannot be changed.'
                )
            merged = {**item, **_as_stored(data)}
            if self.config.validate_updates:
                validate_data(merged, definition)
            check_storable(merged, definition)
            await self.redis.hset(record_key(table, pk), mapping=merged)

        return merged

    async def delete(self, table: str, pk: str) -> bool:
        await self.ensure_connected()
        self.registry.lookup(table)
        async with self._locks[table]:
            await self.get(table, pk)
            key = record_key(table, pk)
            await self.redis.lrem(index_key(table), 1, key)
            await self.redis.delete(key)
        logger.debug("deleted %s", key)
        return True

    # ---- reads ----------------------------------------------------------
    async def get(self, table: str, pk: str) -> Record:
        await self.ensure_connected()
        definition = self.registry.lookup(table)
        result = await self.redis.hgetall(record_key(table, pk))
        if definition.pk not in result:
            raise ItemNotFoundError(str(pk), table)
        return result

    async def get_all(self, table: str) -> List[Record]:
        """Every record of ``table`` in index (insertion) order.

        An index entry without a record hash is reported, not skipped.
        """
        await self.ensure_connected()
        definition = self.registry.lookup(table)
        members = await self.list_members(table)
        records = await asyncio.gather(*(self.redis.hgetall(k) for k in members))
        for key, record in zip(members, records):
            if definition.pk not in record:
                logger.warning("index of %r lists %s but its hash is missing", table, key)
                raise IndexConsistencyError(table, key)
        return list(records)

    async def list_members(self, table: str) -> List[str]:
        """Raw index list; no schema check."""
        await self.ensure_connected()
        return await self.redis.lrange(index_key(table), 0, -1)

    # ---- cleanup --------------------------------------------------------
    async def purge(self, keys: Iterable[str]) -> int:
        """Delete ``keys`` independently, ignoring (but logging) failures."""
        await self.ensure_connected()
        keys = list(keys)
        results = await asyncio.gather(
            *(self.redis.delete(k) for k in keys), return_exceptions=True
        )
        deleted = 0
        for key, result in zip(keys, results):
            if isinstance(result, BaseException):
                logger.warning("ignoring failed delete of %s: %s", key, result)
            else:
                deleted += 1
        return deleted

    async def drop_table(self, table: str) -> int:
        """Purge every record hash of ``table`` and then its index."""
        members = await self.list_members(table)
        return await self.purge([*members, index_key(table)])

    # ---- internal -------------------------------------------------------
    async def _add_to_index(self, table: str, key: str) -> None:
        # caller already proved the hash is absent
        if key in await self.list_members(table):
            logger.warning("index of %r lists %s but its hash is missing", table, key)
            raise DatabaseInsertError(key, "Key doesnt exist but key is in table set.")
        await self.redis.rpush(index_key(table), key)
