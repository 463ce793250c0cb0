"""
Error taxonomy for nedis.

Every error carries the fields that identify what went wrong (table, key,
primary key) as attributes, so callers can branch on them without parsing
messages.
"""

from __future__ import annotations

from typing import Any, List


class NedisError(Exception):
    """Base class for everything nedis raises."""


class ConnectionError(NedisError):  # noqa: A001
    """The underlying Redis connection could not be established."""

    def __init__(self, host: str, port: int):
        self.host = host
        self.port = port
        super().__init__(
            f"Connection Error: Could not connect to redis at {host}:{port}"
        )


class DatabaseInsertError(NedisError):
    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f'Error inserting into key "{key}". Error: {reason}')


class DuplicateSchemaError(NedisError):
    def __init__(self, table: str):
        self.table = table
        super().__init__(f'"{table}" schema is already registered.')


class IndexConsistencyError(NedisError):
    """A table index names a key whose record hash is gone."""

    def __init__(self, table: str, key: str):
        self.table = table
        self.key = key
        super().__init__(f'Index of "{table}" lists "{key}" but no record exists.')


class ItemNotFoundError(NedisError):
    def __init__(self, pk: str, table: str):
        self.pk = pk
        self.table = table
        super().__init__(f'"{table}" item by primary key "{pk}" does not exist.')


class ItemAlreadyExistsError(NedisError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f'Item with key "{key}" already exists.')


class UnregisteredSchemaError(NedisError):
    def __init__(self, table: str):
        self.table = table
        super().__init__(f'Schema "{table}" is not registered.')


class ValidationError(NedisError):
    """Payload rejected by a schema; ``str(err)`` is the validator's message."""

    def __init__(self, message: str, errors: List[dict[str, Any]] | None = None):
        self.errors = errors or []
        super().__init__(message)


__all__ = [
    "NedisError",
    "ConnectionError",
    "DatabaseInsertError",
    "DuplicateSchemaError",
    "ItemNotFoundError",
    "IndexConsistencyError",
    "ItemAlreadyExistsError",
    "UnregisteredSchemaError",
    "ValidationError",
]
