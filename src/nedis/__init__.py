"""
Public surface for nedis.
Importing this module does **not** touch Redis; the first awaited record
operation on a client opens the connection.
"""

from .client import NedisClient, create_client
from .config import NedisConfig
from .core.registry import SchemaRegistry
from .core.schema import SchemaDefinition
from .errors import (
    ConnectionError,
    DatabaseInsertError,
    DuplicateSchemaError,
    IndexConsistencyError,
    ItemAlreadyExistsError,
    ItemNotFoundError,
    NedisError,
    UnregisteredSchemaError,
    ValidationError,
)
from .persistence.store import RecordStore

__all__ = [
    "NedisClient",
    "NedisConfig",
    "RecordStore",
    "SchemaDefinition",
    "SchemaRegistry",
    "create_client",
    "NedisError",
    "ConnectionError",
    "DatabaseInsertError",
    "DuplicateSchemaError",
    "IndexConsistencyError",
    "ItemAlreadyExistsError",
    "ItemNotFoundError",
    "UnregisteredSchemaError",
    "ValidationError",
]
