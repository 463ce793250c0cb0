"""
In-memory registry of table schemas, owned by one client.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from ..errors import DuplicateSchemaError, UnregisteredSchemaError
from .schema import SchemaDefinition

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """Table name -> SchemaDefinition, in registration order."""

    def __init__(self):
        self._schemas: List[SchemaDefinition] = []

    def register(self, definition: SchemaDefinition) -> None:
        if definition.name in self:
            raise DuplicateSchemaError(definition.name)
        self._schemas.append(definition)
        logger.debug("registered schema %r (pk=%r)", definition.name, definition.pk)

    def register_many(self, definitions: Iterable[SchemaDefinition]) -> None:
        """Register in order; stops at the first duplicate, keeping earlier ones."""
        for definition in definitions:
            self.register(definition)

    def lookup(self, table: str) -> SchemaDefinition:
        for definition in self._schemas:
            if definition.name == table:
                return definition
        raise UnregisteredSchemaError(table)

    def list(self) -> List[SchemaDefinition]:
        return list(self._schemas)

    def __contains__(self, table: object) -> bool:
        return any(d.name == table for d in self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)
