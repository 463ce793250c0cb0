"""
Schema definitions: a table name, its primary-key field, and the pydantic
model that every inserted payload must satisfy.
"""

from __future__ import annotations

from typing import Any, Dict, Type

import pydantic
from pydantic import BaseModel

from ..errors import ValidationError


class SchemaDefinition(BaseModel):
    """Immutable description of one table."""

    name: str
    pk: str
    validator: Type[BaseModel]

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    def primary_key_of(self, data: Dict[str, Any]) -> str:
        try:
            value = data[self.pk]
        except KeyError:
            raise ValidationError(
                f'Primary key field "{self.pk}" is missing for "{self.name}".'
            ) from None
        return str(value)


def validate_data(data: Dict[str, Any], definition: SchemaDefinition) -> bool:
    """Check ``data`` against ``definition.validator``.

    The pydantic message is passed through untouched so callers see exactly
    what the validator reported.
    """
    try:
        definition.validator.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(str(exc), exc.errors(include_url=False)) from exc
    return True


def check_storable(data: Dict[str, Any], definition: SchemaDefinition) -> bool:
    """Hash fields can only hold strings and numbers."""
    rejected = [
        k
        for k, v in data.items()
        if isinstance(v, bool) or not isinstance(v, (str, int, float))
    ]
    if rejected:
        names = ", ".join(f'"{k}"' for k in rejected)
        raise ValidationError(
            f'Fields {names} of "{definition.name}" must be strings or numbers.'
        )
    return True
