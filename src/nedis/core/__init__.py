from .registry import SchemaRegistry
from .schema import SchemaDefinition, check_storable, validate_data

__all__ = ["SchemaDefinition", "SchemaRegistry", "check_storable", "validate_data"]
