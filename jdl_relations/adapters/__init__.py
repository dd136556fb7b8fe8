from .base import SchemaAdapter
from .json_schema import JsonSchemaAdapter

__all__ = ["SchemaAdapter", "JsonSchemaAdapter"]
