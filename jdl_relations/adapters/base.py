"""Abstract base class for schema adapters."""

from abc import ABC, abstractmethod
from typing import Any
from jdl_relations.core import Relationship


class SchemaAdapter(ABC):
    """
    Abstract base class for turning already-parsed schema data into Relationships.
    
    All adapters must implement load_relationships() which builds Relationship
    objects from whatever structured form their source provides. Parsing the
    schema text itself happens upstream.
    
    Example implementations:
    - JsonSchemaAdapter: JSON export of entities and relationships → Relationships
    """
    
    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize the adapter with configuration.
        
        Args:
            **kwargs: Adapter-specific configuration (paths, options, etc.)
        """
        self.config = kwargs

    @abstractmethod
    def load_relationships(self) -> list[Relationship]:
        """
        Load the source and convert every declaration to a Relationship.
        
        Construction errors propagate; validate() is left to the caller so
        it can pick its own diagnostics sink.
        
        Returns:
            List of Relationship objects, in declaration order.
        """
        pass

    def validate_source(self) -> bool:
        """Check if data source is valid/accessible."""
        return True

    def get_metadata(self) -> dict[str, Any]:
        """Return info about the schema (name, version, etc.)."""
        return {}
