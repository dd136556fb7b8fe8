"""Adapter for schemas exported as JSON."""

import json
from pathlib import Path
from typing import Any, Optional

from .base import SchemaAdapter
from jdl_relations.core import Entity, Relationship, RelationshipConfig


class JsonSchemaAdapter(SchemaAdapter):
    """
    Adapter for a schema already parsed into JSON.

    Expects JSON file with structure:
    {
        "metadata": {...},
        "entities": [
            {"name": "Customer", "comment": "optional"}
        ],
        "relationships": [
            {
                "type": "ONE_TO_ONE",
                "from": "Customer",
                "to": "Address",
                "injectedFieldInFrom": "address",
                "injectedFieldInTo": null,
                "commentInFrom": "",
                "commentInTo": ""
            }
        ]
    }

    Relationship endpoints name entities from the "entities" list; a name
    that is not listed there still resolves to a bare Entity.

    Usage:
        adapter = JsonSchemaAdapter(data_path="schema.json")
        relationships = adapter.load_relationships()
    """

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize adapter.

        Args:
            **kwargs: Must include 'data_path' - path to JSON file

        Raises:
            ValueError: If data_path not provided
            FileNotFoundError: If data_path does not exist
        """
        super().__init__(**kwargs)

        self.data_path = kwargs.get('data_path')
        if self.data_path is None:
            raise ValueError("data_path is required")

        self.data_path = Path(self.data_path)
        if not self.data_path.exists():
            raise FileNotFoundError(f"data_path {self.data_path} does not exist")

    def load_relationships(self) -> list[Relationship]:
        """
        Load the schema JSON and convert its relationships.

        Returns:
            List of Relationship objects

        Raises:
            json.JSONDecodeError: If JSON is malformed
            InvalidEntityReferenceError: If a relationship endpoint is missing
            MissingRequiredFieldError: If a type is unknown or no injected field is set
        """
        data = self._read()
        entities = {
            item['name']: Entity(name=item['name'], comment=item.get('comment') or "")
            for item in data.get('entities', [])
        }
        return [self._convert_to_relationship(item, entities) for item in data.get('relationships', [])]

    def get_metadata(self) -> dict[str, Any]:
        """Return the file's metadata block plus declaration counts."""
        data = self._read()
        metadata = dict(data.get('metadata', {}))
        metadata["entity_count"] = len(data.get('entities', []))
        metadata["relationship_count"] = len(data.get('relationships', []))
        return metadata

    def validate_source(self) -> bool:
        """Check the file holds a JSON object."""
        try:
            return isinstance(self._read(), dict)
        except json.JSONDecodeError:
            return False

    def _read(self) -> dict[str, Any]:
        with self.data_path.open() as f:
            return json.load(f)

    def _convert_to_relationship(
        self,
        rel_data: dict[str, Any],
        entities: dict[str, Entity],
    ) -> Relationship:
        """
        Convert a single JSON entry to a Relationship.

        Args:
            rel_data: Dict from JSON with type, from, to and the injected fields
            entities: Declared entities, by name

        Returns:
            Relationship object
        """
        config = RelationshipConfig(
            type=rel_data.get('type'),
            from_entity=self._resolve_entity(rel_data.get('from'), entities),
            to_entity=self._resolve_entity(rel_data.get('to'), entities),
            injected_field_in_from=rel_data.get('injectedFieldInFrom'),
            injected_field_in_to=rel_data.get('injectedFieldInTo'),
            comment_in_from=rel_data.get('commentInFrom') or "",
            comment_in_to=rel_data.get('commentInTo') or "",
        )
        return Relationship.create(config)

    def _resolve_entity(self, name: Optional[str], entities: dict[str, Entity]) -> Optional[Entity]:
        """Map an endpoint name to its declared Entity; None when no name is given."""
        if not name:
            return None
        return entities.get(name, Entity(name=name))
