"""Relationship store using NetworkX, keyed by relationship identity."""

import logging
from collections.abc import Iterable
from typing import Optional

import networkx as nx

from jdl_relations.core import DuplicateRelationshipError, Relationship
from jdl_relations.core.relationship import Diagnostics

logger = logging.getLogger(__name__)


class RelationshipStore:
    """
    Collection of the relationships declared in a schema.

    Entities become nodes, relationships become edges keyed by their
    identity(), so declaring the same relationship twice is caught on add.
    Only pairwise rules are checked; the graph itself is never validated.
    """

    def __init__(self):
        """Initialize store with an empty directed multigraph."""
        self.graph = nx.MultiDiGraph()
        self._order: list[str] = []
        self._edges: dict[str, tuple[str, str]] = {}

    def add(
        self,
        relationship: Relationship,
        validate: bool = True,
        diagnostics: Optional[Diagnostics] = None,
    ) -> str:
        """
        Add a relationship to the store.

        Args:
            relationship: Relationship to add
            validate: Run relationship.validate() before adding (default: True)
            diagnostics: Sink for validation warnings, passed to validate()

        Returns:
            Identity of the added relationship

        Raises:
            DuplicateRelationshipError: If the identity is already stored
            MalformedRelationshipError: If validation fails
        """
        if validate:
            relationship.validate(diagnostics)

        key = relationship.identity()
        if key in self._edges:
            raise DuplicateRelationshipError(
                f"The {relationship.type.value} relationship from {relationship.from_entity.name} "
                f"to {relationship.to_entity.name} is declared more than once ({key})."
            )

        source, target = relationship.from_entity.name, relationship.to_entity.name
        self._add_node(relationship.from_entity)
        self._add_node(relationship.to_entity)
        self.graph.add_edge(source, target, key=key, type=relationship.type, relationship=relationship)
        self._edges[key] = (source, target)
        self._order.append(key)
        logger.debug("Added relationship %s", key)
        return key

    def extend(
        self,
        relationships: Iterable[Relationship],
        validate: bool = True,
        diagnostics: Optional[Diagnostics] = None,
    ) -> list[str]:
        """Add several relationships, stopping at the first failure."""
        return [self.add(relationship, validate=validate, diagnostics=diagnostics) for relationship in relationships]

    def get(self, key: str) -> Optional[Relationship]:
        """Find relationship by identity."""
        if key not in self._edges:
            return None
        source, target = self._edges[key]
        return self.graph.edges[source, target, key]["relationship"]

    def remove(self, key: str) -> Relationship:
        """
        Remove a relationship by identity.

        Entities left without any relationship are dropped as well.

        Raises:
            KeyError: If no relationship has this identity
        """
        relationship = self.get(key)
        if relationship is None:
            raise KeyError(key)

        source, target = self._edges.pop(key)
        self._order.remove(key)
        self.graph.remove_edge(source, target, key=key)
        for node in {source, target}:
            if self.graph.degree(node) == 0:
                self.graph.remove_node(node)
        return relationship

    def relationships(self) -> list[Relationship]:
        """Return relationships in the order they were added."""
        return [self.get(key) for key in self._order]

    def for_entity(self, name: str, type_filter: Optional[str] = None) -> list[Relationship]:
        """
        Get relationships where the entity is either end.

        Args:
            name: Entity name
            type_filter: Optional filter by relationship type (e.g., "ONE_TO_MANY")

        Returns:
            List of matching Relationships, in insertion order
        """
        if name not in self.graph:
            return []

        touching = set()
        for _, _, key, data in self.graph.out_edges(name, keys=True, data=True):
            if type_filter is None or data["type"] == type_filter:
                touching.add(key)
        for _, _, key, data in self.graph.in_edges(name, keys=True, data=True):
            if type_filter is None or data["type"] == type_filter:
                touching.add(key)

        return [self.get(key) for key in self._order if key in touching]

    def entities(self) -> list[str]:
        """Return names of all entities referenced by a relationship."""
        return list(self.graph.nodes)

    def render(self) -> str:
        """Render all relationships as schema text, one block each."""
        return "\n\n".join(relationship.render() for relationship in self.relationships())

    def clear(self) -> None:
        """Clear all relationships and entities."""
        self.graph.clear()
        self._order = []
        self._edges = {}

    def size(self) -> int:
        """Return number of stored relationships."""
        return len(self._order)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        if isinstance(key, Relationship):
            key = key.identity()
        return key in self._edges

    def _add_node(self, entity) -> None:
        """Add an entity as graph node, keeping the first comment seen."""
        if entity.name not in self.graph:
            self.graph.add_node(entity.name, entity=entity)
