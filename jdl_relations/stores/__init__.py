from .relationship_store import RelationshipStore

__all__ = ["RelationshipStore"]
