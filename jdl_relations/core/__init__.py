from .entity import Entity
from .exceptions import (
    DuplicateRelationshipError,
    InvalidEntityReferenceError,
    MalformedRelationshipError,
    MissingRequiredFieldError,
    RelationshipError,
    UnsupportedRelationshipKindError,
)
from .relationship import Relationship, RelationshipConfig
from .relationship_types import RelationshipType

__all__ = [
    "Entity",
    "Relationship",
    "RelationshipConfig",
    "RelationshipType",
    "RelationshipError",
    "InvalidEntityReferenceError",
    "MissingRequiredFieldError",
    "UnsupportedRelationshipKindError",
    "MalformedRelationshipError",
    "DuplicateRelationshipError",
]
