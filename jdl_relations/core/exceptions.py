"""Errors raised while building, checking or collecting relationships.

They derive from Exception rather than ValueError: pydantic wraps a ValueError
raised inside a validator into a ValidationError, and callers need to tell the
failure kinds apart.
"""


class RelationshipError(Exception):
    """Base class for every relationship failure."""


class InvalidEntityReferenceError(RelationshipError):
    """One or both endpoints are missing or have no name."""


class MissingRequiredFieldError(RelationshipError):
    """The type is unrecognized or no injected field was supplied."""


class UnsupportedRelationshipKindError(RelationshipError):
    """validate() met a relationship type outside the recognized set."""


class MalformedRelationshipError(RelationshipError):
    """A cardinality-specific rule was broken."""


class DuplicateRelationshipError(RelationshipError):
    """A relationship with the same identity was already collected."""
