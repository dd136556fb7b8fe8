import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from pydantic import AliasChoices, ConfigDict, BaseModel, Field, model_validator

from .entity import Entity
from .exceptions import (
    InvalidEntityReferenceError,
    MalformedRelationshipError,
    MissingRequiredFieldError,
    UnsupportedRelationshipKindError,
)
from .relationship_types import RelationshipType

logger = logging.getLogger(__name__)

Diagnostics = Callable[[str], None]


class RelationshipConfig(BaseModel):
    """
    Raw construction arguments for a Relationship, with their defaults.

    Values are kept as given (endpoints may be Entity objects, mappings or
    None, the type may be an unknown string) so that Relationship construction
    decides how to reject them.

    Defaults:
        from_entity / to_entity: None
        type: RelationshipType.ONE_TO_ONE (also when given as None)
        injected_field_in_from / injected_field_in_to: None
        comment_in_from / comment_in_to: ""
    """

    from_entity: Any = Field(default=None, validation_alias=AliasChoices("from_entity", "from"))
    to_entity: Any = Field(default=None, validation_alias=AliasChoices("to_entity", "to"))
    type: Any = RelationshipType.ONE_TO_ONE
    injected_field_in_from: Optional[str] = None
    injected_field_in_to: Optional[str] = None
    comment_in_from: Optional[str] = ""
    comment_in_to: Optional[str] = ""

    model_config = ConfigDict(extra="forbid")


class Relationship(BaseModel):
    """
    Directed, typed relationship between two schema entities.

    Everything but the comments is fixed once the relationship is built.
    Comments only affect render(); they never take part in identity() or
    validate().

    Example:
        Relationship(
            from_entity=Entity(name="Student"),
            to_entity=Entity(name="Course"),
            type=RelationshipType.MANY_TO_MANY,
            injected_field_in_from="courses",
            injected_field_in_to="students",
        )
    """

    from_entity: Entity = Field(frozen=True, validation_alias=AliasChoices("from_entity", "from"))
    to_entity: Entity = Field(frozen=True, validation_alias=AliasChoices("to_entity", "to"))
    type: RelationshipType = Field(default=RelationshipType.ONE_TO_ONE, frozen=True)
    injected_field_in_from: Optional[str] = Field(default=None, frozen=True)
    injected_field_in_to: Optional[str] = Field(default=None, frozen=True)
    comment_in_from: str = ""
    comment_in_to: str = ""

    @model_validator(mode='before')
    @classmethod
    def resolve_config(cls, data: Any) -> Any:
        """Apply defaults and enforce the construction invariants."""
        if isinstance(data, Relationship):
            data = {name: getattr(data, name) for name in Relationship.model_fields}
        if isinstance(data, RelationshipConfig):
            config = data
        elif isinstance(data, Mapping):
            config = RelationshipConfig.model_validate(dict(data))
        else:
            return data

        if not Entity.is_valid(config.from_entity) or not Entity.is_valid(config.to_entity):
            raise InvalidEntityReferenceError(
                "Valid source and destination entities are required "
                f"(got {config.from_entity!r} to {config.to_entity!r} "
                f"in a {_type_name(config.type)} relationship)."
            )

        kind = RelationshipType.ONE_TO_ONE if config.type is None else config.type
        injected_from = config.injected_field_in_from or None
        injected_to = config.injected_field_in_to or None
        if not RelationshipType.exists(kind) or not (injected_from or injected_to):
            raise MissingRequiredFieldError(
                "The type, and at least one injected field must be passed "
                f"(got {_type_name(kind)} from {_entity_name(config.from_entity)} "
                f"to {_entity_name(config.to_entity)})."
            )

        return {
            "from_entity": _copy_entity(config.from_entity),
            "to_entity": _copy_entity(config.to_entity),
            "type": RelationshipType(kind),
            "injected_field_in_from": injected_from,
            "injected_field_in_to": injected_to,
            "comment_in_from": config.comment_in_from or "",
            "comment_in_to": config.comment_in_to or "",
        }

    @classmethod
    def create(cls, config: Optional[RelationshipConfig] = None, **overrides: Any) -> 'Relationship':
        """
        Build a relationship from a RelationshipConfig.

        Args:
            config: Construction arguments; built from overrides when omitted
            **overrides: Field values replacing those of config

        Raises:
            InvalidEntityReferenceError: If an endpoint is missing or unnamed
            MissingRequiredFieldError: If the type is unknown or no injected field is given
        """
        if config is None:
            config = RelationshipConfig(**overrides)
        elif overrides:
            values = dict(config)
            for alias, name in (("from", "from_entity"), ("to", "to_entity")):
                if alias in overrides:
                    values[name] = overrides.pop(alias)
            config = RelationshipConfig.model_validate({**values, **overrides})
        return cls.model_validate(config)

    @staticmethod
    def is_valid(relationship: Any) -> bool:
        """Non-raising check that relationship could be constructed as is."""
        if relationship is None:
            return False
        return (
            RelationshipType.exists(_lookup(relationship, "type"))
            and Entity.is_valid(_lookup(relationship, "from_entity", "from"))
            and Entity.is_valid(_lookup(relationship, "to_entity", "to"))
            and (
                _lookup(relationship, "injected_field_in_from") is not None
                or _lookup(relationship, "injected_field_in_to") is not None
            )
        )

    def identity(self) -> str:
        """
        Key identifying the relationship for deduplication.

        Built from the type, both entity names and the injected fields, e.g.
        "ONE_TO_ONE_Customer{address}_Address".
        """
        source = self.from_entity.name
        if self.injected_field_in_from:
            source += f"{{{self.injected_field_in_from}}}"
        destination = self.to_entity.name
        if self.injected_field_in_to:
            destination += self.injected_field_in_to
        return f"{_type_name(self.type)}_{source}_{destination}"

    def validate(self, diagnostics: Optional[Diagnostics] = None) -> None:
        """
        Check the injected fields against the rules of the relationship type.

        A One-to-Many relationship missing one side is only reported: the
        other side gets added later by the code generator.

        Args:
            diagnostics: Receives warning messages; defaults to the module logger

        Raises:
            UnsupportedRelationshipKindError: If the type is not recognized
            MalformedRelationshipError: If the injected fields break the type's rule
        """
        source, destination = self.from_entity.name, self.to_entity.name
        if not RelationshipType.exists(self.type):
            raise UnsupportedRelationshipKindError(
                f"The relationship type {_type_name(self.type)} from {source} "
                f"to {destination} isn't supported."
            )

        kind = RelationshipType(self.type)
        if kind is RelationshipType.ONE_TO_ONE:
            if not self.injected_field_in_from:
                raise MalformedRelationshipError(
                    f"In the One-to-One relationship from {source} to {destination}, "
                    "the source entity must possess the destination in a One-to-One "
                    "relationship, or you must invert the direction of the relationship."
                )
        elif kind is RelationshipType.ONE_TO_MANY:
            if not self.injected_field_in_from or not self.injected_field_in_to:
                emit = diagnostics if diagnostics is not None else logger.warning
                emit(
                    f"In the One-to-Many relationship from {source} to {destination}, "
                    "only bidirectionality is supported for a One-to-Many relationship. "
                    "The other side will be automatically added."
                )
        elif kind is RelationshipType.MANY_TO_ONE:
            if self.injected_field_in_from and self.injected_field_in_to:
                raise MalformedRelationshipError(
                    f"In the Many-to-One relationship from {source} to {destination}, "
                    "only unidirectionality is supported for a Many-to-One relationship, "
                    "you should create a bidirectional One-to-Many relationship instead."
                )
        elif kind is RelationshipType.MANY_TO_MANY:
            if not self.injected_field_in_from or not self.injected_field_in_to:
                raise MalformedRelationshipError(
                    f"In the Many-to-Many relationship from {source} to {destination}, "
                    "only bidirectionality is supported for a Many-to-Many relationship."
                )
        else:
            raise UnsupportedRelationshipKindError(
                f"The relationship type {kind.value} from {source} to {destination} isn't supported."
            )

    def render(self) -> str:
        """Render the relationship the way it is written in a schema file."""
        text = f"relationship {_type_name(self.type)} {{\n  "
        if self.comment_in_from:
            text += f"/**\n   * {self.comment_in_from}\n   */\n  "
        text += self.from_entity.name
        if self.injected_field_in_from:
            text += f"{{{self.injected_field_in_from}}}"
        text += " to"
        if self.comment_in_to:
            text += f"\n  /**\n   * {self.comment_in_to}\n   */\n  "
        else:
            text += " "
        text += self.to_entity.name
        if self.injected_field_in_to:
            text += f"{{{self.injected_field_in_to}}}"
        return text + "\n}"

    def __str__(self) -> str:
        return self.render()


def _type_name(value: Any) -> str:
    return str(getattr(value, "value", value))


def _entity_name(entity: Any) -> str:
    if isinstance(entity, Mapping):
        return str(entity.get("name"))
    return str(getattr(entity, "name", None))


def _lookup(obj: Any, *keys: str) -> Any:
    for key in keys:
        if isinstance(obj, Mapping):
            if key in obj:
                return obj[key]
        elif hasattr(obj, key):
            return getattr(obj, key)
    return None


def _copy_entity(entity: Any) -> Entity:
    """Take a private copy of an endpoint so the caller's object is never shared."""
    if isinstance(entity, Entity):
        return entity.model_copy(deep=True)
    if isinstance(entity, Mapping):
        return Entity(name=entity["name"], comment=entity.get("comment") or "")
    return Entity(name=entity.name, comment=getattr(entity, "comment", "") or "")
