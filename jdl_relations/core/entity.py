from collections.abc import Mapping
from typing import Any

from pydantic import ConfigDict, BaseModel

class Entity(BaseModel):
    """
    Reference to a named entity declared in the schema.

    Relationships only rely on the name; the comment is carried along so
    callers can keep the entity's documentation next to it.

    Example:
        Entity(name="Customer", comment="A registered shop customer")
    """

    name: str
    comment: str = ""

    model_config = ConfigDict(frozen=True)

    @staticmethod
    def is_valid(entity: Any) -> bool:
        """Return True if entity is present and carries a non-empty name."""
        if entity is None:
            return False
        if isinstance(entity, Mapping):
            name = entity.get("name")
        else:
            name = getattr(entity, "name", None)
        return isinstance(name, str) and name != ""

    def __str__(self) -> str:
        return self.name
