from enum import Enum
from typing import Any


class RelationshipType(str, Enum):
    """Cardinalities a relationship can be declared with in the schema."""

    ONE_TO_ONE = "ONE_TO_ONE"
    ONE_TO_MANY = "ONE_TO_MANY"
    MANY_TO_ONE = "MANY_TO_ONE"
    MANY_TO_MANY = "MANY_TO_MANY"

    @classmethod
    def exists(cls, value: Any) -> bool:
        """Check whether value names one of the recognized cardinalities."""
        if isinstance(value, cls):
            return True
        return isinstance(value, str) and value in cls._value2member_map_

    def __str__(self) -> str:
        return self.value
