"""
Container kind enumeration.

Rules:
- Discriminant only; skeleton text and delimiters live in constants.
- No behavior beyond constant lookups.
"""

from __future__ import annotations

from enum import Enum

from constants import (
    ARRAY_CLOSE,
    ARRAY_CURSOR_OFFSET,
    ARRAY_SKELETON,
    OBJECT_CLOSE,
    OBJECT_CURSOR_OFFSET,
    OBJECT_SKELETON,
)


class ContainerKind(str, Enum):
    """
    Kind of the JSON scope the cursor currently sits inside.
    """

    OBJECT = "OBJECT"
    ARRAY = "ARRAY"

    @property
    def skeleton(self) -> str:
        return OBJECT_SKELETON if self is ContainerKind.OBJECT else ARRAY_SKELETON

    @property
    def cursor_offset(self) -> int:
        return (
            OBJECT_CURSOR_OFFSET
            if self is ContainerKind.OBJECT
            else ARRAY_CURSOR_OFFSET
        )

    @property
    def closer(self) -> str:
        return OBJECT_CLOSE if self is ContainerKind.OBJECT else ARRAY_CLOSE

    @classmethod
    def from_closer(cls, char: str) -> ContainerKind | None:
        """
        Map a closing delimiter back to its kind, or None if `char`
        is not a closing delimiter.
        """
        if char == OBJECT_CLOSE:
            return cls.OBJECT
        if char == ARRAY_CLOSE:
            return cls.ARRAY
        return None
