"""
Scope frame primitive.

Pure data container only.
One frame per open container; the builder keeps them on a stack.
"""

from __future__ import annotations
from dataclasses import dataclass

from document.enums.container import ContainerKind


@dataclass
class Frame:
    """
    kind:
        Container kind of this scope.

    first:
        True until something is written into this scope. Governs whether
        the next insertion is preceded by an element separator.
        Array frames start with first=False: they already hold the
        seeded element.
    """
    kind: ContainerKind
    first: bool = True
