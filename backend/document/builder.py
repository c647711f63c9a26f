# backend/document/builder.py
"""
Incremental, cursor-based JSON document builder.

The buffer is valid JSON after every call. Closing delimiters are written
together with their opening delimiters, so nothing is ever "finished":
new content is inserted at the cursor, which always sits just inside the
innermost open container.

Usage example:

    doc = Document.new_object()
    doc.element("first", "element")
    doc.begin_object("objectOne").element("objectOneElementOne", "blah")
    doc.close()
    doc.element("second", "element")

    doc.render()
    # {"first":"element","objectOne":{"objectOneElementOne":"blah"},"second":"element"}

Not safe for concurrent use; build one Document per thread/task.
"""

from __future__ import annotations

from functools import total_ordering
from typing import Any

from constants import ELEMENT_SEPARATOR, KV_SEPARATOR, OBJECT_SKELETON
from document.enums.container import ContainerKind
from document.escape import escape
from document.frames import Frame


# -------------------------
# Exceptions
# -------------------------

class DocumentError(Exception):
    """Base class for document builder errors."""


class InvalidStructure(DocumentError):
    """
    Raised when a call would break the document structure.

    Covers calling next_array_element() outside an array, writing named
    fields directly into an array scope, and delimiter mismatches found by
    close(). These are usage errors; the current build should be abandoned.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: ContainerKind | None = None,
        actual: ContainerKind | None = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


# -------------------------
# Value formatting
# -------------------------

def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# -------------------------
# Document
# -------------------------

@total_ordering
class Document:
    """
    Mutable JSON text buffer with an insertion cursor and a scope stack.

    Invariants:
    - self._text is valid JSON between calls
    - self._cursor indexes the closing delimiter of the innermost
      open container (the frontier)
    - self._frames[0] is the root scope and is never popped
    """

    def __init__(self, root: ContainerKind) -> None:
        self._text: str = root.skeleton
        self._cursor: int = len(root.skeleton) - root.cursor_offset

        if root is ContainerKind.OBJECT:
            self._frames: list[Frame] = [Frame(ContainerKind.OBJECT)]
        else:
            # Cursor starts inside the seeded element, not the array itself
            self._frames = [
                Frame(ContainerKind.ARRAY, first=False),
                Frame(ContainerKind.OBJECT),
            ]

    @classmethod
    def new_object(cls) -> Document:
        """Create an object-rooted document: `{}`."""
        return cls(ContainerKind.OBJECT)

    @classmethod
    def new_array(cls) -> Document:
        """Create an array-rooted document: `[{}]`."""
        return cls(ContainerKind.ARRAY)

    # -------------------------
    # Introspection
    # -------------------------

    @property
    def kind(self) -> ContainerKind:
        """Kind of the container the cursor currently sits inside."""
        return self._frames[-1].kind

    @property
    def depth(self) -> int:
        """Number of open scopes, root included."""
        return len(self._frames)

    @property
    def cursor(self) -> int:
        return self._cursor

    # -------------------------
    # Builder operations
    # -------------------------

    def begin_object(self, name: str) -> Document:
        """
        Add an object-valued field to the current object and move the
        cursor inside it.
        """
        self._require_object("begin_object")
        self._insert(escape(name), KV_SEPARATOR, ContainerKind.OBJECT.skeleton)
        self._cursor -= ContainerKind.OBJECT.cursor_offset
        self._frames.append(Frame(ContainerKind.OBJECT))
        return self

    def element(self, name: str, value: Any) -> Document:
        """
        Add a leaf field to the current object.

        None renders as "", booleans as "true"/"false", anything else via
        str(). All values are written as JSON strings.
        """
        self._require_object("element")
        self._insert(escape(name), KV_SEPARATOR, escape(_stringify(value)))
        return self

    def begin_array(self, name: str) -> Document:
        """
        Add an array-valued field to the current object and move the
        cursor inside its seeded first element.
        """
        self._require_object("begin_array")
        self._insert(escape(name), KV_SEPARATOR, ContainerKind.ARRAY.skeleton)
        self._cursor -= ContainerKind.ARRAY.cursor_offset
        self._frames.append(Frame(ContainerKind.ARRAY, first=False))
        self._frames.append(Frame(ContainerKind.OBJECT))
        return self

    def next_array_element(self) -> Document:
        """
        Start a new element object in the nearest enclosing array.

        If the cursor is inside an element object it is closed first
        (one level only). Raises InvalidStructure if that does not land
        in an array.
        """
        if self.kind is ContainerKind.OBJECT:
            self.close()

        if self.kind is not ContainerKind.ARRAY:
            raise InvalidStructure(
                f"next_array_element: expected {ContainerKind.ARRAY.value} "
                f"container, found {self.kind.value}",
                expected=ContainerKind.ARRAY,
                actual=self.kind,
            )

        self._insert(OBJECT_SKELETON)
        self._cursor -= ContainerKind.OBJECT.cursor_offset
        self._frames.append(Frame(ContainerKind.OBJECT))
        return self

    def close(self) -> Document:
        """
        Ascend one level by stepping the cursor past the current closing
        delimiter. No-op at the root.
        """
        if len(self._frames) == 1:
            return self

        position = self._cursor + 1
        found = ContainerKind.from_closer(self._text[position])

        if found is None:
            raise InvalidStructure(
                f"close: unexpected character {self._text[position]!r} "
                f"at position {position}"
            )

        parent = self._frames[-2]
        if found is not parent.kind:
            raise InvalidStructure(
                f"close: expected {parent.kind.value} container, "
                f"found {found.value}",
                expected=parent.kind,
                actual=found,
            )

        self._cursor = position
        self._frames.pop()
        return self

    def render(self) -> str:
        """
        Return the document as RFC 4627 JSON text.

        Open containers need not be closed first.
        """
        return self._text

    # -------------------------
    # Text protocol
    # -------------------------

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Document({self._text!r}, cursor={self._cursor}, kind={self.kind.value})"

    def __len__(self) -> int:
        return len(self._text)

    def __getitem__(self, index: int | slice) -> str:
        return self._text[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._text == other._text

    def __lt__(self, other: Document) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._text < other._text

    # -------------------------
    # Internals
    # -------------------------

    def _require_object(self, operation: str) -> None:
        if self.kind is not ContainerKind.OBJECT:
            raise InvalidStructure(
                f"{operation}: expected {ContainerKind.OBJECT.value} "
                f"container, found {self.kind.value}",
                expected=ContainerKind.OBJECT,
                actual=self.kind,
            )

    def _insert(self, *snippets: str) -> None:
        """
        Insert complete JSON snippets at the cursor, prefixed with an
        element separator unless the current scope is still empty.
        """
        frame = self._frames[-1]
        chunk = "".join(snippets)

        if not frame.first:
            chunk = ELEMENT_SEPARATOR + chunk
        frame.first = False

        self._text = self._text[:self._cursor] + chunk + self._text[self._cursor:]
        self._cursor += len(chunk)
