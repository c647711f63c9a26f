"""
Converter-driven array construction.

Responsibilities:
- Open one element object per source item
- Hand the positioned document to an ElementConverter
- Own all element sequencing (close / next_array_element)

Non-responsibilities:
- No knowledge of item types
- No field naming
"""

from __future__ import annotations

from typing import Iterable, Protocol, TypeVar

from document.builder import Document, InvalidStructure

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


class ElementConverter(Protocol[T_contra]):
    """
    Populate one array element from one item.

    Called with the document positioned inside a fresh element object.
    Must not call close() past the element or next_array_element();
    any nested scopes it leaves open are closed by the caller.

    Plain functions and lambdas satisfy this protocol.
    """

    def __call__(self, document: Document, item: T_contra) -> None: ...


def build_array(
    converter: ElementConverter[T],
    items: Iterable[T],
) -> Document:
    """
    Create an array-rooted document with one element per item, in order.

    An empty `items` yields `[{}]`, not `[]`: the seeded element is kept.
    """
    document = Document.new_array()
    _fill_elements(document, converter, items)
    return document


def write_array(
    document: Document,
    name: str,
    converter: ElementConverter[T],
    items: Iterable[T],
) -> Document:
    """
    Write a named array field into the current object of `document`.

    Returns with the cursor back in the enclosing object, ready for the
    next sibling field.
    """
    outer_depth = document.depth
    document.begin_array(name)
    _fill_elements(document, converter, items)
    _unwind(document, outer_depth)
    return document


def _fill_elements(
    document: Document,
    converter: ElementConverter[T],
    items: Iterable[T],
) -> None:
    element_depth = document.depth
    first = True

    for item in items:
        if not first:
            _unwind(document, element_depth)
            document.next_array_element()
        first = False

        converter(document, item)

        if document.depth < element_depth:
            raise InvalidStructure(
                "converter closed its own array element "
                f"(depth {document.depth} < {element_depth})"
            )


def _unwind(document: Document, depth: int) -> None:
    while document.depth > depth:
        document.close()
