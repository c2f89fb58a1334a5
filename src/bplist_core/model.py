"""Data model for decoded bplist objects: type tags, elements and tables."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Union, overload

from .errors import CyclicReferenceError, ReferenceRangeError
from .header import Trailer


# ---------------------------------------------------------------------------
# BPListType
# ---------------------------------------------------------------------------

class BPListType(Enum):
    NULL = auto()
    BOOLEAN = auto()
    LONG = auto()
    FLOAT = auto()
    DOUBLE = auto()
    DATE = auto()
    DATA = auto()
    ASCII_STRING = auto()
    UNICODE_STRING = auto()
    UID = auto()
    ARRAY = auto()
    DICT = auto()

    @property
    def is_container(self) -> bool:
        return self in (BPListType.ARRAY, BPListType.DICT)


Scalar = Union[None, bool, int, float, datetime, bytes, str]
NativeValue = Union[Scalar, list, dict]


# ---------------------------------------------------------------------------
# Element
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Element:
    """One entry of an object table.

    Scalars carry their decoded value in ``payload``.  Arrays and dicts carry
    only integer references into ``table`` (``refs`` for array items and dict
    values, ``keys`` for dict keys) plus their own position in that table.
    ``table`` is the read-only :class:`ObjectTable` the element belongs to.
    Nothing is dereferenced until :meth:`value` is called.
    """

    type: BPListType
    payload: Scalar = None
    refs: tuple[int, ...] = ()
    keys: tuple[int, ...] = ()
    ref_size: int = 0
    index: int = -1
    table: ObjectTable | None = field(default=None, repr=False, compare=False)

    def value(self, strict: bool = False) -> NativeValue:
        """Return the native value of this element.

        Arrays resolve to a new list of resolved item values.  Dicts resolve
        to a new ``{str(key value): Element}`` mapping so the caller decides
        how deep to go.  Nothing is cached; every call walks the table again.

        With ``strict`` left off, a reference outside the table raises
        ``IndexError`` and a cyclic array recurses until ``RecursionError``.
        With ``strict`` on, those cases raise :class:`ReferenceRangeError`
        and :class:`CyclicReferenceError` instead.
        """
        return _resolve(self, () if strict else None)

    def elements(self, strict: bool = False) -> list[Element]:
        """Return the elements an array refers to, without resolving them."""
        if self.type is not BPListType.ARRAY:
            raise TypeError(f"{self.type.name} element has no items")
        path = () if strict else None
        return [_lookup(self, ref, path) for ref in self.refs]


def _resolve(element: Element, path: tuple[int, ...] | None) -> NativeValue:
    if element.type is BPListType.ARRAY:
        return _resolve_array(element, path)
    if element.type is BPListType.DICT:
        return _resolve_dict(element, path)
    return element.payload


def _enter(element: Element, path: tuple[int, ...] | None) -> tuple[int, ...] | None:
    if path is None:
        return None
    if element.index in path:
        raise CyclicReferenceError(element.index, path)
    return (*path, element.index)


def _lookup(element: Element, ref: int, path: tuple[int, ...] | None) -> Element:
    table = element.table
    if path is not None and not 0 <= ref < len(table):
        raise ReferenceRangeError(ref, len(table))
    return table[ref]


def _resolve_array(element: Element, path: tuple[int, ...] | None) -> list:
    path = _enter(element, path)
    return [_resolve(_lookup(element, ref, path), path) for ref in element.refs]


def _resolve_dict(element: Element, path: tuple[int, ...] | None) -> dict[str, Element]:
    path = _enter(element, path)
    entries: dict[str, Element] = {}
    for key_ref, obj_ref in zip(element.keys, element.refs):
        key = _resolve(_lookup(element, key_ref, path), path)
        entries[str(key)] = _lookup(element, obj_ref, path)
    return entries


# ---------------------------------------------------------------------------
# ObjectTable
# ---------------------------------------------------------------------------

class ObjectTable(Sequence):
    """Read-only, 0-indexed view over the elements produced by one decode."""

    def __init__(self, elements: list[Element], trailer: Trailer | None = None) -> None:
        self._elements = elements
        self.trailer = trailer

    @overload
    def __getitem__(self, index: int) -> Element: ...

    @overload
    def __getitem__(self, index: slice) -> list[Element]: ...

    def __getitem__(self, index):
        return self._elements[index]

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"ObjectTable({len(self._elements)} objects)"

    def resolve(self, index: int, strict: bool = False) -> NativeValue:
        """Shorthand for ``table[index].value(strict)``."""
        return self._elements[index].value(strict)
