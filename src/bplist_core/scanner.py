"""Object table scanner.

Every object starts with a marker byte: the high nibble selects the type,
the low nibble is an inline count or width selector::

    0000 0000           null
    0000 1000 / 1001    false / true
    0000 1111           fill byte, skipped
    0001 nnnn ...       int, 2^nnnn bytes
    0010 nnnn ...       real, 2^nnnn bytes
    0011 0011 ...       date, 8-byte double
    0100 nnnn [int] ... data, nnnn bytes
    0101 nnnn [int] ... ASCII string, nnnn chars
    0110 nnnn [int] ... UTF-16BE string, nnnn code units
    0111 xxxx           end of the object table
    1000 nnnn ...       uid, nnnn+1 bytes
    1010 nnnn [int] objref*
    1101 nnnn [int] keyref* objref*

A count nibble of ``1111`` means the real count follows as an int object.
Objects are appended in the order they are met, so the physical order of
the bytes defines each object's index.
"""

from __future__ import annotations

import logging
import struct

from .errors import FormatError
from .header import Trailer
from .model import BPListType, Element, ObjectTable
from .primitives import (
    Cursor,
    decode_ascii_string,
    decode_data,
    decode_date,
    decode_int,
    decode_real,
    decode_singleton,
    decode_uid,
    decode_unicode_string,
)

LOG = logging.getLogger(__name__)

# Largest declared object count that still uses 1-byte references.
# Arrays and dicts differ by one.
ARRAY_BYTE_REF_LIMIT = 255
DICT_BYTE_REF_LIMIT = 256

EXTENDED_COUNT = 0xF
END_OF_TABLE = 0x7


# ---------------------------------------------------------------------------
# Counts and references
# ---------------------------------------------------------------------------

def array_ref_size(object_count: int) -> int:
    return 1 if object_count <= ARRAY_BYTE_REF_LIMIT else 2


def dict_ref_size(object_count: int) -> int:
    return 1 if object_count <= DICT_BYTE_REF_LIMIT else 2


def read_count(cursor: Cursor, nibble: int) -> int:
    """Return the inline count *nibble*, or read the int object that follows."""
    if nibble != EXTENDED_COUNT:
        return nibble
    marker = cursor.read_byte("count marker")
    if marker >> 4 != 0x1:
        raise FormatError(f"illegal count marker {marker:08b}")
    width = marker & 0xF
    if width > 3:
        raise FormatError(f"unsupported count byte count: {1 << width}")
    return int.from_bytes(cursor.read(1 << width, "count"), "big")


def _read_refs(cursor: Cursor, count: int, ref_size: int, what: str) -> tuple[int, ...]:
    raw = cursor.read(count * ref_size, what)
    if ref_size == 1:
        return tuple(raw)
    return struct.unpack(f">{count}H", raw)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

def decode_array(
    cursor: Cursor, nibble: int, table: ObjectTable, object_count: int
) -> Element:
    count = read_count(cursor, nibble)
    ref_size = array_ref_size(object_count)
    refs = _read_refs(cursor, count, ref_size, "objref")
    return Element(
        BPListType.ARRAY, refs=refs, ref_size=ref_size, index=len(table), table=table
    )


def decode_dict(
    cursor: Cursor, nibble: int, table: ObjectTable, object_count: int
) -> Element:
    count = read_count(cursor, nibble)
    ref_size = dict_ref_size(object_count)
    keys = _read_refs(cursor, count, ref_size, "keyref")
    refs = _read_refs(cursor, count, ref_size, "objref")
    return Element(
        BPListType.DICT,
        refs=refs,
        keys=keys,
        ref_size=ref_size,
        index=len(table),
        table=table,
    )


# ---------------------------------------------------------------------------
# Scan loop
# ---------------------------------------------------------------------------

def decode_element(
    cursor: Cursor, marker: int, table: ObjectTable, object_count: int
) -> Element | None:
    """Decode the object introduced by *marker*.

    Returns ``None`` for a fill byte.  The ``0111`` end marker is handled
    by :func:`scan_object_table` and is illegal here.
    """
    kind, nibble = marker >> 4, marker & 0xF

    if kind == 0x0:
        return decode_singleton(nibble)
    if kind == 0x1:
        return decode_int(cursor, nibble)
    if kind == 0x2:
        return decode_real(cursor, nibble)
    if kind == 0x3:
        return decode_date(cursor, nibble)
    if kind == 0x4:
        return decode_data(cursor, read_count(cursor, nibble))
    if kind == 0x5:
        return decode_ascii_string(cursor, read_count(cursor, nibble))
    if kind == 0x6:
        return decode_unicode_string(cursor, read_count(cursor, nibble))
    if kind == 0x8:
        LOG.debug("uid of %d bytes", nibble + 1)
        return decode_uid(cursor, nibble + 1)
    if kind == 0xA:
        return decode_array(cursor, nibble, table, object_count)
    if kind == 0xD:
        return decode_dict(cursor, nibble, table, object_count)
    raise FormatError(f"illegal marker {marker:08b} at offset {cursor.pos - 1}")


def scan_object_table(
    body: bytes, object_count: int, trailer: Trailer | None = None
) -> ObjectTable:
    """Decode *body* into an :class:`ObjectTable`.

    *object_count* is the count declared by the trailer; it only selects the
    width of container references.  Scanning stops at the end of *body* or
    at the first ``0111 xxxx`` marker, whichever comes first.
    """
    cursor = Cursor(body)
    elements: list[Element] = []
    # containers keep the read-only view; only this loop appends
    table = ObjectTable(elements, trailer)

    while not cursor.at_end():
        marker = cursor.read_byte()
        if marker >> 4 == END_OF_TABLE:
            LOG.debug(
                "end marker %s at offset %d, stopping after %d objects",
                f"{marker:08b}", cursor.pos - 1, len(table),
            )
            break
        element = decode_element(cursor, marker, table, object_count)
        if element is None:
            LOG.debug("fill byte at offset %d", cursor.pos - 1)
            continue
        elements.append(element)

    if len(table) != object_count:
        LOG.debug("scanned %d objects, trailer declares %d", len(table), object_count)
    return table
