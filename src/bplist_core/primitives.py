"""Decoders for the leaf object types of the object table."""

from __future__ import annotations

import struct
from datetime import datetime, timedelta

from .errors import BPListIOError, FormatError
from .model import BPListType, Element

# Dates are seconds relative to 2001-01-01 00:00:00, kept naive.
EPOCH = datetime(2001, 1, 1)

MAX_UID_SIZE = 4

_FLOAT = struct.Struct(">f")
_DOUBLE = struct.Struct(">d")

# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------

class Cursor:
    """Forward-only reader over an in-memory byte buffer."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def read_byte(self, what: str = "marker") -> int:
        if self.pos >= len(self.data):
            raise BPListIOError(f"illegal EOF in {what} at offset {self.pos}")
        b = self.data[self.pos]
        self.pos += 1
        return b

    def read(self, n: int, what: str = "value") -> bytes:
        end = self.pos + n
        if end > len(self.data):
            raise BPListIOError(
                f"illegal EOF in {what}: need {n} bytes at offset {self.pos}, "
                f"{len(self.data) - self.pos} left"
            )
        chunk = self.data[self.pos:end]
        self.pos = end
        return chunk


# ---------------------------------------------------------------------------
# Leaf decoders
# ---------------------------------------------------------------------------

def decode_singleton(nibble: int) -> Element | None:
    """null 0000 0000, false 0000 1000, true 0000 1001, fill 0000 1111.

    Returns ``None`` for the fill byte, which is not part of the table.
    """
    if nibble == 0x0:
        return Element(BPListType.NULL)
    if nibble == 0x8:
        return Element(BPListType.BOOLEAN, False)
    if nibble == 0x9:
        return Element(BPListType.BOOLEAN, True)
    if nibble == 0xF:
        return None
    raise FormatError(f"illegal singleton marker 0000 {nibble:04b}")


def decode_int(cursor: Cursor, nibble: int) -> Element:
    """int 0001 nnnn: 2^nnnn big-endian bytes, up to 8.

    1, 2 and 4 byte ints are unsigned; writers put negative numbers in 8
    bytes, which are two's complement.
    """
    if nibble > 3:
        raise FormatError(f"unsupported integer byte count: {1 << nibble}")
    raw = cursor.read(1 << nibble, "integer")
    return Element(BPListType.LONG, int.from_bytes(raw, "big", signed=nibble == 3))


def decode_real(cursor: Cursor, nibble: int) -> Element:
    """real 0010 nnnn: a 4-byte float or an 8-byte double."""
    count = 1 << nibble
    if count == 4:
        return Element(BPListType.FLOAT, _FLOAT.unpack(cursor.read(4, "real"))[0])
    if count == 8:
        return Element(BPListType.DOUBLE, _DOUBLE.unpack(cursor.read(8, "real"))[0])
    raise FormatError(f"unsupported real byte count: {count}")


def decode_date(cursor: Cursor, nibble: int) -> Element:
    """date 0011 0011: 8-byte double, seconds since :data:`EPOCH`."""
    if nibble != 0x3:
        raise FormatError(f"illegal date marker 0011 {nibble:04b}")
    seconds = _DOUBLE.unpack(cursor.read(8, "date"))[0]
    try:
        when = EPOCH + timedelta(seconds=seconds)
    except (OverflowError, ValueError) as exc:
        raise FormatError(f"date offset {seconds!r} is out of range") from exc
    return Element(BPListType.DATE, when)


def decode_data(cursor: Cursor, count: int) -> Element:
    return Element(BPListType.DATA, cursor.read(count, "data"))


def decode_ascii_string(cursor: Cursor, count: int) -> Element:
    # one character per byte
    raw = cursor.read(count, "ASCII string")
    return Element(BPListType.ASCII_STRING, raw.decode("latin-1"))


def decode_unicode_string(cursor: Cursor, count: int) -> Element:
    """*count* is in UTF-16 code units, not bytes."""
    raw = cursor.read(count * 2, "unicode string")
    return Element(BPListType.UNICODE_STRING, raw.decode("utf-16-be", "surrogatepass"))


def decode_uid(cursor: Cursor, count: int) -> Element:
    """uid 1000 nnnn: nnnn+1 unsigned big-endian bytes."""
    if count > MAX_UID_SIZE:
        raise FormatError(f"unsupported UID byte count: {count}")
    raw = cursor.read(count, "UID")
    return Element(BPListType.UID, int.from_bytes(raw, "big", signed=False))
