"""Header and trailer reader.

A binary property list starts with the 8-byte magic ``bplist00`` and ends
with a fixed 32-byte trailer::

    offset  size  field
    0       6     unused
    6       1     byte width of offset-table entries
    7       1     byte width of object references (as declared by the writer)
    8       8     number of objects
    16      8     index of the top-level object
    24      8     byte offset of the offset table

Only the object count and the offset-table offset drive decoding here.  The
object table is taken to be the bytes between the header and the offset
table, scanned front to back; the offset table itself is never read.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .errors import BPListIOError, FormatError

MAGIC = (0x62706C69, 0x73743030)  # "bpli", "st00"
HEADER_SIZE = 8
TRAILER_SIZE = 32

_MAGIC_FORMAT = struct.Struct(">II")
_TRAILER_FORMAT = struct.Struct(">6xBBQQQ")


@dataclass(frozen=True, slots=True)
class Trailer:
    offset_int_size: int
    ref_size: int
    object_count: int
    top_object: int
    offset_table_offset: int


def read_header(data: bytes) -> None:
    """Raise :class:`FormatError` unless *data* starts with the bplist magic."""
    if len(data) < HEADER_SIZE:
        raise FormatError("file too small to be a bplist: truncated header")
    if _MAGIC_FORMAT.unpack_from(data, 0) != MAGIC:
        raise FormatError("file does not start with 'bplist00' magic")


def read_trailer(data: bytes) -> Trailer:
    """Decode the 32-byte trailer at the end of *data*."""
    if len(data) < HEADER_SIZE + TRAILER_SIZE:
        raise FormatError("file too small to be a bplist: truncated trailer")
    return Trailer(*_TRAILER_FORMAT.unpack_from(data, len(data) - TRAILER_SIZE))


def object_table_region(data: bytes, trailer: Trailer) -> bytes:
    """Return the bytes between the header and the offset table."""
    end = trailer.offset_table_offset
    if end < HEADER_SIZE:
        raise FormatError(
            f"offset table at {end} overlaps the {HEADER_SIZE}-byte header"
        )
    if end > len(data):
        raise BPListIOError(
            f"object table ends at {end} but input is only {len(data)} bytes"
        )
    return bytes(data[HEADER_SIZE:end])
