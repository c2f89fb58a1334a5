"""Entry points: decode a bplist from bytes, a path or a binary stream."""

from __future__ import annotations

import logging
import os
from typing import BinaryIO, Union

from .errors import BPListIOError
from .header import object_table_region, read_header, read_trailer
from .model import ObjectTable
from .scanner import scan_object_table

LOG = logging.getLogger(__name__)

Source = Union[bytes, bytearray, memoryview, str, "os.PathLike[str]", BinaryIO]


def parse_bytes(data: bytes) -> ObjectTable:
    """Decode a complete bplist held in memory."""
    read_header(data)
    trailer = read_trailer(data)
    LOG.debug(
        "trailer: %d objects, top object %d, offset table at %d",
        trailer.object_count, trailer.top_object, trailer.offset_table_offset,
    )
    body = object_table_region(data, trailer)
    return scan_object_table(body, trailer.object_count, trailer)


def parse_object_table(source: Source) -> ObjectTable:
    """Decode *source* and return its whole object table.

    *source* may be a bytes-like object, a filesystem path, or a binary file
    object.  Streams are read in full once; a seekable stream is rewound to
    its start first, so the caller's position does not matter.  The caller
    picks which element to treat as the root.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return parse_bytes(bytes(source))
    if isinstance(source, (str, os.PathLike)):
        return parse_bytes(_read_path(source))
    return parse_bytes(_read_stream(source))


def _read_path(path: str | os.PathLike[str]) -> bytes:
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError as exc:
        raise BPListIOError(f"cannot read '{os.fspath(path)}': {exc}") from exc


def _read_stream(stream: BinaryIO) -> bytes:
    try:
        if stream.seekable():
            stream.seek(0)
        data = stream.read()
    except OSError as exc:
        raise BPListIOError(f"cannot read stream: {exc}") from exc
    if not isinstance(data, (bytes, bytearray)):
        raise BPListIOError(f"stream returned {type(data).__name__}, expected bytes")
    return bytes(data)
