"""Shared helpers for building synthetic bplist inputs."""

from __future__ import annotations

import struct

import pytest

MAGIC = b"bplist00"


def build_bplist(
    body: bytes,
    object_count: int,
    *,
    top_object: int = 0,
    ref_size: int = 1,
    offset_int_size: int = 1,
    offset_table: bytes = b"",
) -> bytes:
    """Wrap *body* (raw object-table bytes) with a header and a trailer."""
    offset_table_offset = len(MAGIC) + len(body)
    trailer = struct.pack(
        ">6xBBQQQ",
        offset_int_size,
        ref_size,
        object_count,
        top_object,
        offset_table_offset,
    )
    return MAGIC + body + offset_table + trailer


@pytest.fixture
def make_bplist():
    return build_bplist
