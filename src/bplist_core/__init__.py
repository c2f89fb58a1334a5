"""bplist core: decoder for binary property list object tables."""

from .converter import to_xml
from .errors import (
    BPListError,
    BPListIOError,
    CyclicReferenceError,
    FormatError,
    ReferenceRangeError,
    ResolutionError,
)
from .header import Trailer, read_header, read_trailer
from .model import BPListType, Element, ObjectTable
from .parser import parse_bytes, parse_object_table
from .scanner import array_ref_size, dict_ref_size, scan_object_table

__all__ = [
    "parse_object_table",
    "parse_bytes",
    "scan_object_table",
    "read_header",
    "read_trailer",
    "array_ref_size",
    "dict_ref_size",
    "to_xml",
    "Trailer",
    "BPListType",
    "Element",
    "ObjectTable",
    "BPListError",
    "BPListIOError",
    "FormatError",
    "ResolutionError",
    "CyclicReferenceError",
    "ReferenceRangeError",
]
