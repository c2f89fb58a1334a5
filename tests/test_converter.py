"""Tests for the XML property list rendering."""

from datetime import datetime
import plistlib

import pytest

from bplist_core import CyclicReferenceError, parse_object_table, to_xml
from bplist_core.converter import XML_HEADER


def _roundtrip(value):
    table = parse_object_table(plistlib.dumps(value, fmt=plistlib.FMT_BINARY))
    return plistlib.loads(to_xml(table).encode("utf-8"))


def test_document_frame(make_bplist):
    xml = to_xml(parse_object_table(make_bplist(b"\x52Hi", 1)))
    assert xml.startswith(XML_HEADER)
    assert xml.endswith("</plist>\n")
    assert "<string>Hi</string>" in xml

def test_roundtrip_through_plistlib():
    value = {
        "name": "Joe <Smith>",
        "age": 36,
        "score": -1.25,
        "active": False,
        "blob": b"\x00\xffbinary",
        "seen": datetime(2019, 3, 1, 8, 15, 0),
        "tags": ["a", "ü", []],
        "nested": {"empty": {}},
    }
    assert _roundtrip(value) == value

def test_tabs_and_nesting(make_bplist):
    body = bytes([0xA1, 1, 0xA1, 2, 0x09])
    xml = to_xml(parse_object_table(make_bplist(body, 3)))
    assert "<array>\n\t<array>\n\t\t<true/>\n\t</array>\n</array>" in xml

def test_key_is_escaped(make_bplist):
    body = bytes([0xD1, 1, 2, 0x53]) + b"a<b" + bytes([0x08])
    xml = to_xml(parse_object_table(make_bplist(body, 3)))
    assert "<key>a&lt;b</key>" in xml
    assert "<false/>" in xml

def test_uid_renders_as_cf_uid(make_bplist):
    xml = to_xml(parse_object_table(make_bplist(bytes([0x80, 0x07]), 1)))
    assert "<dict><key>CF$UID</key><integer>7</integer></dict>" in xml

def test_null_renders_as_empty_string(make_bplist):
    xml = to_xml(parse_object_table(make_bplist(bytes([0x00]), 1)))
    assert "<string/>" in xml

def test_null_and_empty_string_render_alike(make_bplist):
    null = to_xml(parse_object_table(make_bplist(bytes([0x00]), 1)))
    empty = to_xml(parse_object_table(make_bplist(bytes([0x50]), 1)))
    assert null == empty
    assert plistlib.loads(null.encode("utf-8")) == ""

def test_index_selects_element(make_bplist):
    body = bytes([0x09, 0x10, 0x05])
    xml = to_xml(parse_object_table(make_bplist(body, 2)), index=1)
    assert "<integer>5</integer>" in xml
    assert "<true/>" not in xml

def test_cycle_is_reported(make_bplist):
    table = parse_object_table(make_bplist(bytes([0xA1, 0]), 1))
    with pytest.raises(CyclicReferenceError):
        to_xml(table)

def test_dict_value_cycle_is_reported(make_bplist):
    table = parse_object_table(make_bplist(bytes([0xD1, 1, 0, 0x51]) + b"k", 2))
    with pytest.raises(CyclicReferenceError):
        to_xml(table)
