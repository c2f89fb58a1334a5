"""Render a decoded object table as an XML property list."""

from __future__ import annotations

import base64
from xml.sax.saxutils import escape

from .errors import CyclicReferenceError
from .model import BPListType, Element, ObjectTable

XML_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" '
    '"http://www.apple.com/DTDs/PropertyList-1.0.dtd">\n'
    '<plist version="1.0">'
)


def to_xml(table: ObjectTable, index: int = 0) -> str:
    """Return element *index* of *table* as an XML plist document.

    Containers are resolved strictly: a bad reference raises
    ``ReferenceRangeError`` and a cycle raises ``CyclicReferenceError``.

    XML plists have no null, so a ``NULL`` element renders as an empty
    ``<string/>``.  That output is identical to an empty string and does not
    round-trip: reading it back yields ``""``, not ``None``.
    """
    lines = [XML_HEADER]
    _emit(table[index], (), 0, lines)
    lines.append("</plist>")
    return "\n".join(lines) + "\n"


def _emit(element: Element, path: tuple[int, ...], depth: int, lines: list[str]) -> None:
    pad = "\t" * depth
    kind = element.type

    if kind.is_container:
        if element.index in path:
            raise CyclicReferenceError(element.index, path)
        path = (*path, element.index)

    if kind is BPListType.DICT:
        entries = element.value(strict=True)
        if not entries:
            lines.append(f"{pad}<dict/>")
            return
        lines.append(f"{pad}<dict>")
        for key, child in entries.items():
            lines.append(f"{pad}\t<key>{escape(key)}</key>")
            _emit(child, path, depth + 1, lines)
        lines.append(f"{pad}</dict>")
        return

    if kind is BPListType.ARRAY:
        items = element.elements(strict=True)
        if not items:
            lines.append(f"{pad}<array/>")
            return
        lines.append(f"{pad}<array>")
        for child in items:
            _emit(child, path, depth + 1, lines)
        lines.append(f"{pad}</array>")
        return

    lines.append(pad + _fmt_scalar(element))


def _fmt_scalar(element: Element) -> str:
    kind, value = element.type, element.payload
    if kind in (BPListType.ASCII_STRING, BPListType.UNICODE_STRING):
        return f"<string>{escape(value)}</string>"
    if kind is BPListType.LONG:
        return f"<integer>{value}</integer>"
    if kind in (BPListType.FLOAT, BPListType.DOUBLE):
        return f"<real>{value!r}</real>"
    if kind is BPListType.BOOLEAN:
        return "<true/>" if value else "<false/>"
    if kind is BPListType.DATA:
        return f"<data>{base64.b64encode(value).decode('ascii')}</data>"
    if kind is BPListType.DATE:
        return (
            f"<date>{value.year:04d}-{value.month:02d}-{value.day:02d}"
            f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}Z</date>"
        )
    if kind is BPListType.UID:
        return f"<dict><key>CF$UID</key><integer>{value}</integer></dict>"
    # NULL: lossy, see to_xml
    return "<string/>"
