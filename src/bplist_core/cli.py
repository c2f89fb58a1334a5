"""``bplist-dump``: convert a binary property list to XML.

Usage::

    bplist-dump in.bplist                 # XML of object 0 to stdout
    bplist-dump in.bplist -o out.plist
    bplist-dump - --index 3 < in.bplist   # read stdin, render object 3
"""

from __future__ import annotations

import argparse
import logging
import sys

from .converter import to_xml
from .errors import BPListError
from .parser import parse_object_table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bplist-dump",
        description="Decode a binary property list and print it as XML.",
    )
    parser.add_argument("input", help="bplist file to read, or - for stdin")
    parser.add_argument("-o", "--output", help="write XML here instead of stdout")
    parser.add_argument(
        "--index",
        type=int,
        default=0,
        help="object table index to render (default: 0)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        source = sys.stdin.buffer if args.input == "-" else args.input
        table = parse_object_table(source)
        if not 0 <= args.index < len(table):
            print(
                f"error: index {args.index} out of range for {len(table)} objects",
                file=sys.stderr,
            )
            return 1
        xml = to_xml(table, args.index)
    except BPListError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as fh:
                fh.write(xml)
        except OSError as exc:
            print(f"error: cannot write '{args.output}': {exc}", file=sys.stderr)
            return 1
    else:
        sys.stdout.write(xml)
    return 0


if __name__ == "__main__":
    sys.exit(main())
