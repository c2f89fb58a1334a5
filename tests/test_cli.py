"""Tests for the bplist-dump command line."""

import io
import plistlib
import sys

import pytest

from bplist_core.cli import build_parser, main


@pytest.fixture
def sample(tmp_path):
    path = tmp_path / "sample.bplist"
    path.write_bytes(plistlib.dumps({"k": [1, "two"]}, fmt=plistlib.FMT_BINARY))
    return path


def test_parser_defaults():
    args = build_parser().parse_args(["in.bplist"])
    assert args.input == "in.bplist"
    assert args.output is None
    assert args.index == 0
    assert args.verbose is False

def test_dump_to_stdout(sample, capsys):
    assert main([str(sample)]) == 0
    out = capsys.readouterr().out
    assert plistlib.loads(out.encode()) == {"k": [1, "two"]}

def test_dump_to_file(sample, tmp_path):
    out_path = tmp_path / "out.plist"
    assert main([str(sample), "-o", str(out_path)]) == 0
    assert plistlib.loads(out_path.read_bytes()) == {"k": [1, "two"]}

def test_dump_from_stdin(sample, capsys, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(sample.read_bytes())))
    assert main(["-"]) == 0
    assert "<key>k</key>" in capsys.readouterr().out

def test_index_option(sample, capsys):
    # index 0 is the dict, its key "k" comes next
    assert main([str(sample), "--index", "1"]) == 0
    assert "<string>k</string>" in capsys.readouterr().out

def test_index_out_of_range(sample, capsys):
    assert main([str(sample), "--index", "99"]) == 1
    assert "out of range" in capsys.readouterr().err

def test_not_a_bplist(tmp_path, capsys):
    path = tmp_path / "bad.bplist"
    path.write_bytes(b"not a property list at all, definitely not")
    assert main([str(path)]) == 1
    assert capsys.readouterr().err.startswith("error: ")

def test_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / "missing.bplist")]) == 1
    assert "cannot read" in capsys.readouterr().err
