import struct

import pytest

from unifiedlogs.util import ParseError
from unifiedlogs.uuidtext import UUIDTextEntry, parse_uuidtext


def _build(entries, footer, signature=0x66778899, major=2, minor=1):
    header = struct.pack("<IIII", signature, major, minor, len(entries))
    body = b"".join(struct.pack("<II", start, size) for start, size in entries)
    return header + body + footer


def test_parse_uuidtext_two_entries():
    footer = b"/usr/bin/example\0format %s\0"
    data = _build([(32048, 617), (29747, 2301)], footer)
    parsed = parse_uuidtext(data)
    assert parsed.signature == 0x66778899
    assert parsed.unknown_major_version == 2
    assert parsed.unknown_minor_version == 1
    assert parsed.number_entries == 2
    assert parsed.entry_descriptors == [
        UUIDTextEntry(32048, 617),
        UUIDTextEntry(29747, 2301),
    ]
    assert parsed.footer_data == footer
    assert parsed.uuid == ""


def test_parse_uuidtext_one_entry():
    footer = b"abc\0"
    parsed = parse_uuidtext(_build([(21132, 2740)], footer))
    assert parsed.number_entries == 1
    assert parsed.entry_descriptors[0].entry_size == 2740
    assert parsed.entry_descriptors[0].range_start_offset == 21132
    assert len(parsed.footer_data) == 4


def test_bad_header():
    with pytest.raises(ParseError):
        parse_uuidtext(_build([(1, 2)], b"x", signature=0x12345678))


def test_bad_content_truncated_entries():
    data = _build([(1, 2), (3, 4)], b"")[:-4]
    with pytest.raises(ParseError):
        parse_uuidtext(data)


def test_bad_file_text():
    with pytest.raises(ParseError):
        parse_uuidtext(b"this is not a uuidtext file")


def test_empty_input():
    with pytest.raises(ParseError):
        parse_uuidtext(b"")