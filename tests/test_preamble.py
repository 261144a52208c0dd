import pytest

from unifiedlogs.preamble import LogPreamble, detect_preamble, parse_preamble
from unifiedlogs.util import ParseError


def test_detect_preamble():
    header = bytes([0, 16, 0, 0, 17, 0, 0, 0, 208, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0])
    preamble, rest = detect_preamble(header)
    assert rest == header
    assert preamble.chunk_tag == 0x1000
    assert preamble.chunk_sub_tag == 0x11
    assert preamble.chunk_data_size == 0xD0


def test_parse_preamble_consumes():
    catalog = bytes([11, 96, 0, 0, 17, 0, 0, 0, 176, 31, 0, 0, 0, 0, 0, 0])
    preamble, rest = parse_preamble(catalog)
    assert rest == b""
    assert preamble == LogPreamble(0x600B, 0x11, 0x1FB0)


def test_parse_preamble_too_short():
    with pytest.raises(ParseError):
        parse_preamble(bytes(15))