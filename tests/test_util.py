import pytest

from unifiedlogs.util import (
    ParseError,
    anticipated_padding_size,
    anticipated_padding_size_8,
    clean_uuid,
    cstring,
    decode_standard,
    encode_standard,
    extract_string,
    extract_string_size,
    non_empty_cstring,
    padding_size_8,
    padding_size_four,
    unixepoch_to_iso,
)


@pytest.mark.parametrize(
    "count, size, alignment, expected",
    [(0, 8, 8, 0), (1, 8, 8, 0), (2, 16, 8, 0), (2, 5, 8, 6)],
)
def test_missing_padding(count, size, alignment, expected):
    assert anticipated_padding_size(count, size, alignment) == expected


def test_anticipated_padding_size_8():
    assert anticipated_padding_size_8(2, 5) == 6
    assert anticipated_padding_size_8(3, 8) == 0


@pytest.mark.parametrize("size, expected", [(0, 0), (7, 1), (8, 0), (16, 0)])
def test_padding_size_8(size, expected):
    assert padding_size_8(size) == expected


@pytest.mark.parametrize("size, expected", [(0, 0), (3, 1), (4, 0), (8, 0)])
def test_padding_size_4(size, expected):
    assert padding_size_four(size) == expected


def test_extract_string_size():
    data = bytes([55, 57, 54, 46, 49, 48, 48, 0])
    text, rest = extract_string_size(data, 8)
    assert text == "796.100"
    assert rest == b""


def test_extract_string_size_null():
    text, rest = extract_string_size(b"abc", 0)
    assert text == "(null)"
    assert rest == b"abc"


def test_extract_string_size_short_data():
    text, rest = extract_string_size(b"ab\0", 10)
    assert text == "ab"
    assert rest == b""


def test_extract_string_size_leaves_rest():
    text, rest = extract_string_size(b"hi\0xyz", 3)
    assert text == "hi"
    assert rest == b"xyz"


def test_extract_string_size_short_invalid_utf8_raises():
    with pytest.raises(ParseError):
        extract_string_size(b"\xff\xfe", 10)


def test_extract_string():
    data = bytes([55, 57, 54, 46, 49, 48, 48, 0])
    text, rest = extract_string(data)
    assert text == "796.100"
    assert rest == b"\0"


def test_extract_string_no_terminator():
    assert extract_string(b"hello") == ("hello", b"")


def test_extract_string_empty():
    assert extract_string(b"") == ("Cannot extract string. Empty input.", b"")


def test_extract_string_invalid_utf8():
    assert extract_string(b"\xff\xfe") == ("Could not extract string", b"")


def test_encode_standard():
    assert encode_standard(b"Hello word!") == "SGVsbG8gd29yZCE="


def test_decode_standard():
    assert decode_standard("SGVsbG8gd29yZCE=") == b"Hello word!"


def test_decode_standard_invalid():
    with pytest.raises(ValueError):
        decode_standard("abc")


def test_unixepoch_to_iso():
    assert unixepoch_to_iso(1650767813342574583) == "2022-04-24T02:36:53.342574583Z"


def test_unixepoch_to_iso_epoch():
    assert unixepoch_to_iso(0) == "1970-01-01T00:00:00.000000000Z"


def test_clean_uuid():
    assert clean_uuid("[AB, CD, EF]") == "ABCDEF"


def test_cstring():
    assert cstring(bytes([55, 57, 54, 46, 49, 48, 48, 0])) == ("796.100", b"")
    assert cstring(bytes([55, 57, 54, 46, 49, 48, 48])) == ("796.100", b"")
    assert cstring(bytes([55, 57, 54, 46, 49, 48, 48, 0, 42, 42, 42])) == (
        "796.100",
        bytes([42, 42, 42]),
    )
    assert cstring(bytes([0, 42, 42, 42])) == ("", bytes([42, 42, 42]))


def test_cstring_invalid_utf8():
    with pytest.raises(ParseError):
        cstring(b"\xff\0")


def test_non_empty_cstring():
    assert non_empty_cstring(bytes([55, 57, 54, 46, 49, 48, 48, 0])) == ("796.100", b"")
    assert non_empty_cstring(bytes([55, 57, 54, 46, 49, 48, 48])) == ("796.100", b"")
    assert non_empty_cstring(bytes([55, 57, 54, 46, 49, 48, 48, 0, 42, 42, 42])) == (
        "796.100",
        bytes([42, 42, 42]),
    )
    with pytest.raises(ParseError):
        non_empty_cstring(bytes([0, 42, 42, 42]))