"""Rendering of printf-style values taken from Unified Log message items.

Item values arrive as decimal strings. Floats are stored as the decimal form
of their 64-bit pattern and are reinterpreted before formatting. Padding
uses an explicit fill character and alignment, so a sign or radix prefix is
padded like any other character.
"""

from __future__ import annotations

import logging
import math
import re
import struct
from decimal import Decimal

logger = logging.getLogger(__name__)

FLOAT_TYPES = frozenset({"f", "F", "e", "E", "g", "G"})
INT_TYPES = frozenset({"d", "D", "i", "u"})
HEX_TYPES = frozenset({"x", "X", "a", "A", "p"})
OCTAL_TYPES = frozenset({"o", "O"})
ERROR_TYPES = frozenset({"m"})
STRING_TYPES = frozenset({"c", "s", "@", "S", "C", "P"})

_I64_PATTERN = re.compile(r"[+-]?[0-9]+")
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U64_MASK = 2**64 - 1


def _parse_i64(message: str) -> int | None:
    if not _I64_PATTERN.fullmatch(message):
        return None
    value = int(message)
    if not _I64_MIN <= value <= _I64_MAX:
        return None
    return value


def parse_float(message: str) -> float:
    """Reinterpret the 64-bit integer in ``message`` as an IEEE 754 double.

    Returns ``0.0`` if the message is not a valid signed 64-bit integer.
    """
    value = _parse_i64(message)
    if value is None:
        logger.error("Failed to parse float log message value: %s", message)
        return 0.0
    (result,) = struct.unpack("<d", struct.pack("<Q", value & _U64_MASK))
    return result


def parse_int(message: str) -> int:
    """Parse ``message`` as a signed 64-bit integer, or return 0 if it is not one."""
    value = _parse_i64(message)
    if value is None:
        logger.error("Failed to parse int log message value: %s", message)
        return 0
    return value


def _float_display(value: float) -> str:
    """Shortest round-trip form of ``value`` without an exponent."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _format_float(value: float, precision: int) -> str:
    if math.isnan(value) or math.isinf(value):
        return _float_display(value)
    return f"{value:.{precision}f}"


def _render(
    message: str,
    precision: int,
    type_data: str,
    hashtag: bool,
    octal_prefix: bool = False,
) -> str | None:
    """Format the value itself, or return ``None`` for an unhandled type."""
    if type_data in FLOAT_TYPES:
        value = parse_float(message)
        if precision == 0:
            parts = _float_display(value).split(".")
            if len(parts) == 2:
                precision = len(parts[1])
        return _format_float(value, precision)
    if type_data in INT_TYPES:
        return str(parse_int(message))
    if type_data in STRING_TYPES:
        if precision == 0:
            precision = len(message.encode("utf-8"))
        return message[:precision]
    if type_data in HEX_TYPES:
        digits = f"{parse_int(message) & _U64_MASK:X}"
        return f"0x{digits}" if hashtag else digits
    if type_data in OCTAL_TYPES:
        digits = f"{parse_int(message) & _U64_MASK:o}"
        return f"0o{digits}" if hashtag or octal_prefix else digits
    return None


def _pad(text: str, width: int, fill: str, left: bool) -> str:
    missing = width - len(text)
    if missing <= 0:
        return text
    return text + fill * missing if left else fill * missing + text


def _format_padded(
    message: str,
    width: int,
    precision: int,
    type_data: str,
    plus_minus: bool,
    hashtag: bool,
    fill: str,
    left: bool,
) -> str:
    body = _render(message, precision, type_data, hashtag)
    if body is None:
        return message
    plus = "+" if plus_minus else ""
    field_width = max(width - len(plus), 0)
    return plus + _pad(body, field_width, fill, left)


def format_alignment_left(
    message: str,
    width: int,
    precision: int,
    type_data: str,
    plus_minus: bool,
    hashtag: bool,
) -> str:
    """Align left within ``width``, padding with zeros."""
    return _format_padded(
        message, width, precision, type_data, plus_minus, hashtag, "0", True
    )


def format_alignment_right(
    message: str,
    width: int,
    precision: int,
    type_data: str,
    plus_minus: bool,
    hashtag: bool,
) -> str:
    """Align right within ``width``, padding with zeros."""
    return _format_padded(
        message, width, precision, type_data, plus_minus, hashtag, "0", False
    )


def format_alignment_left_space(
    message: str,
    width: int,
    precision: int,
    type_data: str,
    plus_minus: bool,
    hashtag: bool,
) -> str:
    """Align left within ``width``, padding with spaces."""
    return _format_padded(
        message, width, precision, type_data, plus_minus, hashtag, " ", True
    )


def format_alignment_right_space(
    message: str,
    width: int,
    precision: int,
    type_data: str,
    plus_minus: bool,
    hashtag: bool,
) -> str:
    """Align right within ``width``, padding with spaces."""
    return _format_padded(
        message, width, precision, type_data, plus_minus, hashtag, " ", False
    )


def format_left(
    message: str,
    precision: int,
    type_data: str,
    plus_minus: bool,
    hashtag: bool,
) -> str:
    """Format a value with no width, left-justified."""
    body = _render(message, precision, type_data, hashtag)
    if body is None:
        return message
    return ("+" if plus_minus else "") + body


def format_right(
    message: str,
    precision: int,
    type_data: str,
    plus_minus: bool,
    hashtag: bool,
) -> str:
    """Format a value with no width (the default); octal always gets its prefix."""
    body = _render(message, precision, type_data, hashtag, octal_prefix=True)
    if body is None:
        return message
    return ("+" if plus_minus else "") + body