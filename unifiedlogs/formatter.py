"""Parsing of single printf-style format specifiers found in log messages."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .printf import (
    ERROR_TYPES,
    format_alignment_left,
    format_alignment_left_space,
    format_alignment_right,
    format_alignment_right_space,
    format_left,
    format_right,
)
from .util import ParseError

logger = logging.getLogger(__name__)

# Item types that carry a dynamic precision before the actual value.
PRECISION_ITEMS = frozenset({0x10, 0x12})
# Number item type 0 is also seen as a dynamic width/precision value.
DYNAMIC_PRECISION_VALUE = 0x0
NUMBER_ITEM_TYPES = frozenset({0x0, 0x1, 0x2})

_LENGTH_CHARS = "hlwIztq"
_TYPE_CHARS = "cmCdiouxXeEfgGaAnpsSZP@"
_PRECISION_STOP_CHARS = "hljzZtqLdDiuUoOcCxXfFeEgGaASspPn%@"
_LENGTH_VALUES = frozenset({"h", "hh", "l", "ll", "w", "I", "z", "t", "q"})

_DIGITS = re.compile(r"[0-9]*")
_UNSIGNED = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1
_USIZE_MAX = 2**64 - 1

ObjectDecoder = Callable[[str, Sequence["FirehoseItemInfo"], int, int], str]


@dataclass
class FirehoseItemInfo:
    """One value attached to a firehose log entry."""

    message_strings: str = ""
    item_type: int = 0
    item_size: int = 0


def _take_in(text: str, chars: str) -> tuple[str, str]:
    """Take the longest non-empty run of ``chars``; raise if there is none."""
    end = 0
    while end < len(text) and text[end] in chars:
        end += 1
    if end == 0:
        raise ParseError(f"expected one of {chars!r} in {text!r}")
    return text[:end], text[end:]


def _take_not_in(text: str, chars: str) -> tuple[str, str]:
    """Take the longest non-empty run of characters outside ``chars``."""
    end = 0
    while end < len(text) and text[end] not in chars:
        end += 1
    if end == 0:
        raise ParseError(f"expected a character outside {chars!r} in {text!r}")
    return text[:end], text[end:]


def _parse_unsigned(text: str, limit: int) -> int | None:
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value <= limit else None


def parse_formatter(
    formatter: str,
    items: Sequence[FirehoseItemInfo],
    item_type: int,
    item_index: int,
) -> str:
    """Format the item at ``item_index`` according to a printf specifier.

    Raises :class:`ParseError` if the specifier cannot be parsed.
    """
    index = item_index
    precision_value = 0
    if item_type in PRECISION_ITEMS:
        precision_value = items[index].item_size
        index += 1
        if index >= len(items):
            logger.error(
                "Index now greater than messages array. Index: %d. Message Array len: %d",
                index,
                len(items),
            )
            return "Failed to format string due index length"

    message = items[index].message_strings

    # A character specifier applied to a number item: convert the number.
    if formatter.lower().endswith("c") and items[index].item_type in NUMBER_ITEM_TYPES:
        value = _parse_unsigned(items[index].message_strings, _U32_MAX)
        if value is None:
            logger.error(
                "Failed to parse number item to char string: %s",
                items[index].message_strings,
            )
            return "Failed to parse number item to char string"
        message = chr(value & 0xFF)

    left_justify = hashtag = pad_zero = plus_minus = False
    width_index = 1
    for position, char in enumerate(formatter):
        if position == 0:
            continue
        if char == "-":
            left_justify = True
        elif char == "+":
            plus_minus = True
        elif char == "#":
            hashtag = True
        elif char == "0":
            pad_zero = True
        else:
            width_index = position
            break

    remaining = formatter[width_index:]
    digits = _DIGITS.match(remaining)
    width = digits.group(0) if digits else ""
    remaining = remaining[len(width):]

    if remaining.startswith("*"):
        if item_type == DYNAMIC_PRECISION_VALUE and items[index].item_size == 0:
            precision_value = items[index].item_size
            index += 1
            if index >= len(items):
                logger.error(
                    "Index now greater than messages array. Index: %d. Message Array len: %d",
                    index,
                    len(items),
                )
                return "Failed to format precision/dynamic string due index length"
            message = items[index].message_strings
        width = str(precision_value)
        remaining = remaining[1:]

    if remaining.startswith("."):
        _, remaining = _take_in(remaining, ".")
        precision_data, remaining = _take_not_in(remaining, _PRECISION_STOP_CHARS)
        if precision_data != "*":
            value = _parse_unsigned(precision_data, _USIZE_MAX)
            if value is None:
                logger.error("Failed to parse format precision value: %s", precision_data)
            else:
                precision_value = value
        elif precision_value != 0:
            # Dynamic length uses the number of message items.
            precision_value = len(items)

    try:
        length_data, remaining = _take_in(remaining, _LENGTH_CHARS)
    except ParseError:
        length_data, remaining = _take_in(remaining, _TYPE_CHARS)

    type_data = length_data
    if length_data in _LENGTH_VALUES:
        type_data, _ = _take_in(remaining, _TYPE_CHARS)

    # Error codes are reported as numbers, not mapped to error text.
    if type_data in ERROR_TYPES:
        return f"Error code: {message}"

    if width:
        width_value = _parse_unsigned(width, _USIZE_MAX)
        if width_value is None:
            logger.error("Failed to parse format width value: %s", width)
            width_value = 0
        if pad_zero:
            align = format_alignment_left if left_justify else format_alignment_right
        else:
            align = (
                format_alignment_left_space
                if left_justify
                else format_alignment_right_space
            )
        return align(message, width_value, precision_value, type_data, plus_minus, hashtag)

    if left_justify:
        return format_left(message, precision_value, type_data, plus_minus, hashtag)
    return format_right(message, precision_value, type_data, plus_minus, hashtag)


def parse_type_formatter(
    formatter: str,
    items: Sequence[FirehoseItemInfo],
    item_type: int,
    item_index: int,
    decode_object: ObjectDecoder | None = None,
) -> str:
    """Format an item for a specifier with a type annotation, e.g. ``%{public}s``.

    ``decode_object`` is given the annotation (such as ``"%{public"``), the items,
    the item type and the index; a non-empty result is returned as is.
    """
    split = formatter.find("}")
    if split == -1:
        raise ParseError(f"missing closing brace in formatter {formatter!r}")
    format_type, specifier = formatter[:split], formatter[split:]

    if decode_object is not None:
        decoded = decode_object(format_type, items, item_type, item_index)
        if decoded:
            return decoded

    message = parse_formatter(specifier, items, item_type, item_index)
    if "signpost" in format_type:
        message = f"{message} ({parse_signpost_format(format_type)})"
    return message


def parse_signpost_format(signpost_format: str) -> str:
    """Extract signpost metadata from a type annotation.

    Example: ``%{public, signpost.description:begin_time`` gives
    ``signpost.description:begin_time``.
    """
    _, signpost_value = _take_in(signpost_format, "%{")
    parts = signpost_value.split(",")
    if signpost_format.startswith("%{sign"):
        return parts[0]
    if len(parts) < 2:
        raise ParseError(f"no signpost metadata in {signpost_format!r}")
    return parts[1].strip()