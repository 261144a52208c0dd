"""Byte-level helpers shared by the Unified Log parsers."""

from __future__ import annotations

import base64
import logging
from datetime import datetime, timedelta, timezone

logger = logging.getLogger(__name__)

_NULL_BYTE = 0
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ParseError(ValueError):
    """Raised when binary log data cannot be parsed."""


def padding_size(data_size: int, alignment: int) -> int:
    """Return the number of bytes needed to align ``data_size`` to ``alignment``."""
    mask = alignment - 1
    return (alignment - (data_size & mask)) & mask


def padding_size_8(data_size: int) -> int:
    """Return the padding needed for 8-byte alignment."""
    return padding_size(data_size, 8)


def padding_size_four(data_size: int) -> int:
    """Return the padding needed for 4-byte alignment."""
    return padding_size(data_size, 4)


def anticipated_padding_size(items_count: int, items_size: int, alignment: int) -> int:
    """Return the padding that follows ``items_count`` items of ``items_size`` bytes."""
    return padding_size(items_count * items_size, alignment)


def anticipated_padding_size_8(items_count: int, items_size: int) -> int:
    """Return the 8-byte padding that follows ``items_count`` items of ``items_size`` bytes."""
    return anticipated_padding_size(items_count, items_size, 8)


def extract_string_size(data: bytes, message_size: int) -> tuple[str, bytes]:
    """Read a string of ``message_size`` bytes, dropping trailing NUL bytes.

    Returns the string and the remaining data. A size of zero yields ``"(null)"``.
    """
    if message_size == 0:
        return "(null)", data

    if len(data) < message_size:
        try:
            return data.decode("utf-8").rstrip("\0"), b""
        except UnicodeDecodeError as err:
            logger.error("Failed to extract specific string size: %s", err)

    if len(data) < message_size:
        raise ParseError(
            f"need {message_size} bytes for string, only {len(data)} available"
        )

    chunk, rest = data[:message_size], data[message_size:]
    try:
        return chunk.decode("utf-8").rstrip("\0"), rest
    except UnicodeDecodeError as err:
        logger.error("Failed to get specific string: %s", err)
    return "Could not find path string", rest


def _split_at_null(data: bytes) -> tuple[bytes, bytes]:
    end = data.find(_NULL_BYTE)
    if end == -1:
        return data, b""
    return data[:end], data[end + 1 :]


def cstring(data: bytes) -> tuple[str, bytes]:
    """Read a UTF-8 string up to a NUL byte or the end of data, consuming the NUL."""
    part, rest = _split_at_null(data)
    try:
        return part.decode("utf-8"), rest
    except UnicodeDecodeError as err:
        raise ParseError(f"invalid UTF-8 string: {err}") from err


def non_empty_cstring(data: bytes) -> tuple[str, bytes]:
    """Like :func:`cstring`, but an empty string is an error."""
    text, rest = cstring(data)
    if not text:
        raise ParseError("expected a non-empty string")
    return text, rest


def extract_string(data: bytes) -> tuple[str, bytes]:
    """Extract a string that may end in NUL bytes.

    Returns the string and the remaining data; the terminating NUL is not consumed.
    """
    if not data:
        logger.error("Cannot extract string. Empty input.")
        return "Cannot extract string. Empty input.", data

    if data[-1] != _NULL_BYTE:
        try:
            return data.decode("utf-8"), b""
        except UnicodeDecodeError as err:
            logger.warning("Failed to extract full string: %s", err)
            return "Could not extract string", b""

    end = data.find(_NULL_BYTE)
    part, rest = data[:end], data[end:]
    try:
        return part.decode("utf-8"), rest
    except UnicodeDecodeError as err:
        logger.warning("Failed to get string: %s", err)
    return "Could not extract string", rest


def clean_uuid(uuid_format: str) -> str:
    """Strip commas, brackets and spaces from a formatted UUID."""
    return uuid_format.translate(str.maketrans("", "", ",[] "))


def encode_standard(data: bytes) -> str:
    """Base64-encode with the standard alphabet and padding."""
    return base64.b64encode(data).decode("ascii")


def decode_standard(data: str) -> bytes:
    """Base64-decode with the standard alphabet; raises ``ValueError`` on bad input."""
    return base64.b64decode(data, validate=True)


def unixepoch_to_iso(timestamp: int) -> str:
    """Format nanoseconds since the Unix epoch as RFC 3339 with nanosecond precision."""
    seconds, nanos = divmod(int(timestamp), 1_000_000_000)
    moment = _EPOCH + timedelta(seconds=seconds)
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{nanos:09d}Z"