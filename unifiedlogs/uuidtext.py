"""Parser for UUIDText files, which hold base log format strings."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field

from .util import ParseError

logger = logging.getLogger(__name__)

UUIDTEXT_SIGNATURE = 0x66778899
_HEADER = struct.Struct("<IIII")
_ENTRY = struct.Struct("<II")


@dataclass
class UUIDTextEntry:
    """Location of one string range within a UUIDText file."""

    range_start_offset: int = 0
    entry_size: int = 0


@dataclass
class UUIDText:
    """A parsed UUIDText file."""

    uuid: str = ""
    signature: int = 0
    unknown_major_version: int = 0
    unknown_minor_version: int = 0
    number_entries: int = 0
    entry_descriptors: list[UUIDTextEntry] = field(default_factory=list)
    footer_data: bytes = b""


def parse_uuidtext(data: bytes) -> UUIDText:
    """Parse the contents of a UUIDText file."""
    if len(data) < 4:
        raise ParseError("UUIDText data too short for signature")
    (signature,) = struct.unpack_from("<I", data)
    if signature != UUIDTEXT_SIGNATURE:
        logger.error(
            "Incorrect UUIDText header signature. Expected %d. Got: %d",
            UUIDTEXT_SIGNATURE,
            signature,
        )
        raise ParseError(
            f"incorrect UUIDText signature: expected {UUIDTEXT_SIGNATURE:#x}, "
            f"got {signature:#x}"
        )
    if len(data) < _HEADER.size:
        raise ParseError("UUIDText data too short for header")

    _, major, minor, count = _HEADER.unpack_from(data)
    offset = _HEADER.size
    entries_end = offset + count * _ENTRY.size
    if len(data) < entries_end:
        raise ParseError(
            f"UUIDText data too short for {count} entry descriptors"
        )
    entries = [
        UUIDTextEntry(start, size)
        for start, size in _ENTRY.iter_unpack(data[offset:entries_end])
    ]
    return UUIDText(
        signature=signature,
        unknown_major_version=major,
        unknown_minor_version=minor,
        number_entries=count,
        entry_descriptors=entries,
        footer_data=bytes(data[entries_end:]),
    )