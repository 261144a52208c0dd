"""The 16-byte preamble that starts every chunk of a tracev3 file."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .util import ParseError

_PREAMBLE = struct.Struct("<IIQ")


@dataclass(frozen=True)
class LogPreamble:
    """Chunk tag, sub tag and data size of a Unified Log chunk."""

    chunk_tag: int
    chunk_sub_tag: int
    chunk_data_size: int


def parse_preamble(data: bytes) -> tuple[LogPreamble, bytes]:
    """Read a chunk preamble and return it with the data that follows it."""
    if len(data) < _PREAMBLE.size:
        raise ParseError(
            f"need {_PREAMBLE.size} bytes for chunk preamble, got {len(data)}"
        )
    tag, sub_tag, size = _PREAMBLE.unpack_from(data)
    return LogPreamble(tag, sub_tag, size), data[_PREAMBLE.size :]


def detect_preamble(data: bytes) -> tuple[LogPreamble, bytes]:
    """Read a chunk preamble without consuming the data."""
    preamble, _ = parse_preamble(data)
    return preamble, data