"""Parser for timesync files and log timestamp calculation."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from fractions import Fraction

from .util import ParseError

logger = logging.getLogger(__name__)

BOOT_SIGNATURE = 0xBBB0
RECORD_SIGNATURE = 0x207354

# signature, header size, unknown, uuid (16 bytes), numerator, denominator,
# boot time, timezone offset, daylight savings
_BOOT = struct.Struct("<HHI16sIIqII")
# signature, flags, kernel time, walltime, timezone, daylight savings
_RECORD = struct.Struct("<IIQqII")


@dataclass
class Timesync:
    """A timesync record; times are in UTC."""

    signature: int = 0
    unknown_flags: int = 0
    kernel_time: int = 0  # Mach continuous timestamp
    walltime: int = 0  # nanoseconds since the Unix epoch
    timezone: int = 0
    daylight_savings: int = 0  # 0 is no DST, 1 is DST


@dataclass
class TimesyncBoot:
    """A timesync boot header and the records that follow it."""

    signature: int = 0
    header_size: int = 0
    unknown: int = 0
    boot_uuid: str = ""
    timebase_numerator: int = 0
    timebase_denominator: int = 0
    boot_time: int = 0  # nanoseconds since the Unix epoch
    timezone_offset_mins: int = 0
    daylight_savings: int = 0  # 0 is no DST, 1 is DST
    timesync: list[Timesync] = field(default_factory=list)


def parse_timesync_boot(data: bytes) -> tuple[TimesyncBoot, bytes]:
    """Parse a timesync boot header and return it with the remaining data."""
    if len(data) < 2:
        raise ParseError("timesync data too short for boot signature")
    (signature,) = struct.unpack_from("<H", data)
    if signature != BOOT_SIGNATURE:
        logger.error(
            "Incorrect Timesync boot header signature. Expected %d. Got: %d",
            BOOT_SIGNATURE,
            signature,
        )
        raise ParseError(
            f"incorrect timesync boot signature: expected {BOOT_SIGNATURE:#x}, "
            f"got {signature:#x}"
        )
    if len(data) < _BOOT.size:
        raise ParseError("timesync data too short for boot header")

    (
        _,
        header_size,
        unknown,
        uuid_bytes,
        numerator,
        denominator,
        boot_time,
        tz_offset,
        dst,
    ) = _BOOT.unpack_from(data)
    boot = TimesyncBoot(
        signature=signature,
        header_size=header_size,
        unknown=unknown,
        boot_uuid=f"{int.from_bytes(uuid_bytes, 'big'):X}",
        timebase_numerator=numerator,
        timebase_denominator=denominator,
        boot_time=boot_time,
        timezone_offset_mins=tz_offset,
        daylight_savings=dst,
    )
    return boot, data[_BOOT.size :]


def parse_timesync(data: bytes) -> tuple[Timesync, bytes]:
    """Parse a single timesync record and return it with the remaining data."""
    if len(data) < 4:
        raise ParseError("timesync data too short for record signature")
    (signature,) = struct.unpack_from("<I", data)
    if signature != RECORD_SIGNATURE:
        logger.error(
            "Incorrect Timesync record header signature. Expected %d. Got: %d",
            RECORD_SIGNATURE,
            signature,
        )
        raise ParseError(
            f"incorrect timesync record signature: expected {RECORD_SIGNATURE:#x}, "
            f"got {signature:#x}"
        )
    if len(data) < _RECORD.size:
        raise ParseError("timesync data too short for record")

    _, flags, kernel_time, walltime, tz, dst = _RECORD.unpack_from(data)
    record = Timesync(
        signature=signature,
        unknown_flags=flags,
        kernel_time=kernel_time,
        walltime=walltime,
        timezone=tz,
        daylight_savings=dst,
    )
    return record, data[_RECORD.size :]


def parse_timesync_data(data: bytes) -> list[TimesyncBoot]:
    """Parse the contents of a timesync file into its boot sections."""
    boots: list[TimesyncBoot] = []
    current = TimesyncBoot()
    remaining = bytes(data)

    while remaining:
        if len(remaining) < 4:
            raise ParseError("timesync data too short for signature")
        (signature,) = struct.unpack_from("<I", remaining)
        if signature == RECORD_SIGNATURE:
            record, remaining = parse_timesync(remaining)
            current.timesync.append(record)
        else:
            if current.signature != 0:
                boots.append(current)
            current, remaining = parse_timesync_boot(remaining)
    boots.append(current)
    return boots


def get_timestamp(
    timesync_data: list[TimesyncBoot],
    boot_uuid: str,
    firehose_log_delta_time: int,
    firehose_preamble_time: int,
) -> float:
    """Return the timestamp of a log entry in nanoseconds since the Unix epoch.

    The continuous time of the entry is offset from the closest preceding
    timesync record of the matching boot. A preamble time of zero makes the
    boot time the base. Apple Silicon timebases (125/3) are scaled to
    nanoseconds.
    """
    continuous_time = 0
    walltime = 0
    larger_time = False
    timebase_adjustment = 1.0

    for boot in timesync_data:
        if boot.boot_uuid != boot_uuid:
            continue
        if boot.timebase_numerator == 125 and boot.timebase_denominator == 3:
            timebase_adjustment = 125.0 / 3.0

        if firehose_preamble_time == 0:
            continuous_time = 0
            walltime = boot.boot_time

        for record in boot.timesync:
            if record.kernel_time > firehose_log_delta_time:
                if continuous_time == 0 and walltime == 0:
                    continuous_time = record.kernel_time
                    walltime = record.walltime
                larger_time = True
                break
            continuous_time = record.kernel_time
            walltime = record.walltime

        if larger_time:
            break

    offset = -float(continuous_time) * timebase_adjustment
    # Fused multiply-add: a single rounding of delta * adjustment + offset.
    fused = Fraction(float(firehose_log_delta_time)) * Fraction(
        timebase_adjustment
    ) + Fraction(offset)
    return float(fused) + float(walltime)