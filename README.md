# unifiedlogs

A pure-Python library for reading some of the binary pieces of the macOS
Unified Log and for rendering the printf-style values recorded with log
entries. It uses only the standard library.

## Modules

- `unifiedlogs.util`: alignment padding (`padding_size`, `padding_size_8`,
  `padding_size_four`, `anticipated_padding_size`,
  `anticipated_padding_size_8`), string extraction from bytes (`cstring`,
  `non_empty_cstring`, `extract_string`, `extract_string_size`),
  `clean_uuid`, Base64 helpers (`encode_standard`, `decode_standard`) and
  `unixepoch_to_iso`, which turns nanoseconds since the Unix epoch into an
  RFC 3339 string with nanosecond precision. It also defines `ParseError`,
  a `ValueError` subclass raised when binary data does not fit the expected
  layout.
- `unifiedlogs.preamble`: the 16-byte chunk preamble (`LogPreamble` with
  `chunk_tag`, `chunk_sub_tag` and `chunk_data_size`). `parse_preamble`
  returns the preamble and the data after it; `detect_preamble` returns the
  preamble and the data unchanged.
- `unifiedlogs.uuidtext`: UUIDText files. `parse_uuidtext` returns a
  `UUIDText` holding the version fields, the `UUIDTextEntry` descriptors and
  the footer bytes.
- `unifiedlogs.timesync`: `.timesync` files. `parse_timesync_data` returns a
  list of `TimesyncBoot` sections, each with its `Timesync` records;
  `parse_timesync_boot` and `parse_timesync` read single headers and records.
  `get_timestamp` computes a log entry's time in nanoseconds since the Unix
  epoch, scaling Apple Silicon timebases (125/3) to nanoseconds.
- `unifiedlogs.printf`: rendering of one value with a given width,
  precision, type character and flags (`format_alignment_left`,
  `format_alignment_right`, `format_alignment_left_space`,
  `format_alignment_right_space`, `format_left`, `format_right`), plus
  `parse_int` and `parse_float`; the latter reinterprets a 64-bit integer as
  an IEEE 754 double.
- `unifiedlogs.formatter`: parsing of a single format specifier and applying
  it to the recorded values (`FirehoseItemInfo`, `parse_formatter`,
  `parse_type_formatter`, `parse_signpost_format`).

## Examples

Timesync and UUIDText files:

```python
from unifiedlogs.timesync import parse_timesync_data, get_timestamp
from unifiedlogs.uuidtext import parse_uuidtext
from unifiedlogs.util import unixepoch_to_iso

with open("0000000000000002.timesync", "rb") as handle:
    boots = parse_timesync_data(handle.read())

nanoseconds = get_timestamp(boots, boots[0].boot_uuid, 2818326118, 1)
print(unixepoch_to_iso(int(nanoseconds)))

with open("1FE459BBDC3E19BBF82D58415A2AE9", "rb") as handle:
    strings = parse_uuidtext(handle.read())
print(strings.number_entries, len(strings.footer_data))
```

Single format specifiers:

```python
from unifiedlogs.formatter import (
    FirehoseItemInfo,
    parse_formatter,
    parse_type_formatter,
)

items = [FirehoseItemInfo(message_strings="2", item_type=2, item_size=2)]
print(parse_formatter("%+04d", items, items[0].item_type, 0))   # +002

items = [FirehoseItemInfo(message_strings="1", item_type=2, item_size=4)]
print(parse_type_formatter(
    "%{public, signpost.description:begin_time}llu", items, items[0].item_type, 0
))  # 1 (signpost.description:begin_time)
```

`parse_type_formatter` accepts an optional `decode_object` callable. It is
given the annotation (for example `"%{public"`), the items, the item type and
the index; if it returns a non-empty string, that string is the result.

Malformed binary data or an unparseable specifier raises
`unifiedlogs.util.ParseError`.

## What this package does not do

- It does not parse `.tracev3` files beyond their chunk preambles, and it
  does not decode firehose, catalog, chunkset or statedump chunks.
- It does not rebuild a whole log message from its format string; it
  formats one specifier at a time.
- It does not read log files from a directory or a log archive, and it has
  no command-line tool.

## Tests

```
pip install .[test]
pytest
```