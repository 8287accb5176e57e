"""Parsing and formatting of cue timestamps (HH:MM:SS.mmm and MM:SS.mmm)."""

from __future__ import annotations

import math

from vidscribe.errors import MalformedTimestamp


def _is_ascii_digits(field: str) -> bool:
    return field.isascii() and field.isdigit()


def _parse_int_field(field: str, text: str) -> int:
    if not _is_ascii_digits(field):
        raise MalformedTimestamp(f"Invalid timestamp field {field!r} in {text!r}")
    return int(field)


def _parse_seconds_field(field: str, text: str) -> float:
    whole, _, frac = field.partition(".")
    if not _is_ascii_digits(whole) or (frac and not _is_ascii_digits(frac)):
        raise MalformedTimestamp(f"Invalid seconds field {field!r} in {text!r}")
    return float(field)


def parse_timestamp(text: str) -> float:
    """Parse ``H:MM:SS.mmm`` or ``MM:SS.mmm`` into seconds.

    Hours may have any number of digits. Raises ``MalformedTimestamp`` if the
    text has neither two nor three colon-separated fields or a field is not a
    non-negative number.
    """
    fields = text.strip().split(":")
    if len(fields) == 3:
        hours = _parse_int_field(fields[0], text)
        minutes = _parse_int_field(fields[1], text)
    elif len(fields) == 2:
        hours = 0
        minutes = _parse_int_field(fields[0], text)
    else:
        raise MalformedTimestamp(f"Expected 2 or 3 fields in timestamp {text!r}")
    seconds = _parse_seconds_field(fields[-1], text)
    return hours * 3600 + minutes * 60 + seconds


def format_timestamp(
    seconds: float,
    precision: int = 3,
    *,
    hour_width: int = 2,
    separator: str = ".",
) -> str:
    """Format seconds as ``HH:MM:SS.fff`` with ``precision`` fractional digits.

    The value is rounded (half up) at the chosen precision before being split
    into fields, so 1.996 at precision 2 becomes ``00:00:02.00``.
    """
    scale = 10**precision
    units = math.floor(max(0.0, seconds) * scale + 0.5)
    whole, frac = divmod(units, scale)
    m, s = divmod(whole, 60)
    h, m = divmod(m, 60)
    out = f"{h:0{hour_width}d}:{m:02d}:{s:02d}"
    if precision > 0:
        out += f"{separator}{frac:0{precision}d}"
    return out
