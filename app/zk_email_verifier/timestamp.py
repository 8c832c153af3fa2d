# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# timestamp.py

"""
Parse the value of an email `Date:` header into Unix milliseconds.

Accepted shape (RFC 822 style):

    "<Weekday>, <Day> <Mon> <Year> <HH>:<MM>:<SS> <+-HHMM>"

The weekday is optional and not cross-checked against the date. Everything
is plain integer arithmetic over the proleptic Gregorian calendar, so results
never depend on the host's timezone database.
"""

import re

from zk_email_verifier.constants import (
    DAYS_IN_MONTH,
    EPOCH_YEAR,
    MAX_YEAR,
    MONTHS,
    SECONDS_PER_DAY,
)
from zk_email_verifier.errors import InvalidTimestamp

_DIGITS = re.compile(r"[0-9]+")
_OFFSET = re.compile(r"([+-])([0-9]{2})([0-9]{2})")


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_IN_MONTH[month - 1]


def _uint(token: str, what: str, width: int = 2) -> int:
    if _DIGITS.fullmatch(token) is None or len(token) > width:
        raise InvalidTimestamp(f"{what} is not a number of at most {width} digits")
    return int(token)


def days_since_epoch(year: int, month: int, day: int) -> int:
    """
    Count whole days from 1970-01-01 to the given date.

    Args:
        year: Year, at least 1970.
        month: Month, 1..12.
        day: Day of month, already validated against `days_in_month`.

    Returns:
        Number of days elapsed since the epoch.
    """
    days = 0
    for y in range(EPOCH_YEAR, year):
        days += 366 if is_leap_year(y) else 365
    for m in range(1, month):
        days += days_in_month(year, m)
    return days + day - 1


def parse_email_timestamp_strict(s: str) -> int:
    """
    Parse a `Date:` header value, raising on any failure.

    Args:
        s: Header value such as "Sun, 30 Nov 2025 17:37:38 +0900".

    Returns:
        Milliseconds since the Unix epoch (UTC).

    Raises:
        InvalidTimestamp: If the value is malformed, out of range, or before
            the epoch once the offset is applied.
    """
    trimmed = s.strip()
    _, comma, rest = trimmed.partition(",")
    after_comma = rest.lstrip() if comma else trimmed

    parts = after_comma.split()
    if len(parts) < 5:
        raise InvalidTimestamp(f"expected at least 5 fields, got {len(parts)}")

    day = _uint(parts[0], "day")
    month = MONTHS.get(parts[1])
    if month is None:
        raise InvalidTimestamp(f"unknown month {parts[1]!r}")
    year = _uint(parts[2], "year", width=len(str(MAX_YEAR)))

    time_parts = parts[3].split(":")
    if len(time_parts) != 3:
        raise InvalidTimestamp(f"time must be HH:MM:SS, got {parts[3]!r}")
    hour = _uint(time_parts[0], "hour")
    minute = _uint(time_parts[1], "minute")
    second = _uint(time_parts[2], "second")
    if hour > 23 or minute > 59 or second > 60:
        raise InvalidTimestamp(f"time out of range: {parts[3]!r}")

    offset = _OFFSET.fullmatch(parts[4])
    if offset is None:
        raise InvalidTimestamp(f"offset must be +HHMM or -HHMM, got {parts[4]!r}")
    sign = 1 if offset.group(1) == "+" else -1
    offset_hours = int(offset.group(2))
    offset_minutes = int(offset.group(3))
    if offset_minutes > 59:
        raise InvalidTimestamp(f"offset minutes out of range: {parts[4]!r}")
    offset_secs = sign * (offset_hours * 3600 + offset_minutes * 60)

    if year < EPOCH_YEAR:
        raise InvalidTimestamp(f"year {year} is before {EPOCH_YEAR}")
    if day == 0 or day > days_in_month(year, month):
        raise InvalidTimestamp(f"day {day} out of range for {parts[1]} {year}")

    seconds_local = (
        days_since_epoch(year, month, day) * SECONDS_PER_DAY
        + hour * 3600
        + minute * 60
        + second
    )

    # local = UTC + offset
    seconds_utc = seconds_local - offset_secs
    if seconds_utc < 0:
        raise InvalidTimestamp("timestamp is before the Unix epoch")

    return seconds_utc * 1000


def parse_email_timestamp_to_unix_ms(s: str) -> int | None:
    """
    Parse a `Date:` header value into Unix milliseconds.

    Args:
        s: Header value such as "Sun, 30 Nov 2025 17:37:38 +0900".

    Returns:
        Milliseconds since the Unix epoch, or None if the value does not parse.
    """
    try:
        return parse_email_timestamp_strict(s)
    except InvalidTimestamp:
        return None
