"""
Parsing of DATE and DATE-TIME valued property lines (DTSTART, DTEND,
EXDATE), ref RFC5545 sections 3.3.4 and 3.3.5.

Three DATE-TIME forms exist:

* UTC time, ``19980119T070000Z``
* local time with a TZID parameter, ``TZID=America/New_York:19980119T020000``
* floating time, ``19980118T230000`` - interpreted in the timezone given
  by the caller

A DATE (``VALUE=DATE:19971102``) has no time of day.  It is anchored at
noon in the caller's timezone, so that converting it to another zone
does not move it to another calendar date.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from datetime import datetime
from datetime import timezone
from datetime import tzinfo
from typing import Dict
from typing import Optional
from typing import Sequence
from typing import Tuple
from typing import Union
from zoneinfo import ZoneInfo
from zoneinfo import ZoneInfoNotFoundError

from icsinvite.lib import error

log = logging.getLogger("icsinvite")

DATE_LAYOUT: Tuple[Union[int, str], ...] = (4, 2, 2)
DATE_TIME_LAYOUT: Tuple[Union[int, str], ...] = (4, 2, 2, "T", 2, 2, 2)


@dataclass(frozen=True)
class DateValue:
    """The outcome of a successful parse of one date property.

    Attributes:
        timestamp: timezone-aware point in time
        has_time_component: False if the source was a bare DATE
    """

    timestamp: datetime
    has_time_component: bool

    @property
    def date(self) -> date:
        return self.timestamp.date()


def scan_fixed_width(
    text: str, layout: Sequence[Union[int, str]]
) -> Optional[Tuple[int, ...]]:
    """
    Slices ``text`` according to ``layout``: an int is a field of
    exactly that many ASCII digits, a str is a literal that must be
    present.  The whole text must be consumed.

    Returns the numeric fields, or None if the text has another shape.
    """
    fields = []
    pos = 0
    for item in layout:
        if isinstance(item, str):
            if text[pos : pos + len(item)] != item:
                return None
            pos += len(item)
            continue
        chunk = text[pos : pos + item]
        if len(chunk) != item or not (chunk.isascii() and chunk.isdigit()):
            return None
        fields.append(int(chunk))
        pos += item
    if pos != len(text):
        return None
    return tuple(fields)


def split_property_line(line: str) -> Tuple[str, Dict[str, str]]:
    """
    Splits ``NAME;KEY=VALUE;...:VALUE`` into the value and a dict of
    parameters.  Later duplicates of a parameter win.
    """
    value = None
    params: Dict[str, str] = {}
    for segment in re.split("[;:]", line):
        key_value = segment.split("=", 1)
        if len(key_value) == 1:
            value = key_value[0]
        else:
            params[key_value[0]] = key_value[1]
    if value is None and not params:
        value = line
    return value or "", params


def resolve_timezone(name: str) -> tzinfo:
    """Looks up a timezone by its IANA identifier, i.e. ``Europe/Oslo``"""
    name = name.strip('"')
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise error.InvalidDateFormat(reason=f"unknown TZID {name!r}") from e


def parse_date_property(line: str, tz: tzinfo) -> DateValue:
    """Parses a DTSTART, DTEND or EXDATE property line.

    Args:
        line: the unfolded content line, parameters included
        tz: timezone for floating times and for the noon anchor of dates

    Returns:
        DateValue

    Raises:
        InvalidDateFormat: for any kind of failure
    """
    date_str, params = split_property_line(line)

    if params.get("VALUE") == "DATE":
        fields = scan_fixed_width(date_str, DATE_LAYOUT)
        if fields is None:
            raise error.InvalidDateFormat(line, f"expected YYYYMMDD, got {date_str!r}")
        year, month, day = fields
        return DateValue(_combine(line, tz, year, month, day, 12), False)

    zone: Optional[tzinfo] = None
    if "TZID" in params:
        try:
            zone = resolve_timezone(params["TZID"])
        except error.InvalidDateFormat as e:
            e.line = line
            raise

    if date_str.endswith("Z"):
        if zone is not None:
            raise error.InvalidDateFormat(line, "both a TZID and the UTC marker Z given")
        zone = timezone.utc
        date_str = date_str[:-1]

    if zone is None:
        zone = tz

    fields = scan_fixed_width(date_str, DATE_TIME_LAYOUT)
    if fields is None:
        raise error.InvalidDateFormat(line, f"expected YYYYMMDDTHHMMSS, got {date_str!r}")
    return DateValue(_combine(line, zone, *fields), True)


def _combine(
    line: str,
    zone: tzinfo,
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=zone)
    except ValueError as e:
        raise error.InvalidDateFormat(line, str(e)) from e


def end_of_day(timestamp: datetime, tz: tzinfo) -> datetime:
    """
    23:59:59 wall clock time in ``tz`` on the calendar date ``timestamp``
    falls on in ``tz``.  Built from the date fields rather than by adding
    seconds, so it holds on days with a DST transition.
    """
    day = timestamp.astimezone(tz).date()
    return datetime(day.year, day.month, day.day, 23, 59, 59, tzinfo=tz)
