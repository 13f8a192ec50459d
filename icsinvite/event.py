"""
Turns the text of a single VEVENT, typically lifted out of an emailed
invitation, into a :class:`ParsedEvent`.

Only the properties needed to put the event into a calendar are
considered: DTSTART, DTEND, SUMMARY, DESCRIPTION, LOCATION, URL, RRULE
and EXDATE.  Everything else is ignored.

Basic usage::

    from icsinvite import parse_event

    event = parse_event(ics_text, tz="Europe/Oslo")
    print(event.summary, event.start_date, event.end_date)
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from datetime import timedelta
from datetime import tzinfo
from typing import Any
from typing import List
from typing import Optional
from typing import Set
from typing import Tuple
from typing import Union
from urllib.parse import urlsplit

from icsinvite.config import get_default_timezone
from icsinvite.lib import error
from icsinvite.lib.dates import DateValue
from icsinvite.lib.dates import end_of_day
from icsinvite.lib.dates import parse_date_property
from icsinvite.lib.recurrence import DateutilRecurrenceEngine
from icsinvite.lib.recurrence import RecurrenceRuleEngine
from icsinvite.lib.vcal import property_name
from icsinvite.lib.vcal import unescape_text
from icsinvite.lib.vcal import unfold_lines
from icsinvite.lib.vcal import value_offset

log = logging.getLogger("icsinvite")

## property name -> attribute on the draft
TEXT_PROPERTIES = {
    "SUMMARY": "summary",
    "DESCRIPTION": "notes",
    "LOCATION": "location",
}

_INVALID_URL_CHARS = re.compile(r"[\s\x00-\x1f\x7f]")


@dataclass(frozen=True)
class ParsedEvent:
    """
    The event as it should be handed over to a calendar store.

    ``end_date`` is always set - if the invitation had no DTEND it is
    derived from the start.  ``recurrence_rules`` and
    ``exclusion_dates`` are None rather than empty.
    """

    start_date: datetime
    end_date: datetime
    summary: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None
    url: Optional[str] = None
    recurrence_rules: Optional[Tuple[Any, ...]] = None
    exclusion_dates: Optional[Tuple[datetime, ...]] = None
    is_all_day: bool = False

    @property
    def duration(self) -> timedelta:
        return self.end_date - self.start_date

    @property
    def is_recurring(self) -> bool:
        return bool(self.recurrence_rules)


@dataclass(frozen=True)
class ParseResult:
    """Either an event or the error that stopped the parsing, never both"""

    event: Optional[ParsedEvent] = None
    error: Optional[error.RFC5545Error] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_url(text: Optional[str]) -> Optional[str]:
    """Returns the URL if it looks like a usable absolute URL, otherwise None"""
    if not text or _INVALID_URL_CHARS.search(text):
        return None
    try:
        parts = urlsplit(text)
    except ValueError:
        return None
    if not parts.scheme:
        return None
    return text


@dataclass
class _EventDraft:
    """Mutable accumulator, only ever seen by parse_event"""

    start: Optional[DateValue] = None
    end: Optional[DateValue] = None
    summary: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None
    url: Optional[str] = None
    recurrence_rules: List[Any] = field(default_factory=list)
    exclusion_dates: List[datetime] = field(default_factory=list)
    seen: Set[str] = field(default_factory=set)
    ignored: Set[str] = field(default_factory=set)

    def mark_seen(self, name: str) -> None:
        ## Last one wins, but it's worth a warning
        if name in self.seen:
            error.weirdness(f"{name} given more than once, keeping the last one")
        self.seen.add(name)

    def finalize(self, tz: tzinfo) -> ParsedEvent:
        if self.start is None:
            raise error.MissingStartDate()

        start_has_time = self.start.has_time_component
        end_has_time = self.end is not None and self.end.has_time_component

        if self.end is not None:
            end_date = self.end.timestamp
        elif start_has_time:
            ## A DATE-TIME DTSTART without DTEND ends at the same moment
            ## it starts (RFC5545 section 3.6.1)
            end_date = self.start.timestamp
        else:
            ## A DATE DTSTART without DTEND lasts for the rest of that day
            end_date = end_of_day(self.start.timestamp, tz)
            log.debug(f"no DTEND, derived {end_date.isoformat()} from DTSTART")

        if self.ignored:
            log.debug(f"ignored properties: {', '.join(sorted(self.ignored))}")

        return ParsedEvent(
            start_date=self.start.timestamp,
            end_date=end_date,
            summary=self.summary,
            notes=self.notes,
            location=self.location,
            url=self.url,
            recurrence_rules=tuple(self.recurrence_rules) or None,
            exclusion_dates=tuple(self.exclusion_dates) or None,
            is_all_day=not (start_has_time or end_has_time),
        )


def _parse_exdate(line: str, tz: tzinfo) -> List[datetime]:
    ## EXDATE may carry a comma separated list of dates
    offset = value_offset(line)
    head, values = line[:offset], line[offset:]
    return [parse_date_property(head + value, tz).timestamp for value in values.split(",")]


def parse_event(
    text: Union[str, bytes],
    tz: Optional[Union[str, tzinfo]] = None,
    recurrence_engine: Optional[RecurrenceRuleEngine] = None,
) -> ParsedEvent:
    """Parses the properties of one VEVENT.

    Args:
        text: the VEVENT content lines, CRLF separated and possibly folded.
          BEGIN/END lines and unknown properties are ignored.
        tz: timezone (tzinfo or IANA name) for floating times and all-day
          dates.  Defaults to the configured timezone, see
          :func:`icsinvite.config.get_default_timezone`.
        recurrence_engine: parses RRULE lines, defaults to
          :class:`DateutilRecurrenceEngine`

    Returns:
        ParsedEvent

    Raises:
        MissingStartDate: there is no DTSTART
        InvalidDateFormat: a DTSTART, DTEND or EXDATE could not be parsed
        InvalidRecurrenceRule: the recurrence engine refused an RRULE
    """
    tz = get_default_timezone(tz)
    if recurrence_engine is None:
        recurrence_engine = DateutilRecurrenceEngine()

    draft = _EventDraft()
    for line in unfold_lines(text):
        name = property_name(line)
        if name == "DTSTART":
            draft.mark_seen(name)
            draft.start = parse_date_property(line, tz)
        elif name == "DTEND":
            draft.mark_seen(name)
            draft.end = parse_date_property(line, tz)
        elif name == "URL":
            draft.mark_seen(name)
            text_value = unescape_text(line, value_offset(line))
            if text_value is not None:
                draft.url = parse_url(text_value)
                if draft.url is None:
                    log.debug(f"dropping invalid URL {text_value!r}")
        elif name in TEXT_PROPERTIES:
            draft.mark_seen(name)
            setattr(draft, TEXT_PROPERTIES[name], unescape_text(line, value_offset(line)))
        elif line.startswith("RRULE:"):
            draft.recurrence_rules.append(recurrence_engine.parse(line))
        elif name == "EXDATE":
            draft.exclusion_dates.extend(_parse_exdate(line, tz))
        elif line:
            draft.ignored.add(name)

    return draft.finalize(tz)


def try_parse_event(
    text: Union[str, bytes],
    tz: Optional[Union[str, tzinfo]] = None,
    recurrence_engine: Optional[RecurrenceRuleEngine] = None,
) -> ParseResult:
    """Like :func:`parse_event`, but returns a :class:`ParseResult`
    instead of raising"""
    try:
        return ParseResult(event=parse_event(text, tz, recurrence_engine))
    except error.RFC5545Error as e:
        log.debug(f"could not parse event: {e}")
        return ParseResult(error=e)
