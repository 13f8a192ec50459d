"""
Hands a :class:`ParsedEvent` over to the icalendar library, so that it
can be saved to a calendar store (i.e. through ``caldav``'s
``calendar.save_event``).
"""
import datetime
import uuid
from datetime import timedelta

import icalendar

from icsinvite.event import ParsedEvent


def to_icalendar_event(event: ParsedEvent) -> icalendar.Event:
    """
    Builds an icalendar VEVENT component out of the parsed event.

    All-day events are written with DATE values.  The derived end of an
    all-day event (23:59:59 on the start date) becomes the next day, as
    DTEND is non-inclusive.

    Recurrence rule handles are added as they are, which works out of
    the box for the default recurrence engine.
    """
    component = icalendar.Event()
    if event.summary is not None:
        component.add("summary", event.summary)

    if event.is_all_day:
        end = event.end_date.date()
        if event.end_date.time() == datetime.time(23, 59, 59):
            end += timedelta(days=1)
        component.add("dtstart", event.start_date.date())
        component.add("dtend", end)
    else:
        component.add("dtstart", event.start_date)
        component.add("dtend", event.end_date)

    if event.notes is not None:
        component.add("description", event.notes)
    if event.location is not None:
        component.add("location", event.location)
    if event.url is not None:
        component.add("url", event.url)

    for rule in event.recurrence_rules or ():
        component.add("rrule", rule)

    if event.exclusion_dates:
        if event.is_all_day:
            component.add("exdate", [x.date() for x in event.exclusion_dates])
        else:
            component.add("exdate", list(event.exclusion_dates))

    return component


## sorry for being english-language-euro-centric ... fits rather perfectly as default language
def to_ical(event: ParsedEvent, language: str = "en_DK") -> str:
    """The event as a complete VCALENDAR text, ready for a calendar server"""
    calendar = icalendar.Calendar()
    calendar.add("prodid", "-//icsinvite//icsinvite//" + language)
    calendar.add("version", "2.0")

    component = to_icalendar_event(event)
    component.add("dtstamp", datetime.datetime.now(tz=datetime.timezone.utc))
    component.add("uid", str(uuid.uuid1()))
    calendar.add_component(component)

    return calendar.to_ical().decode("utf-8")
