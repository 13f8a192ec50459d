"""
RRULE handling.  Expanding a rule into occurrences is left to whatever
consumes the parsed event - all we do here is turn the rule text into a
rule object, or refuse it.
"""
from __future__ import annotations

import logging
from typing import Any
from typing import Protocol

import icalendar
from dateutil.rrule import rrulestr

from icsinvite.lib import error

log = logging.getLogger("icsinvite")


class RecurrenceRuleEngine(Protocol):
    """Anything that can turn an ``RRULE:...`` line into a rule handle."""

    def parse(self, line: str) -> Any:
        """Returns an opaque rule handle, or raises InvalidRecurrenceRule"""
        ...


class DateutilRecurrenceEngine:
    """
    The default engine.  The rule handle is an :class:`icalendar.vRecur`,
    which can be added straight to an :class:`icalendar.Event`.  Since
    icalendar is very lenient when parsing a rule, the rule is also fed
    through dateutil, which will refuse unknown rule parts, invalid
    values and rules without a FREQ.
    """

    def parse(self, line: str) -> icalendar.vRecur:
        value = line[len("RRULE:") :] if line.startswith("RRULE:") else line
        if not value:
            raise error.InvalidRecurrenceRule(line, "empty recurrence rule")
        try:
            rrule = icalendar.vRecur.from_ical(value)
            ## ignoretz, as the rule is validated without any DTSTART
            rrulestr(value, ignoretz=True)
        except (ValueError, TypeError, KeyError) as e:
            log.debug(f"refusing recurrence rule {value!r}: {e}")
            raise error.InvalidRecurrenceRule(line, str(e)) from e
        if "FREQ" not in rrule:
            raise error.InvalidRecurrenceRule(line, "FREQ is required")
        return rrule
