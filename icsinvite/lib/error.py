#!/usr/bin/env python
import logging
import os
from typing import Optional

from icsinvite import __version__

## one of DEBUG_PDB, DEBUG, DEVELOPMENT, PRODUCTION
debugmode = os.environ.get("PYTHON_ICSINVITE_DEBUGMODE")
if not debugmode:
    if "dev" in __version__ or __version__ == "(unknown)":
        debugmode = "DEVELOPMENT"
    else:
        debugmode = "PRODUCTION"

log = logging.getLogger("icsinvite")
if debugmode.startswith("DEBUG"):
    log.setLevel(logging.DEBUG)
else:
    log.setLevel(logging.WARNING)


def weirdness(*reasons) -> None:
    """Input that parses fine but deviates from RFC5545 ends up here"""
    reason = " : ".join([str(x) for x in reasons])
    log.warning(f"Deviation from expectations found: {reason}")
    if debugmode == "DEBUG_PDB":
        log.error(f"Dropping into debugger due to {reason}")
        import pdb

        pdb.set_trace()


class RFC5545Error(Exception):
    """
    Base class for everything that can go wrong while importing an
    invitation.  The line property will contain the unfolded property
    line in question (if any), the reason property a human readable
    explanation.
    """

    error_kind: str = "RFC5545Error"
    line: Optional[str] = None
    reason: str = "no reason"

    def __init__(self, line: Optional[str] = None, reason: Optional[str] = None) -> None:
        if line:
            self.line = line
        if reason:
            self.reason = reason
        super().__init__(self.reason)

    def __str__(self) -> str:
        return "%s at '%s', reason %s" % (
            self.__class__.__name__,
            self.line,
            self.reason,
        )


class MissingStartDate(RFC5545Error):
    """The event block has no DTSTART line"""

    error_kind = "MissingStartDate"
    reason = "no DTSTART property found"


class MissingEndDate(RFC5545Error):
    """
    Never raised by the parser itself, the end date is always
    derived.  Available for callers demanding an explicit DTEND.
    """

    error_kind = "MissingEndDate"
    reason = "no DTEND property found"


class MissingSummary(RFC5545Error):
    """Never raised by the parser itself.  For callers demanding a title."""

    error_kind = "MissingSummary"
    reason = "no SUMMARY property found"


class InvalidRecurrenceRule(RFC5545Error):
    error_kind = "InvalidRecurrenceRule"
    reason = "the recurrence rule could not be parsed"


class InvalidDateFormat(RFC5545Error):
    """
    Any DTSTART, DTEND or EXDATE line that failed to parse - malformed
    digits, unknown TZID, TZID combined with a trailing Z, or a date
    that does not exist in the calendar.  Sub-causes are only given in
    the reason text.
    """

    error_kind = "InvalidDateFormat"
    reason = "the date is not in a correct format"


class UnsupportedRecurrenceProperty(RFC5545Error):
    error_kind = "UnsupportedRecurrenceProperty"
    reason = "recurrence property not supported"
