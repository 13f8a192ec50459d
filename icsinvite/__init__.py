#!/usr/bin/env python
import logging

__version__ = "0.1.0"

from .event import parse_event
from .event import try_parse_event
from .event import ParsedEvent
from .event import ParseResult
from .lib.dates import DateValue
from .lib.error import InvalidDateFormat
from .lib.error import InvalidRecurrenceRule
from .lib.error import MissingEndDate
from .lib.error import MissingStartDate
from .lib.error import MissingSummary
from .lib.error import RFC5545Error
from .lib.error import UnsupportedRecurrenceProperty

# Silence notification of no default logging handler
log = logging.getLogger("icsinvite")


class NullHandler(logging.Handler):
    def emit(self, record) -> None:
        pass


log.addHandler(NullHandler())

__all__ = [
    "__version__",
    "parse_event",
    "try_parse_event",
    "ParsedEvent",
    "ParseResult",
    "DateValue",
    "RFC5545Error",
    "MissingStartDate",
    "MissingEndDate",
    "MissingSummary",
    "InvalidRecurrenceRule",
    "InvalidDateFormat",
    "UnsupportedRecurrenceProperty",
]
