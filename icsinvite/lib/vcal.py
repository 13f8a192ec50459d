#!/usr/bin/env python
"""
Content-line level handling of iCalendar text, ref RFC5545 section 3.1
(line folding) and section 3.3.11 (escaping in TEXT values).
"""
import re
from typing import List
from typing import Optional
from typing import Union

from icsinvite.lib.python_utilities import to_crlf

## A fold is a CRLF immediately followed by a single space or tab.  The
## whitespace character is the fold marker, anything after it is content.
_FOLD = re.compile("\r\n[ \t]")

## Each escape is consumed exactly once, so "\\n" becomes a backslash
## followed by "n", never a newline.
_ESCAPE = re.compile(r"\\([;,\\nN])")
_UNESCAPED = {";": ";", ",": ",", "\\": "\\", "n": "\n", "N": "\n"}


def unfold_lines(text: Union[str, bytes]) -> List[str]:
    """Removes line folding and returns the logical content lines

    Bare LF line endings are accepted and treated as CRLF.  No line
    length limits are enforced.
    """
    return _FOLD.sub("", to_crlf(text)).split("\r\n")


def unescape_text(line: str, start: int) -> Optional[str]:
    """Unescapes a TEXT value starting at position ``start`` of ``line``

    ``start`` is typically the length of the property name plus the
    colon, i.e. 8 for a ``SUMMARY:`` line.

    Returns None if there is no text after the start position.
    """
    if len(line) <= start:
        return None
    return _ESCAPE.sub(lambda m: _UNESCAPED[m.group(1)], line[start:])


def property_name(line: str) -> str:
    """The property name of a content line, i.e. ``DTSTART`` for
    ``DTSTART;TZID=Europe/Oslo:20240101T100000``"""
    return re.split("[;:]", line, maxsplit=1)[0]


def value_offset(line: str) -> int:
    """
    Position right after the colon separating name and parameters from
    the value.  Parameter values may be quoted and contain colons.
    """
    in_quotes = False
    for i, char in enumerate(line):
        if char == '"':
            in_quotes = not in_quotes
        elif char == ":" and not in_quotes:
            return i + 1
    return len(line)
