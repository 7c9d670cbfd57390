"""
Build hints embedded in source files.

A source file can carry one line of the form

    /*! -O2 -lm */

to add compiler flags, or

    /*! gcc -std=c11 */

to replace the compiler command altogether. The comment must be alone on
its line and the payload cannot contain '*'.
"""

import re
from typing import Optional


_HINT_PATTERN = re.compile(r'^[ \t]*/\*!([^*\n]+)\*/[ \t\r]*$', re.MULTILINE)


def extract_hint(text: str) -> Optional[str]:
    """Return the payload of the first hint comment in text, stripped, or None if there is none."""
    match = _HINT_PATTERN.search(text)
    if match is None:
        return None
    return match.group(1).strip()


def hint_only_flags(hint: str) -> bool:
    """True if the hint holds compiler flags only (its first non-blank character is '-').
    An empty or blank hint counts as flags (there are none to add)."""
    for c in hint:
        if c == '-':
            return True
        if not c.isspace():
            return False
    return True
