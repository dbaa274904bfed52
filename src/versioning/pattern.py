"""Serial-suffix matching for version strings.

A serial suffix is the trailing ``<name>[<sep><digits>]`` segment of a version,
e.g. ``redhat-3`` in ``1.0-redhat-3``. The same pattern splits the configured
suffix (``redhat-1`` into ``redhat`` and ``1``) and locates an existing suffix
at the end of a published version.
"""

import re
from dataclasses import dataclass
from typing import Optional

from constants import Constants

SERIAL_SUFFIX_RE = re.compile(Constants.SERIAL_SUFFIX_PATTERN)

_NUMERIC_TAIL_RE = re.compile(r".+-\d+")


@dataclass(frozen=True)
class SuffixMatch:
    """Structured result of a serial-suffix match."""
    base: str
    separator: Optional[str]
    serial: Optional[int]
    start: int
    text: str


def _to_match(m: "re.Match[str]") -> SuffixMatch:
    serial = m.group(3)
    return SuffixMatch(
        base=m.group(1),
        separator=m.group(2),
        serial=int(serial) if serial is not None else None,
        start=m.start(),
        text=m.group(0),
    )


def match_suffix(text: str) -> Optional[SuffixMatch]:
    """Match ``text`` as a whole against the serial-suffix pattern."""
    m = SERIAL_SUFFIX_RE.fullmatch(text)
    return _to_match(m) if m else None


def find_suffix(text: str) -> Optional[SuffixMatch]:
    """Locate the serial suffix that ends ``text``, if any."""
    m = SERIAL_SUFFIX_RE.search(text)
    return _to_match(m) if m else None


def has_numeric_tail(version: str) -> bool:
    """True if ``version`` already ends in a dashed numeric qualifier (``1.2.3-1``)."""
    return _NUMERIC_TAIL_RE.fullmatch(version) is not None
