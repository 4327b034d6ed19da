"""
Range Label Parser - turns bracket headers into quantity intervals.

Handles the header shapes seen in the costing sheets:
- "1-50", "51 - 100"
- "26to50", "26 to 50"
- "10000+" (open ended)

This is a best-effort heuristic, not a grammar. Anything else is
"not a bracket header" and callers keep scanning.
"""
import re
from typing import Optional

_WHITESPACE = re.compile(r"\s+")
_DIGITS = re.compile(r"[0-9]+")


def _to_int(part: str) -> Optional[int]:
    part = part.replace(",", "")
    if not _DIGITS.fullmatch(part):
        return None
    return int(part)


def parse_range(header) -> Optional[tuple[int, Optional[int]]]:
    """
    Parse a bracket header into (min, max).

    Returns max=None for open-ended headers, or None when the text is
    not a bracket header.
    """
    if header is None:
        return None
    clean = _WHITESPACE.sub("", str(header)).lower()
    if not clean:
        return None

    if "+" in clean:
        minimum = _to_int(clean.split("+", 1)[0])
        if minimum is None:
            return None
        return minimum, None

    parts = clean.split("to") if "to" in clean else clean.split("-")
    if len(parts) != 2:
        return None

    minimum, maximum = _to_int(parts[0]), _to_int(parts[1])
    if minimum is None or maximum is None or minimum > maximum:
        return None
    return minimum, maximum
