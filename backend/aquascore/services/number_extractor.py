from __future__ import annotations

import math
import re

# 1-4 integer digits, optional "." or "," with 1-2 decimals; not glued to letters or other digits.
# A trailing charge sign ("2+", "2-") marks an ion notation, not a value.
_NUMBER_RE = re.compile(r"(?<![0-9a-z.,])([0-9]{1,4}(?:[.,][0-9]{1,2})?)(?![0-9]|[+\-](?![0-9]))", re.IGNORECASE)


def parse_decimal(token: str) -> float | None:
    try:
        value = float(token.replace(",", "."))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def extract_number(line: str, start: int = 0) -> float | None:
    """First plausible number at or after ``start``; characters before ``start`` still guard the match."""
    for match in _NUMBER_RE.finditer(line, start):
        value = parse_decimal(match.group(1))
        if value is not None:
            return value
    return None
