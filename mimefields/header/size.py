from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from mimefields.header.errors import HeaderSizeError

_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([kmg]?b)?\s*$", re.IGNORECASE)

# Longer byte counts trip the int() digit limit and no real size comes near them.
_MAX_DIGITS = 64

_UNIT_MULTIPLIERS = {
    None: 1,
    "b": 1,
    "kb": 1024,
    "mb": 1024**2,
    "gb": 1024**3,
}


def parse_size(text: str) -> int:
    """Parse a size parameter such as ``100``, ``12kb`` or ``1.5 MB`` into bytes."""
    if text is None:
        raise HeaderSizeError(value="None", reason="missing value")

    match = _SIZE_RE.match(text)
    if match is None:
        raise HeaderSizeError(value=text)

    number, unit = match.group(1), match.group(2)
    unit = unit.lower() if unit else None
    if unit is None and "." in number:
        raise HeaderSizeError(value=text, reason="fractional byte count")
    if len(number.partition(".")[0]) > _MAX_DIGITS:
        raise HeaderSizeError(value=text, reason="too large")

    try:
        return int(Decimal(number) * _UNIT_MULTIPLIERS[unit])
    except (InvalidOperation, ValueError, OverflowError) as exc:
        raise HeaderSizeError(value=text, reason="too large") from exc
