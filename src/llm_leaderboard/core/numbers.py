"""Best-effort coercion of upstream and hand-written values."""

from __future__ import annotations

import math
import re
from typing import Any, Optional

_NUMBER_RE = re.compile(r"-?[0-9,.]+")


def parse_number_like(value: Any) -> Optional[float]:
    """Coerce a number, numeric string, or anything else into a finite number or None.

    Strings yield their first run of ASCII digits/commas/dots (with an optional
    leading minus), thousands separators stripped: ``"1,234.5 pts"`` -> 1234.5.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return value if math.isfinite(value) else None
        except OverflowError:
            return None
    if isinstance(value, str):
        match = _NUMBER_RE.search(value)
        if not match:
            return None
        try:
            number = float(match.group(0).replace(",", ""))
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)
