"""Lenient numeric parsing for values stored as free text."""
from __future__ import annotations

import re
from typing import Any, Optional

_LEADING_FLOAT = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def parse_leading_float(value: Any) -> Optional[float]:
    """Parse the numeric prefix of `value` (``"2.5h"`` -> 2.5); None when there is none."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_FLOAT.match(str(value))
    if not match:
        return None
    return float(match.group(0))
