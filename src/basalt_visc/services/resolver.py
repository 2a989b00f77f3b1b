from __future__ import annotations
import math
import re
from numbers import Real
from typing import Any, Mapping, Optional

# Leading decimal literal, as read by a lenient number parser: "1488 C" -> 1488, "abc" -> nothing.
_LEADING_NUMBER = re.compile(
    r"^\s*(?P<num>[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)

def parse_number_or_default(value: Any, default: float = 0.0) -> float:
    """
    Parse a cell into a float without ever raising.
    - Real numbers pass through; NaN and booleans give ``default``.
    - Text is read by its leading decimal literal.
    - Anything else (None, dates, objects) gives ``default``.
    """
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, Real):
        out = float(value)
        return default if math.isnan(out) else out
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if not isinstance(value, str):
        return default
    m = _LEADING_NUMBER.match(value)
    if not m:
        return default
    return float(m.group("num").replace("Infinity", "inf"))

def _match_key(row: Mapping[str, Any], key_part: str) -> Optional[str]:
    needle = key_part.lower()
    for k in row:
        if needle in str(k).lower():
            return k
    return None

def resolve_number(row: Optional[Mapping[str, Any]], key_part: str) -> float:
    """First key (in the row's own order) containing ``key_part``, case-insensitively, parsed as a number."""
    if not row:
        return 0.0
    k = _match_key(row, key_part)
    if k is None:
        return 0.0
    return parse_number_or_default(row[k])

def resolve_text(row: Optional[Mapping[str, Any]], key_part: str) -> str:
    if not row:
        return ""
    k = _match_key(row, key_part)
    if k is None:
        return ""
    v = row[k]
    if v is None or (isinstance(v, float) and math.isnan(v)):
        return ""
    return str(v)

def first_number(row: Optional[Mapping[str, Any]], *key_parts: str) -> float:
    """Try each key part in priority order; first non-zero wins."""
    for part in key_parts:
        v = resolve_number(row, part)
        if v != 0:
            return v
    return 0.0

def first_text(row: Optional[Mapping[str, Any]], *key_parts: str) -> str:
    for part in key_parts:
        v = resolve_text(row, part)
        if v:
            return v
    return ""
