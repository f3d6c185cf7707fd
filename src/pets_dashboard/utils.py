from __future__ import annotations
import math
from typing import Any, Mapping, Optional

AGE_BRACKETS = ("Baby", "Young", "Adult", "Senior")
AGE_SCALE = {name: i for i, name in enumerate(AGE_BRACKETS, 1)}  # Baby=1 .. Senior=4

def age_value(age: Optional[str]) -> int:
    """Numeric bracket for an age label; unknown or missing ages count as 0."""
    return AGE_SCALE.get(age or "", 0)

def round_half_up(x: float) -> int:
    """Round to nearest integer with .5 going up (2.5 -> 3, -0.5 -> 0)."""
    return math.floor(x + 0.5)

def bracket_label(average: float) -> Optional[str]:
    """
    Map an average bracket value back to its label.
    Returns None for NaN or anything outside Baby..Senior after rounding.
    """
    if math.isnan(average):
        return None
    idx = round_half_up(average - 1)
    if 0 <= idx < len(AGE_BRACKETS):
        return AGE_BRACKETS[idx]
    return None

def contains_ci(haystack: Optional[str], needle: str) -> bool:
    """Case-insensitive substring test; a missing haystack never matches."""
    if not isinstance(haystack, str):
        return False
    return needle.lower() in haystack.lower()

def dig(obj: Optional[Mapping[str, Any]], *keys: str) -> Any:
    """Walk nested mappings, returning None as soon as a level is missing."""
    cur: Any = obj
    for k in keys:
        if not isinstance(cur, Mapping):
            return None
        cur = cur.get(k)
    return cur

def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """'1 photo', '0 photos', '3 photos'."""
    word = singular if count == 1 else (plural or singular + "s")
    return f"{count} {word}"
