import re
from typing import Any, Optional

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Any) -> Optional[int]:
    """
    Lenient integer parsing: takes the leading integer of a string
    ("12abc" -> 12, "4.7" -> 4). Returns None when there is none.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    match = _INT_PREFIX.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def is_blank(value: Any) -> bool:
    """True for the values a client would consider "not sent"."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return False
