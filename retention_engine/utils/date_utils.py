"""Date manipulation utilities"""

from datetime import date
from typing import Optional


def days_between(start: date, end: Optional[date]) -> Optional[int]:
    """Whole calendar days from start to end (negative when end is earlier), None if end is unknown"""
    if end is None:
        return None
    return (end - start).days


def days_since(event: Optional[date], as_of: date) -> Optional[int]:
    """Whole calendar days elapsed since event, None if it never happened"""
    if event is None:
        return None
    return (as_of - event).days
