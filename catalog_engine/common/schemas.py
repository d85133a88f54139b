"""
This module defines common Pydantic models shared by the catalog, search and
related-item modules.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, field_validator

from catalog_engine.common.config import get_timezone

_VERBOSE_DATETIME = re.compile(r"(\w+) (\d+), (\d+) (\d+):(\d+):(\d+) ([AP]M)")
_MONTHS = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12
}


def _localize(value: datetime) -> datetime:
    if value.tzinfo is None:
        return get_timezone().localize(value)
    return value


def parse_timestamp(value):
    """
    Parse the timestamp formats found in catalog exports.

    Accepts datetime objects, ISO-8601 strings (with or without a trailing
    'Z'), '2025-04-12 21:20:43' and 'Apr 12, 2025 9:20:43 PM'. Naive values are
    localized to the configured timezone. Anything else is returned unchanged
    so Pydantic reports the validation error.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return _localize(value)

    if isinstance(value, str):
        text = value.strip()
        match = _VERBOSE_DATETIME.match(text)
        if match:
            month_str, day, year, hour, minute, second, am_pm = match.groups()
            hour = int(hour)
            # Convert to 24-hour format
            if am_pm == "PM" and hour < 12:
                hour += 12
            elif am_pm == "AM" and hour == 12:
                hour = 0
            parsed = datetime(int(year), _MONTHS.get(month_str, 1), int(day), hour, int(minute), int(second))
            return _localize(parsed)

        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _localize(datetime.fromisoformat(text))
        except ValueError:
            try:
                return _localize(datetime.strptime(text, "%Y-%m-%d %H:%M:%S"))
            except ValueError:
                pass

    return value


class TimestampMixin(BaseModel):
    """
    Adds created and updated timestamps to catalog models.
    """
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @field_validator('createdAt', 'updatedAt', mode='before')
    @classmethod
    def parse_datetime(cls, value):
        return parse_timestamp(value)


T = TypeVar('T')


class PaginationResponse(BaseModel, Generic[T]):
    """
    A generic offset-based page of results.
    """
    items: List[T]
    total: int
    limit: int
    offset: int
    hasMore: bool
