"""Fixed millisecond conversions. MONTH is 30 days, YEAR is 365 days."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

SECOND = 1000
MINUTE = SECOND * 60
HOUR = MINUTE * 60
DAY = HOUR * 24
WEEK = DAY * 7
MONTH = DAY * 30
YEAR = DAY * 365

UNITS: Mapping[str, int] = MappingProxyType({
    "SECOND": SECOND,
    "MINUTE": MINUTE,
    "HOUR": HOUR,
    "DAY": DAY,
    "WEEK": WEEK,
    "MONTH": MONTH,
    "YEAR": YEAR,
})
