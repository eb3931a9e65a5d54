# src/datatypes/time.py
from __future__ import annotations

import logging
import math
import time as _time
from datetime import datetime, timezone, tzinfo
from email.utils import format_datetime
from typing import Optional, Union

from dateutil import parser as date_parser

from datatypes.base import Base
from datatypes.exceptions import DatatypeError
from datatypes.validator import Validator

logger = logging.getLogger(__name__)

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY

TimeInput = Union[int, str, datetime]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class Time(Base):
    """
    A point in time, stored as a timezone-aware datetime.

    Accepts a Unix timestamp (int or int-like string), a datetime, "now", or
    any date string python-dateutil can parse. Naive values are taken to be in
    tz, which defaults to UTC.
    """

    def __init__(self, value: TimeInput = "now", tz: Optional[tzinfo] = None):
        self.tz = tz or timezone.utc
        super().__init__(self._to_datetime(value))

    def _to_datetime(self, value: TimeInput) -> datetime:
        if isinstance(value, datetime):
            return value if value.tzinfo else value.replace(tzinfo=self.tz)
        if Validator.intlike(value):
            try:
                return datetime.fromtimestamp(int(value), tz=self.tz)
            except (OverflowError, OSError, ValueError) as e:
                raise DatatypeError(f"Timestamp out of range: {value}", code=400, value=value) from e
        if value == "now":
            return datetime.now(tz=self.tz)
        if isinstance(value, str):
            try:
                parsed = date_parser.parse(value)
            except (ValueError, OverflowError) as e:
                raise DatatypeError(f"Could not parse date: {value}", code=400, value=value) from e
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=self.tz)
        raise DatatypeError("Bad value passed to Time datatype.", code=400, value=value)

    @classmethod
    def from_string(cls, value: str, tz: Optional[tzinfo] = None) -> "Time":
        return cls(value, tz)

    @property
    def datetime(self) -> datetime:
        return self._val

    @property
    def timestamp(self) -> int:
        return int(self._val.timestamp())

    def val(self) -> int:
        return self.timestamp

    def get_datestamp(self) -> str:
        """RFC 2822 date, e.g. "Thu, 01 Jan 2015 00:00:00 +0000"."""
        return format_datetime(self._val)

    def get_relative_time(self, datestyle: Optional[str] = None, now: Optional[int] = None) -> str:
        """
        Returns a compact relative time such as "now", "32s", "5m", "2h" or "3d".

        Times a week or more away fall back to a date: datestyle as a strftime
        format, "long" for "Monday, March 2, 2015 10:00:00", or by default
        "Mar 02" within the current year and "Mar 02 2014" otherwise.

        Args:
            datestyle: Date format used for distant times.
            now: Unix timestamp to measure against. Defaults to the current time.
        """
        stamp = self.timestamp
        if stamp == 0:
            return "Never"
        if not isinstance(now, int) or isinstance(now, bool) or not now:
            now = int(_time.time())

        diff = abs(now - stamp)
        if diff == 0:
            return "now"
        if diff < MINUTE:
            return f"{diff}s"
        if diff < HOUR:
            return f"{_round_half_up(diff / MINUTE)}m"
        if diff < DAY:
            return f"{_round_half_up(diff / HOUR)}h"
        if diff < WEEK:
            return f"{_round_half_up(diff / DAY)}d"

        when = self._val
        if datestyle == "long":
            return f"{when:%A, %B} {when.day}, {when:%Y %H:%M:%S}"
        if datestyle:
            return when.strftime(datestyle)
        if datetime.fromtimestamp(now, tz=self.tz).year == when.year:
            return when.strftime("%b %d")
        return when.strftime("%b %d %Y")
