"""
Evenly spaced UTC prediction instants.

All instants are handled as timezone-aware UTC :class:`pandas.Timestamp`
values.  Naive inputs are read as UTC wall-clock time, never local time.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime
from numbers import Integral

import numpy as np
import pandas as pd

from .exceptions import InvalidInterval, InvalidRange

logger = logging.getLogger(__name__)

MIN_INTERVAL_MINUTES = 1
MAX_INTERVAL_MINUTES = 60


def to_utc(value: str | datetime | np.datetime64 | pd.Timestamp) -> pd.Timestamp:
    """
    Convert *value* to a timezone-aware UTC timestamp.

    Naive values are tagged as UTC without shifting; aware values are
    converted to UTC.

    Raises
    ------
    InvalidRange
        If *value* cannot be read as an instant.
    """
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise InvalidRange(f"Cannot interpret {value!r} as an instant.") from exc
    if ts is pd.NaT:
        raise InvalidRange(f"Cannot interpret {value!r} as an instant.")
    if ts.tzinfo is None:
        return ts.tz_localize('UTC')
    return ts.tz_convert('UTC')


def validate_interval(interval_minutes: int) -> int:
    """Return *interval_minutes* if it is an integer in [1, 60]."""
    if isinstance(interval_minutes, bool) or not isinstance(interval_minutes, Integral):
        raise InvalidInterval(
            f"Interval must be an integer number of minutes, got "
            f"{interval_minutes!r}."
        )
    if not MIN_INTERVAL_MINUTES <= interval_minutes <= MAX_INTERVAL_MINUTES:
        raise InvalidInterval(
            f"Interval must be between {MIN_INTERVAL_MINUTES} and "
            f"{MAX_INTERVAL_MINUTES} minutes, got {interval_minutes}."
        )
    return int(interval_minutes)


class TimeGrid:
    """
    Instants ``start, start + interval, ...`` up to and including *end*.

    The grid stops at the last instant not after *end*; it never pads or
    overshoots.  Iterating does not consume it, so it can be walked any
    number of times.

    Parameters
    ----------
    start, end : str, datetime, numpy.datetime64 or pandas.Timestamp
        Bounds of the grid, read as UTC.
    interval_minutes : int
        Spacing in whole minutes, 1 to 60.

    Raises
    ------
    InvalidRange
        If *start* is after *end*.
    InvalidInterval
        If *interval_minutes* is not an integer in [1, 60].
    """

    def __init__(self, start, end, interval_minutes: int):
        self.interval_minutes = validate_interval(interval_minutes)
        self.start = to_utc(start)
        self.end = to_utc(end)
        if self.start > self.end:
            raise InvalidRange(
                f"Start {self.start.isoformat()} is after end "
                f"{self.end.isoformat()}."
            )
        self.step = pd.Timedelta(minutes=self.interval_minutes)
        self._count = (self.end - self.start) // self.step + 1

    def __repr__(self) -> str:
        return (
            f"TimeGrid(start='{self.start.isoformat()}', "
            f"end='{self.end.isoformat()}', "
            f"interval_minutes={self.interval_minutes})"
        )

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[pd.Timestamp]:
        for i in range(self._count):
            yield self.start + i * self.step

    @property
    def last(self) -> pd.Timestamp:
        """Final instant of the grid (not after ``end``)."""
        return self.start + (self._count - 1) * self.step

    def _slice(self, first: int, stop: int) -> pd.DatetimeIndex:
        offsets = pd.to_timedelta(
            np.arange(first, stop, dtype=np.int64) * self.interval_minutes,
            unit='min',
        )
        return pd.DatetimeIndex(self.start + offsets)

    def to_index(self) -> pd.DatetimeIndex:
        """Materialise the whole grid as a UTC :class:`pandas.DatetimeIndex`."""
        return self._slice(0, self._count)

    def chunks(self, size: int) -> Iterator[pd.DatetimeIndex]:
        """Yield consecutive pieces of at most *size* instants."""
        if size < 1:
            raise ValueError(f"Chunk size must be positive, got {size}.")
        for first in range(0, self._count, size):
            yield self._slice(first, min(first + size, self._count))


def generate_time_grid(start, end, interval_minutes: int) -> TimeGrid:
    """Build a validated :class:`TimeGrid`; see the class for details."""
    grid = TimeGrid(start, end, interval_minutes)
    logger.debug('%r has %d instants.', grid, len(grid))
    return grid
