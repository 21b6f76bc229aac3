"""
Per-instant calendar year, hours since the start of that year, and the row
of the yearly correction table that applies.

Each instant resolves its own row.  A range crossing New Year therefore
switches correction rows exactly at 00:00 UTC on January 1; nothing is
interpolated across the boundary.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .catalog import YearCorrectionTable
from .time_grid import to_utc

logger = logging.getLogger(__name__)

_HOUR = np.timedelta64(1, 'h')


@dataclass(frozen=True, eq=False)
class YearIndex:
    """Arrays aligned with a sequence of instants."""

    years: np.ndarray
    hours: np.ndarray
    rows: np.ndarray

    def __len__(self) -> int:
        return len(self.years)


def _utc_datetime64(times) -> np.ndarray:
    """Return *times* as naive ``datetime64[ns]`` values on the UTC clock."""
    index = pd.DatetimeIndex(times)
    if index.tz is None:
        index = index.tz_localize('UTC')
    else:
        index = index.tz_convert('UTC')
    return index.tz_localize(None).values.astype('datetime64[ns]')


def map_year_index(
    times,
    corrections: YearCorrectionTable,
    logger: logging.Logger | None = None,
) -> YearIndex:
    """
    Annotate every instant with its year, elapsed hours and table row.

    Parameters
    ----------
    times : pd.DatetimeIndex or array_like of datetime
        Instants to annotate; naive values are taken as UTC.
    corrections : YearCorrectionTable
        Table whose ``start_year`` defines the row offset.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    YearIndex
        ``years`` (int), ``hours`` (float hours since Jan 1 00:00 UTC of
        that year) and ``rows`` (``year - start_year``).

    Raises
    ------
    YearOutOfRange
        If any instant's year is not covered by *corrections*.
    """
    _log = logger or logging.getLogger(__name__)

    t64 = _utc_datetime64(times)
    year_start = t64.astype('datetime64[Y]')
    years = year_start.astype(np.int64) + 1970
    hours = (t64 - year_start.astype('datetime64[ns]')) / _HOUR
    rows = corrections.rows_for(years)

    if len(years):
        _log.debug(
            'Mapped %d instants onto correction years %d-%d.',
            len(years), years.min(), years.max(),
        )
    return YearIndex(years=years, hours=hours.astype(float), rows=rows)


def hours_since_year_start(instant) -> float:
    """Hours (fractional) from 00:00 UTC on January 1 to *instant*."""
    ts = to_utc(instant)
    jan1 = pd.Timestamp(year=ts.year, month=1, day=1, tz='UTC')
    return (ts - jan1) / pd.Timedelta(hours=1)
