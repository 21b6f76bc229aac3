"""
Tide events of a predicted series.

Local maxima and minima are picked with :func:`scipy.signal.argrelextrema`
under a minimum-separation constraint so that flat or noisy stretches do
not produce spurious events.  Crossings of a fixed mark level are found
between samples by linear interpolation.
"""
from __future__ import annotations

import logging

import numpy as np
import pandas as pd
from scipy.signal import argrelextrema

from .series import PredictionSeries

logger = logging.getLogger(__name__)

HIGH_TIDE = 'High Tide'
LOW_TIDE = 'Low Tide'
MARK_RISING = 'Mark Rising'
MARK_FALLING = 'Mark Falling'


def extract_high_low_water(
    series: PredictionSeries,
    min_separation_hours: float = 4.0,
    logger: logging.Logger | None = None,
) -> pd.DataFrame:
    """
    Extract high-water and low-water events from a predicted series.

    Parameters
    ----------
    series : PredictionSeries
        Predicted heights at a fixed interval.
    min_separation_hours : float, optional
        Minimum time between consecutive events of the same type
        (default 4.0 hours).
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    pd.DataFrame
        Columns ``Time``, ``TideHt`` and ``Event`` (``"High Tide"`` or
        ``"Low Tide"``), sorted by time.

    Raises
    ------
    ValueError
        If the series has fewer than 3 points or *min_separation_hours* is
        not positive.
    """
    _log = logger or logging.getLogger(__name__)

    if len(series) < 3:
        raise ValueError('At least 3 data points are required.')
    if min_separation_hours <= 0:
        raise ValueError(
            f"min_separation_hours must be positive, got {min_separation_hours}."
        )

    heights = np.asarray(series.heights, dtype=float)
    dt_hours = series.interval_minutes / 60.0
    order = max(1, int(min_separation_hours / dt_hours))

    hw_idx = argrelextrema(heights, np.greater, order=order)[0]
    lw_idx = argrelextrema(heights, np.less, order=order)[0]

    _log.info(
        'Extrema extraction for %s: %d HW, %d LW (order=%d samples).',
        series.station, len(hw_idx), len(lw_idx), order,
    )

    idx = np.concatenate([hw_idx, lw_idx])
    events = np.array([HIGH_TIDE] * len(hw_idx) + [LOW_TIDE] * len(lw_idx),
                      dtype=object)
    order_by_time = np.argsort(idx, kind='stable')
    idx = idx[order_by_time]

    return pd.DataFrame({
        'Time': series.times[idx],
        'TideHt': heights[idx],
        'Event': events[order_by_time],
    })


def extract_mark_crossings(
    series: PredictionSeries,
    level: float,
    logger: logging.Logger | None = None,
) -> pd.DataFrame:
    """
    Extract the times at which the tide crosses a fixed height.

    The crossing time is interpolated linearly between the two samples
    that bracket *level*.  A sample exactly at *level* counts once, on the
    side the tide is moving towards.

    Parameters
    ----------
    series : PredictionSeries
        Predicted heights at a fixed interval.
    level : float
        Mark height, in the units and datum of the series.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    pd.DataFrame
        Columns ``Time``, ``TideHt`` and ``Event`` (``"Mark Rising"`` or
        ``"Mark Falling"``), sorted by time.  Empty when the series never
        reaches *level*.

    Raises
    ------
    ValueError
        If the series has fewer than 2 points or *level* is not finite.
    """
    _log = logger or logging.getLogger(__name__)

    if len(series) < 2:
        raise ValueError('At least 2 data points are required.')
    level = float(level)
    if not np.isfinite(level):
        raise ValueError(f"level must be finite, got {level}.")

    offset = np.asarray(series.heights, dtype=float) - level
    before, after = offset[:-1], offset[1:]
    rising_idx = np.flatnonzero((before < 0.0) & (after >= 0.0))
    falling_idx = np.flatnonzero((before > 0.0) & (after <= 0.0))

    _log.info(
        'Mark crossings at %.3f for %s: %d rising, %d falling.',
        level, series.station, len(rising_idx), len(falling_idx),
    )

    idx = np.concatenate([rising_idx, falling_idx])
    events = np.array(
        [MARK_RISING] * len(rising_idx) + [MARK_FALLING] * len(falling_idx),
        dtype=object,
    )
    order_by_time = np.argsort(idx, kind='stable')
    idx = idx[order_by_time]

    fraction = offset[idx] / (offset[idx] - offset[idx + 1])
    step = series.times[idx + 1] - series.times[idx]

    return pd.DataFrame({
        'Time': series.times[idx] + step * fraction,
        'TideHt': np.full(len(idx), level),
        'Event': events[order_by_time],
    })
