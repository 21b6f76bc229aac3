"""
Prediction result container.

A :class:`PredictionSeries` pairs each UTC instant of the time grid with
its synthesized height.  It is built once per request and never modified.
"""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
import pandas as pd


@dataclass(frozen=True, eq=False)
class PredictionSeries:
    """
    Ordered ``(instant, height)`` pairs for one station.

    Attributes
    ----------
    station : str
        Name of the station predicted.
    times : pd.DatetimeIndex
        Strictly increasing UTC instants.
    heights : np.ndarray
        Read-only heights aligned with *times*.
    interval_minutes : int
        Spacing of *times*.
    datum : float
        Station datum the heights are referenced to.
    units : str
        Length unit of *heights*.
    """

    station: str
    times: pd.DatetimeIndex
    heights: np.ndarray
    interval_minutes: int
    datum: float = 0.0
    units: str = 'feet'

    def __len__(self) -> int:
        return len(self.times)

    def __iter__(self) -> Iterator[tuple[pd.Timestamp, float]]:
        for ts, h in zip(self.times, self.heights):
            yield ts, float(h)

    def __getitem__(self, i: int) -> tuple[pd.Timestamp, float]:
        return self.times[i], float(self.heights[i])

    def to_frame(self) -> pd.DataFrame:
        """Return the series as a DataFrame with ``TimeUTC`` and ``TideHt``."""
        return pd.DataFrame({
            'TimeUTC': self.times,
            'TideHt': np.array(self.heights),
        })

    def to_series(self) -> pd.Series:
        """Return heights as a :class:`pandas.Series` indexed by time."""
        return pd.Series(np.array(self.heights), index=self.times,
                         name=self.station)


def assemble_series(
    station: str,
    times: pd.DatetimeIndex,
    heights: np.ndarray,
    interval_minutes: int,
    datum: float = 0.0,
    units: str = 'feet',
) -> PredictionSeries:
    """
    Zip grid instants with their heights into a :class:`PredictionSeries`.

    No filtering, resampling or smoothing is applied.

    Raises
    ------
    ValueError
        If *times* and *heights* differ in length or *times* is not
        strictly increasing.
    """
    times = pd.DatetimeIndex(times)
    heights = np.array(heights, dtype=float)

    if len(times) != len(heights):
        raise ValueError(
            f"times ({len(times)}) and heights ({len(heights)}) must have "
            f"the same length."
        )
    if len(times) > 1 and not (times[1:] > times[:-1]).all():
        raise ValueError('times must be strictly increasing.')

    heights.flags.writeable = False
    return PredictionSeries(
        station=station,
        times=times,
        heights=heights,
        interval_minutes=int(interval_minutes),
        datum=float(datum),
        units=units,
    )


def concat_series(pieces: list[PredictionSeries]) -> PredictionSeries:
    """Join consecutive chunks of one prediction into a single series."""
    if not pieces:
        raise ValueError('At least one series is required.')
    first = pieces[0]
    times = pieces[0].times.append([p.times for p in pieces[1:]])
    heights = np.concatenate([p.heights for p in pieces])
    return assemble_series(
        first.station, times, heights, first.interval_minutes,
        datum=first.datum, units=first.units,
    )
