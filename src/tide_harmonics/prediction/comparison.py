"""
Comparison of a predicted series against observed water levels.

Observations are retrieved elsewhere; this module only aligns them onto the
prediction instants and reports the non-tidal residual
(``observed - predicted``).
"""
from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from .series import PredictionSeries

logger = logging.getLogger(__name__)


def compare_with_observations(
    series: PredictionSeries,
    obs_time,
    obs_values,
    tolerance_minutes: float = 3.0,
    logger: logging.Logger | None = None,
) -> pd.DataFrame:
    """
    Align observations onto the prediction instants and compute residuals.

    Each prediction instant takes the nearest observation no more than
    *tolerance_minutes* away; instants without one get ``NaN``.

    Parameters
    ----------
    series : PredictionSeries
        Predicted heights.
    obs_time : array_like of datetime
        Observation timestamps; naive values are taken as UTC.
    obs_values : array_like of float
        Observed water levels, in the same units and datum as *series*.
    tolerance_minutes : float, optional
        Maximum distance to the nearest observation (default 3 minutes).
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    pd.DataFrame
        Columns ``TimeUTC``, ``Predicted``, ``Observed``, ``Residual``.

    Raises
    ------
    ValueError
        If *obs_time* and *obs_values* have different lengths.
    """
    _log = logger or logging.getLogger(__name__)

    obs_index = pd.DatetimeIndex(obs_time)
    obs_values = np.asarray(obs_values, dtype=float)
    if len(obs_index) != len(obs_values):
        raise ValueError(
            f"obs_time ({len(obs_index)}) and obs_values ({len(obs_values)}) "
            f"must have the same length."
        )
    if obs_index.tz is None:
        obs_index = obs_index.tz_localize('UTC')
    else:
        obs_index = obs_index.tz_convert('UTC')

    observed = pd.Series(obs_values, index=obs_index)
    observed = observed[~observed.index.duplicated(keep='first')].sort_index()
    aligned = observed.reindex(
        series.times,
        method='nearest',
        tolerance=pd.Timedelta(minutes=tolerance_minutes),
    )

    predicted = np.array(series.heights)
    frame = pd.DataFrame({
        'TimeUTC': series.times,
        'Predicted': predicted,
        'Observed': aligned.values,
        'Residual': aligned.values - predicted,
    })
    _log.info(
        'Matched %d of %d prediction instants to observations.',
        int(frame['Observed'].notna().sum()), len(frame),
    )
    return frame


def summarize_residual(frame: pd.DataFrame) -> dict[str, float]:
    """
    Summary statistics of the ``Residual`` column.

    Returns
    -------
    dict
        ``count``, ``bias`` (mean), ``rmse`` and ``max_abs``; NaN when no
        observation was matched.
    """
    residual = frame['Residual'].to_numpy(dtype=float)
    finite = residual[np.isfinite(residual)]
    if finite.size == 0:
        return {'count': 0, 'bias': np.nan, 'rmse': np.nan, 'max_abs': np.nan}
    return {
        'count': int(finite.size),
        'bias': float(np.mean(finite)),
        'rmse': float(np.sqrt(np.mean(finite ** 2))),
        'max_abs': float(np.max(np.abs(finite))),
    }
