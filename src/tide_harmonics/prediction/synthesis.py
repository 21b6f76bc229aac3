"""
Harmonic synthesis of water height.

Implements the classical harmonic prediction formula::

    h(t) = H0 + sum_i { f_i(Y) * A_i * cos[a_i * t + (V0+u)_i(Y) - kappa_i] }

where ``t`` is hours since 00:00 UTC on January 1 of year ``Y``, ``a_i`` is
the constituent speed in degrees/hour, ``f_i(Y)`` and ``(V0+u)_i(Y)`` are
the node factor and equilibrium argument tabulated for year ``Y`` and
``A_i``/``kappa_i`` are the station amplitude and phase lag.  The whole
argument is formed in degrees and converted to radians just before the
cosine.

The result is a pure function of its inputs and carries the datum and
amplitude units of the catalog.
"""
from __future__ import annotations

import logging

import numpy as np

from .catalog import StationHarmonics
from .time_grid import to_utc
from .year_index import YearIndex, hours_since_year_start

logger = logging.getLogger(__name__)


def synthesize_heights(
    station: StationHarmonics,
    year_index: YearIndex,
    logger: logging.Logger | None = None,
) -> np.ndarray:
    """
    Predicted heights for every instant described by *year_index*.

    Parameters
    ----------
    station : StationHarmonics
        Station constants and correction table.
    year_index : YearIndex
        Hours since year start and correction rows, one per instant, as
        produced by :func:`~tide_harmonics.prediction.year_index.map_year_index`
        against ``station.corrections``.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    np.ndarray
        Heights, same length as *year_index*, in the catalog's units.
    """
    _log = logger or logging.getLogger(__name__)

    hours = np.asarray(year_index.hours, dtype=float)
    rows = np.asarray(year_index.rows, dtype=np.int64)

    # (n_times, n_constituents)
    node = station.corrections.node_factors[rows]
    equil = station.corrections.equilibrium_args[rows]
    arg_deg = (
        hours[:, np.newaxis] * station.speeds[np.newaxis, :]
        + equil
        - station.kappas[np.newaxis, :]
    )
    terms = node * station.amplitudes[np.newaxis, :] * np.cos(np.radians(arg_deg))

    heights = station.datum + terms.sum(axis=1)
    _log.debug(
        'Synthesized %d heights from %d constituents for %s.',
        len(heights), len(station.constituents), station.name,
    )
    return heights


def height_at(station: StationHarmonics, instant) -> float:
    """
    Predicted height at a single instant.

    Raises
    ------
    YearOutOfRange
        If the instant's year is not in the station's correction table.
    """
    ts = to_utc(instant)
    row = station.corrections.row_for(ts.year)
    hours = hours_since_year_start(ts)

    height = station.datum
    for j, constituent in enumerate(station.constituents):
        arg_deg = (
            constituent.speed * hours
            + station.corrections.equilibrium_args[row, j]
            - station.kappas[j]
        )
        height += (
            station.corrections.node_factors[row, j]
            * station.amplitudes[j]
            * np.cos(np.radians(arg_deg))
        )
    return float(height)
