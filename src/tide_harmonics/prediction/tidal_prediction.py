"""
Tidal prediction from a harmonic constants catalog.

Ties the components together::

    station query --> resolve_station --> StationHarmonics
    start/end/interval --> TimeGrid --> map_year_index --> synthesize_heights
                                                       --> PredictionSeries

Three entry points are provided:

* :func:`predict_tide`: resolve a station by name in a catalog and return
  the full series.
* :func:`predict_station`: the same for an already resolved station.
* :func:`iter_predictions`: stream the series in chunks to bound memory
  for long ranges.

Requests are validated in full before any height is computed, so a
request either succeeds completely or raises without partial output.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

import pandas as pd

from .catalog import HarmonicCatalog, StationHarmonics
from .resolver import resolve_station
from .series import PredictionSeries, assemble_series
from .synthesis import synthesize_heights
from .time_grid import TimeGrid, to_utc, validate_interval
from .year_index import map_year_index

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 10_000


@dataclass(frozen=True)
class PredictionRequest:
    """
    Station query, UTC range and sampling interval of one prediction.

    ``start`` and ``end`` are normalised to UTC on construction; naive
    values are read as UTC wall-clock time.
    """

    station: str
    start: pd.Timestamp
    end: pd.Timestamp
    interval_minutes: int = 6

    def __post_init__(self):
        object.__setattr__(self, 'start', to_utc(self.start))
        object.__setattr__(self, 'end', to_utc(self.end))
        object.__setattr__(
            self, 'interval_minutes', validate_interval(self.interval_minutes)
        )

    def time_grid(self) -> TimeGrid:
        return TimeGrid(self.start, self.end, self.interval_minutes)


def predict_station(
    station: StationHarmonics,
    start,
    end,
    interval_minutes: int,
    logger: logging.Logger | None = None,
) -> PredictionSeries:
    """
    Predict heights for a resolved station over ``[start, end]``.

    Parameters
    ----------
    station : StationHarmonics
        Station constants.
    start, end : str, datetime or pandas.Timestamp
        Range bounds in UTC (naive values are taken as UTC).
    interval_minutes : int
        Sampling interval, 1 to 60 minutes.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    PredictionSeries

    Raises
    ------
    InvalidRange, InvalidInterval
        For a malformed range or interval.
    YearOutOfRange
        If any instant of the grid lies outside the correction table.
    """
    _log = logger or logging.getLogger(__name__)

    grid = TimeGrid(start, end, interval_minutes)
    times = grid.to_index()
    year_index = map_year_index(times, station.corrections, logger=_log)

    _log.info(
        'Generating %d tidal predictions for %s (%s to %s, %d min).',
        len(times), station.name, grid.start.isoformat(),
        grid.last.isoformat(), grid.interval_minutes,
    )
    heights = synthesize_heights(station, year_index, logger=_log)
    return assemble_series(
        station.name, times, heights, grid.interval_minutes,
        datum=station.datum, units=station.units,
    )


def predict_tide(
    catalog: HarmonicCatalog,
    request: PredictionRequest,
    logger: logging.Logger | None = None,
) -> PredictionSeries:
    """
    Resolve the requested station and predict its heights.

    Parameters
    ----------
    catalog : HarmonicCatalog
        Loaded harmonic constants.
    request : PredictionRequest
        Station query, range and interval.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    PredictionSeries

    Raises
    ------
    StationNotFound, AmbiguousStation
        If the query does not identify exactly one station.
    InvalidRange, InvalidInterval, YearOutOfRange
        As for :func:`predict_station`.
    """
    _log = logger or logging.getLogger(__name__)
    station = resolve_station(catalog, request.station, logger=_log)
    return predict_station(
        station, request.start, request.end, request.interval_minutes,
        logger=_log,
    )


def iter_predictions(
    catalog: HarmonicCatalog,
    request: PredictionRequest,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    logger: logging.Logger | None = None,
) -> Iterator[PredictionSeries]:
    """
    Stream a prediction as consecutive :class:`PredictionSeries` chunks.

    The station, range, interval and the years of both ends of the grid
    are checked before this function returns, so no chunk is ever
    produced for a request that would fail.  Grid instants increase
    monotonically, so checking the first and last instant covers every
    year in between.

    Parameters
    ----------
    catalog : HarmonicCatalog
        Loaded harmonic constants.
    request : PredictionRequest
        Station query, range and interval.
    chunk_size : int, optional
        Maximum number of instants per chunk (default 10 000).
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    iterator of PredictionSeries
    """
    _log = logger or logging.getLogger(__name__)

    station = resolve_station(catalog, request.station, logger=_log)
    grid = request.time_grid()
    station.corrections.row_for(grid.start.year)
    station.corrections.row_for(grid.last.year)
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}.")

    _log.info(
        'Streaming %d tidal predictions for %s in chunks of %d.',
        len(grid), station.name, chunk_size,
    )
    return _generate_chunks(station, grid, chunk_size, _log)


def _generate_chunks(
    station: StationHarmonics,
    grid: TimeGrid,
    chunk_size: int,
    _log: logging.Logger,
) -> Iterator[PredictionSeries]:
    for times in grid.chunks(chunk_size):
        year_index = map_year_index(times, station.corrections, logger=_log)
        heights = synthesize_heights(station, year_index, logger=_log)
        yield assemble_series(
            station.name, times, heights, grid.interval_minutes,
            datum=station.datum, units=station.units,
        )
