"""
Prompt-driven front end for a single prediction.

Asks for the station, interval and UTC range in turn, offering a numbered
list when the station name is ambiguous.  All checking is left to the
prediction core; this module only collects answers.  ``input_func`` and
``output_func`` default to :func:`input` and :func:`print`.
"""
from __future__ import annotations

import logging
from collections.abc import Callable

from .catalog import HarmonicCatalog, StationHarmonics
from .exceptions import AmbiguousStation, InvalidInterval
from .resolver import choose_candidate, resolve_station
from .series import PredictionSeries
from .tidal_prediction import predict_station

logger = logging.getLogger(__name__)


def prompt_station(
    catalog: HarmonicCatalog,
    input_func: Callable[[], str] = input,
    output_func: Callable[[str], None] = print,
    query: str | None = None,
) -> StationHarmonics:
    """
    Ask for a station name and, if needed, a choice among candidates.

    Raises
    ------
    StationNotFound
        If nothing matches the name entered.
    AmbiguousStation
        If the choice entered is not one of the listed numbers.
    """
    if query is None:
        output_func('Please enter the station name:')
        query = input_func().strip()
    try:
        station = resolve_station(catalog, query)
    except AmbiguousStation as ambiguity:
        output_func('Multiple stations found, please choose one (enter number):')
        for i, name in enumerate(ambiguity.candidates, start=1):
            output_func(f"[{i}] {name}")
        answer = input_func().strip()
        try:
            choice = int(answer)
        except ValueError:
            raise ambiguity from None
        station = choose_candidate(catalog, ambiguity, choice)
    output_func(f"Using station: {station.name}")
    return station


def prompt_interval(
    input_func: Callable[[], str] = input,
    output_func: Callable[[str], None] = print,
) -> int:
    """Ask for the prediction interval in minutes."""
    output_func('Enter desired frequency of predictions in minutes (1-60):')
    answer = input_func().strip()
    try:
        return int(answer)
    except ValueError:
        raise InvalidInterval(
            f"Interval must be a whole number of minutes, got '{answer}'."
        ) from None


def prompt_range(
    input_func: Callable[[], str] = input,
    output_func: Callable[[str], None] = print,
) -> tuple[str, str]:
    """Ask for the start and end of the prediction range (UTC)."""
    output_func('Enter starting time (YYYY-MM-DD HH:MM) in UTC/GMT time zone:')
    start = input_func().strip()
    output_func('Enter ending time (YYYY-MM-DD HH:MM) in UTC/GMT time zone:')
    end = input_func().strip()
    return start, end


def run_interactive(
    catalog: HarmonicCatalog,
    input_func: Callable[[], str] | None = None,
    output_func: Callable[[str], None] | None = None,
    station_query: str | None = None,
    interval_minutes: int | None = None,
    logger: logging.Logger | None = None,
) -> PredictionSeries:
    """
    Collect a full request by prompting and return its prediction.

    Parameters
    ----------
    catalog : HarmonicCatalog
        Loaded harmonic constants.
    input_func : callable, optional
        Returns one line of user input per call.
    output_func : callable, optional
        Displays one prompt line per call.
    station_query : str, optional
        Station name given up front; only the candidate choice is asked
        for when it is ambiguous.
    interval_minutes : int, optional
        Sampling interval given up front; the interval prompt is skipped.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.
    """
    _log = logger or logging.getLogger(__name__)
    input_func = input_func or input
    output_func = output_func or print

    station = prompt_station(catalog, input_func, output_func, query=station_query)
    if interval_minutes is None:
        interval = prompt_interval(input_func, output_func)
    else:
        interval = interval_minutes
    start, end = prompt_range(input_func, output_func)
    series = predict_station(station, start, end, interval, logger=_log)
    output_func(f"Finished. {len(series)} predictions for {station.name}.")
    return series
