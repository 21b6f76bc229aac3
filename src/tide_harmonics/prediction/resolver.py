"""
Station lookup by (partial) name.

Resolution is a pure function of the catalog and the query: it returns the
single matching station or raises.  Picking among several candidates is left
to the caller, e.g. :mod:`tide_harmonics.prediction.interactive`.
"""
from __future__ import annotations

import logging

from .catalog import HarmonicCatalog, StationHarmonics
from .exceptions import AmbiguousStation, StationNotFound

logger = logging.getLogger(__name__)


def find_candidates(catalog: HarmonicCatalog, query: str) -> list[str]:
    """
    Return the names of all stations containing *query*, in catalog order.

    Matching is a case-sensitive substring test.
    """
    return [name for name in catalog.station_names if query in name]


def resolve_station(
    catalog: HarmonicCatalog,
    query: str,
    logger: logging.Logger | None = None,
) -> StationHarmonics:
    """
    Resolve *query* to exactly one station of *catalog*.

    Parameters
    ----------
    catalog : HarmonicCatalog
        Catalog to search.
    query : str
        Full or partial station name (case-sensitive).
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    StationHarmonics
        The only station whose name contains *query*.

    Raises
    ------
    StationNotFound
        If no station name contains *query*.
    AmbiguousStation
        If more than one does; ``candidates`` lists them in catalog order.
    """
    _log = logger or logging.getLogger(__name__)

    candidates = find_candidates(catalog, query)
    if not candidates:
        raise StationNotFound(query)
    if len(candidates) > 1:
        _log.info("Query '%s' matches %d stations.", query, len(candidates))
        raise AmbiguousStation(query, candidates)

    _log.info('Using station: %s', candidates[0])
    return catalog.lookup(candidates[0])


def choose_candidate(
    catalog: HarmonicCatalog,
    ambiguity: AmbiguousStation,
    choice: int,
) -> StationHarmonics:
    """
    Pick one station from an ambiguous match by 1-based *choice*.

    Raises
    ------
    AmbiguousStation
        Re-raised unchanged if *choice* is not a valid position.
    """
    if (isinstance(choice, bool) or not isinstance(choice, int)
            or not 1 <= choice <= len(ambiguity.candidates)):
        raise ambiguity
    return catalog.lookup(ambiguity.candidates[choice - 1])
