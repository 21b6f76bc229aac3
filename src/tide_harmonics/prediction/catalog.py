"""
In-memory harmonic constants catalog.

The catalog holds, for every prediction-capable station, a height datum and
one amplitude and one phase lag (kappa) per constituent, plus the
catalog-wide table of yearly astronomical corrections (node factor *f* and
equilibrium argument *V0+u*) for each constituent.

All of these are parallel arrays sharing a single constituent ordering.
The ordering is carried explicitly by the catalog's tuple of
:class:`~tide_harmonics.prediction.constituents.Constituent` records and
checked when the catalog is built, so a misaligned source fails with
:class:`~tide_harmonics.prediction.exceptions.CatalogLoadError` instead of
producing a wrong prediction.

The catalog is populated once and never mutated afterwards; every array it
exposes is a read-only copy, so it may be shared between threads.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from .constituents import Constituent, normalize_constituent_name, standard_speed
from .exceptions import CatalogLoadError, StationNotFound, YearOutOfRange

logger = logging.getLogger(__name__)

# Node factors outside this band are legal but almost certainly a units or
# column mix-up in the source.
_NODE_FACTOR_SANITY = (0.5, 1.5)


def _readonly(values, name: str, ndim: int) -> np.ndarray:
    """Copy *values* to a read-only float array of the given rank."""
    try:
        arr = np.array(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise CatalogLoadError(f"{name} is not numeric: {exc}") from exc
    if arr.ndim != ndim:
        raise CatalogLoadError(
            f"{name} must be {ndim}-dimensional, got shape {arr.shape}."
        )
    if not np.all(np.isfinite(arr)):
        raise CatalogLoadError(f"{name} contains non-finite values.")
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class YearCorrectionTable:
    """
    Yearly node factors and equilibrium arguments.

    Row ``i`` holds the corrections for calendar year ``start_year + i``;
    column ``j`` belongs to the catalog's ``j``-th constituent.

    Parameters
    ----------
    start_year : int
        First calendar year covered by the table.
    node_factors : array_like
        Shape ``(n_years, n_constituents)``; multiplicative amplitude
        corrections, typically near 1.
    equilibrium_args : array_like
        Shape ``(n_years, n_constituents)``; additive phase corrections in
        degrees.
    """

    start_year: int
    node_factors: np.ndarray
    equilibrium_args: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, 'start_year', int(self.start_year))
        node = _readonly(self.node_factors, 'node_factors', 2)
        equil = _readonly(self.equilibrium_args, 'equilibrium_args', 2)
        if node.shape != equil.shape:
            raise CatalogLoadError(
                f"node_factors {node.shape} and equilibrium_args "
                f"{equil.shape} must have the same shape."
            )
        if node.shape[0] == 0:
            raise CatalogLoadError('Correction table covers zero years.')
        object.__setattr__(self, 'node_factors', node)
        object.__setattr__(self, 'equilibrium_args', equil)

    @property
    def n_years(self) -> int:
        return self.node_factors.shape[0]

    @property
    def n_constituents(self) -> int:
        return self.node_factors.shape[1]

    @property
    def end_year(self) -> int:
        """Last calendar year covered (inclusive)."""
        return self.start_year + self.n_years - 1

    def covers(self, year: int) -> bool:
        return self.start_year <= year <= self.end_year

    def row_for(self, year: int) -> int:
        """Return the table row for *year*, or raise :class:`YearOutOfRange`."""
        if not self.covers(year):
            raise YearOutOfRange(year, self.start_year, self.end_year)
        return int(year) - self.start_year

    def rows_for(self, years: np.ndarray) -> np.ndarray:
        """
        Vectorised :meth:`row_for`.

        Raises
        ------
        YearOutOfRange
            For the first year in *years* that the table does not cover.
        """
        years = np.asarray(years, dtype=np.int64)
        rows = years - self.start_year
        bad = (rows < 0) | (rows >= self.n_years)
        if np.any(bad):
            first_bad = int(years[np.argmax(bad)])
            raise YearOutOfRange(first_bad, self.start_year, self.end_year)
        return rows


@dataclass(frozen=True, eq=False)
class StationHarmonics:
    """
    Harmonic constants of one station.

    ``amplitudes[j]`` and ``kappas[j]`` belong to ``constituents[j]``, which
    is also column ``j`` of ``corrections``.
    """

    name: str
    datum: float
    constituents: tuple[Constituent, ...]
    amplitudes: np.ndarray
    kappas: np.ndarray
    corrections: YearCorrectionTable
    units: str = 'feet'

    def __post_init__(self):
        object.__setattr__(self, 'name', str(self.name))
        object.__setattr__(self, 'datum', float(self.datum))
        object.__setattr__(self, 'constituents', tuple(self.constituents))
        n_const = len(self.constituents)
        amps = _readonly(self.amplitudes, f"{self.name}: amplitudes", 1)
        kappas = _readonly(self.kappas, f"{self.name}: kappas", 1)
        if len(amps) != n_const or len(kappas) != n_const:
            raise CatalogLoadError(
                f"Station '{self.name}' has {len(amps)} amplitudes and "
                f"{len(kappas)} kappas for {n_const} constituents."
            )
        if self.corrections.n_constituents != n_const:
            raise CatalogLoadError(
                f"Station '{self.name}': correction table has "
                f"{self.corrections.n_constituents} columns for {n_const} "
                f"constituents."
            )
        if np.any(amps < 0.0):
            raise CatalogLoadError(
                f"Station '{self.name}' has negative amplitudes."
            )
        object.__setattr__(self, 'amplitudes', amps)
        object.__setattr__(self, 'kappas', kappas)

    @property
    def speeds(self) -> np.ndarray:
        """Constituent speeds (degrees/hour) in catalog order."""
        return np.array([c.speed for c in self.constituents], dtype=float)

    @property
    def constituent_names(self) -> list[str]:
        return [c.name for c in self.constituents]


@dataclass(frozen=True, eq=False)
class HarmonicCatalog:
    """
    Read-only table of stations sharing one constituent list and one
    yearly correction table.
    """

    constituents: tuple[Constituent, ...]
    stations: tuple[StationHarmonics, ...]
    corrections: YearCorrectionTable
    _by_name: dict[str, StationHarmonics] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self):
        constituents = tuple(self.constituents)
        stations = tuple(self.stations)
        object.__setattr__(self, 'constituents', constituents)
        object.__setattr__(self, 'stations', stations)

        if not constituents:
            raise CatalogLoadError('Catalog has no constituents.')
        if not stations:
            raise CatalogLoadError('Catalog has no stations.')

        names = [c.name for c in constituents]
        duplicated = sorted({n for n in names if names.count(n) > 1})
        if duplicated:
            raise CatalogLoadError(f"Duplicate constituents: {duplicated}")

        if self.corrections.n_constituents != len(constituents):
            raise CatalogLoadError(
                f"Correction table has {self.corrections.n_constituents} "
                f"columns for {len(constituents)} constituents."
            )

        by_name: dict[str, StationHarmonics] = {}
        for station in stations:
            if station.constituents != constituents:
                raise CatalogLoadError(
                    f"Station '{station.name}' constituent ordering differs "
                    f"from the catalog."
                )
            if station.corrections is not self.corrections:
                raise CatalogLoadError(
                    f"Station '{station.name}' does not share the catalog "
                    f"correction table."
                )
            if station.name in by_name:
                raise CatalogLoadError(f"Duplicate station '{station.name}'.")
            by_name[station.name] = station
        object.__setattr__(self, '_by_name', by_name)

        low, high = _NODE_FACTOR_SANITY
        node = self.corrections.node_factors
        if np.any((node < low) | (node > high)):
            logger.warning(
                'Node factors outside [%.1f, %.1f] found (min=%.3f, max=%.3f).',
                low, high, node.min(), node.max(),
            )

    def __len__(self) -> int:
        return len(self.stations)

    def __iter__(self) -> Iterator[StationHarmonics]:
        return iter(self.stations)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def station_names(self) -> list[str]:
        return [s.name for s in self.stations]

    @property
    def start_year(self) -> int:
        return self.corrections.start_year

    @property
    def end_year(self) -> int:
        return self.corrections.end_year

    def lookup(self, identifier: str) -> StationHarmonics:
        """
        Return the station whose name is exactly *identifier*.

        Raises
        ------
        StationNotFound
            If no station has that name.
        """
        try:
            return self._by_name[identifier]
        except KeyError:
            raise StationNotFound(identifier) from None

    @classmethod
    def from_harms(
        cls,
        harms: Mapping,
        logger: logging.Logger | None = None,
    ) -> HarmonicCatalog:
        """
        Build a catalog from a mapping laid out like a harmonics file.

        Parameters
        ----------
        harms : mapping
            ``"name"`` : constituent names, length ``n_c``.
            ``"speed"`` : speeds in degrees/hour, length ``n_c`` (optional;
            filled from the standard table when absent).
            ``"station"`` : station names, length ``n_s``.
            ``"datum"`` : station datums, length ``n_s``.
            ``"A"`` : amplitudes, shape ``(n_s, n_c)``.
            ``"kappa"`` : phase lags in degrees, shape ``(n_s, n_c)``.
            ``"nodefactor"`` : node factors, shape ``(n_c, n_years)``.
            ``"equilarg"`` : equilibrium arguments in degrees, shape
            ``(n_c, n_years)``.
            ``"startyear"`` : first tabulated year.
            ``"units"`` : length unit of datum/amplitudes (optional,
            default ``"feet"``).
        logger : logging.Logger, optional
            Logger instance for diagnostic messages.

        Returns
        -------
        HarmonicCatalog

        Raises
        ------
        CatalogLoadError
            If a key is missing or any array is misaligned.
        """
        _log = logger or logging.getLogger(__name__)

        required = ('name', 'station', 'datum', 'A', 'kappa',
                    'nodefactor', 'equilarg', 'startyear')
        missing = [key for key in required if key not in harms]
        if missing:
            raise CatalogLoadError(f"Harmonics source is missing {missing}.")

        names = [normalize_constituent_name(str(n)) for n in
                 np.atleast_1d(harms['name'])]
        if 'speed' in harms and harms['speed'] is not None:
            speeds = _readonly(harms['speed'], 'speed', 1)
        else:
            try:
                speeds = [standard_speed(n) for n in names]
            except KeyError as exc:
                raise CatalogLoadError(
                    f"No speeds supplied: {exc.args[0]}"
                ) from exc
        if len(speeds) != len(names):
            raise CatalogLoadError(
                f"{len(names)} constituent names but {len(speeds)} speeds."
            )
        try:
            constituents = tuple(
                Constituent(n, float(s)) for n, s in zip(names, speeds)
            )
        except ValueError as exc:
            raise CatalogLoadError(str(exc)) from exc

        node = _readonly(harms['nodefactor'], 'nodefactor', 2)
        equil = _readonly(harms['equilarg'], 'equilarg', 2)
        for label, table in (('nodefactor', node), ('equilarg', equil)):
            if table.shape[0] != len(constituents):
                raise CatalogLoadError(
                    f"{label} has {table.shape[0]} rows for "
                    f"{len(constituents)} constituents."
                )
        start_year = int(np.asarray(harms['startyear']).item())
        corrections = YearCorrectionTable(start_year, node.T, equil.T)

        station_names = [str(s) for s in np.atleast_1d(harms['station'])]
        datums = _readonly(np.atleast_1d(harms['datum']), 'datum', 1)
        amps = _readonly(np.atleast_2d(harms['A']), 'A', 2)
        kappas = _readonly(np.atleast_2d(harms['kappa']), 'kappa', 2)
        n_st = len(station_names)
        if len(datums) != n_st or amps.shape[0] != n_st or kappas.shape[0] != n_st:
            raise CatalogLoadError(
                f"{n_st} stations but {len(datums)} datums, {amps.shape[0]} "
                f"amplitude rows and {kappas.shape[0]} kappa rows."
            )

        units = str(harms['units']) if 'units' in harms else 'feet'
        stations = tuple(
            StationHarmonics(
                name=station_names[i],
                datum=datums[i],
                constituents=constituents,
                amplitudes=amps[i],
                kappas=kappas[i],
                corrections=corrections,
                units=units,
            )
            for i in range(n_st)
        )
        catalog = cls(constituents, stations, corrections)
        _log.info(
            'Loaded harmonic catalog: %d stations, %d constituents, '
            'years %d-%d.',
            len(stations), len(constituents),
            corrections.start_year, corrections.end_year,
        )
        return catalog


def load_catalog(
    path: str | Path,
    logger: logging.Logger | None = None,
) -> HarmonicCatalog:
    """
    Load a harmonic catalog from a NumPy ``.npz`` archive.

    The archive holds the arrays described in
    :meth:`HarmonicCatalog.from_harms` under the same keys.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    CatalogLoadError
        If the archive cannot be read or its content is malformed.
    """
    _log = logger or logging.getLogger(__name__)
    path = Path(path)
    _log.info('Reading harmonics archive %s.', path)
    try:
        with np.load(path, allow_pickle=False) as archive:
            harms = {key: archive[key] for key in archive.files}
    except ValueError as exc:
        raise CatalogLoadError(f"Cannot read harmonics archive {path}: {exc}") from exc
    if 'units' in harms:
        harms['units'] = str(harms['units'].item())
    return HarmonicCatalog.from_harms(harms, logger=_log)


def save_catalog(catalog: HarmonicCatalog, path: str | Path) -> Path:
    """Write *catalog* to a ``.npz`` archive readable by :func:`load_catalog`."""
    path = Path(path)
    if path.suffix != '.npz':
        path = path.with_suffix('.npz')
    path.parent.mkdir(parents=True, exist_ok=True)
    stations = catalog.stations
    np.savez(
        path,
        name=np.array([c.name for c in catalog.constituents]),
        speed=np.array([c.speed for c in catalog.constituents]),
        station=np.array([s.name for s in stations]),
        datum=np.array([s.datum for s in stations]),
        A=np.vstack([s.amplitudes for s in stations]),
        kappa=np.vstack([s.kappas for s in stations]),
        nodefactor=catalog.corrections.node_factors.T,
        equilarg=catalog.corrections.equilibrium_args.T,
        startyear=np.array(catalog.start_year),
        units=np.array(stations[0].units),
    )
    return path
