"""
Exception types raised by the prediction core.

Every failure is reported eagerly, before any synthesis work starts, and
none of them are retried internally.
"""
from __future__ import annotations


class TidePredictionError(Exception):
    """Base class for all prediction-core errors."""


class CatalogLoadError(TidePredictionError):
    """The harmonics source is malformed or its tables are misaligned."""


class StationNotFound(TidePredictionError, LookupError):
    """No station matches the requested identifier."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"No station found matching '{query}'.")


class AmbiguousStation(TidePredictionError, LookupError):
    """More than one station matches a substring query."""

    def __init__(self, query: str, candidates: list[str]):
        self.query = query
        self.candidates = list(candidates)
        listing = '; '.join(
            f"[{i}] {name}" for i, name in enumerate(self.candidates, start=1)
        )
        super().__init__(
            f"Multiple stations match '{query}' "
            f"({len(self.candidates)} candidates): {listing}"
        )


class InvalidRange(TidePredictionError, ValueError):
    """The requested start instant is after the end instant."""


class InvalidInterval(TidePredictionError, ValueError):
    """The sampling interval is not an integer number of minutes in [1, 60]."""


class YearOutOfRange(TidePredictionError, LookupError):
    """An instant falls outside the years covered by the correction tables."""

    def __init__(self, year: int, start_year: int, end_year: int):
        self.year = int(year)
        self.start_year = int(start_year)
        self.end_year = int(end_year)
        super().__init__(
            f"Year {self.year} is outside the tabulated correction years "
            f"{self.start_year}-{self.end_year}."
        )
