"""
Prediction Subpackage

Provides functionality for:
- Harmonic constants catalog with yearly node factors and equilibrium
  arguments
- Station lookup by partial name
- UTC time grids and per-year correction lookup
- Harmonic synthesis of water height
- High/low water and mark-level events, comparison with observations,
  CSV export
- An optional prompt-driven front end
"""

from tide_harmonics.prediction.catalog import (
    HarmonicCatalog,
    StationHarmonics,
    YearCorrectionTable,
    load_catalog,
    save_catalog,
)
from tide_harmonics.prediction.comparison import (
    compare_with_observations,
    summarize_residual,
)
from tide_harmonics.prediction.constituents import (
    CONSTITUENT_SPEEDS,
    NOS_37_CONSTITUENTS,
    Constituent,
    normalize_constituent_name,
    standard_speed,
)
from tide_harmonics.prediction.exceptions import (
    AmbiguousStation,
    CatalogLoadError,
    InvalidInterval,
    InvalidRange,
    StationNotFound,
    TidePredictionError,
    YearOutOfRange,
)
from tide_harmonics.prediction.export import write_prediction_csv
from tide_harmonics.prediction.extremes import (
    extract_high_low_water,
    extract_mark_crossings,
)
from tide_harmonics.prediction.resolver import (
    choose_candidate,
    find_candidates,
    resolve_station,
)
from tide_harmonics.prediction.series import (
    PredictionSeries,
    assemble_series,
    concat_series,
)
from tide_harmonics.prediction.synthesis import height_at, synthesize_heights
from tide_harmonics.prediction.tidal_prediction import (
    PredictionRequest,
    iter_predictions,
    predict_station,
    predict_tide,
)
from tide_harmonics.prediction.time_grid import TimeGrid, generate_time_grid, to_utc
from tide_harmonics.prediction.year_index import (
    YearIndex,
    hours_since_year_start,
    map_year_index,
)

__all__ = [
    # Constituents
    'Constituent',
    'CONSTITUENT_SPEEDS',
    'NOS_37_CONSTITUENTS',
    'normalize_constituent_name',
    'standard_speed',
    # Catalog
    'HarmonicCatalog',
    'StationHarmonics',
    'YearCorrectionTable',
    'load_catalog',
    'save_catalog',
    # Station lookup
    'find_candidates',
    'resolve_station',
    'choose_candidate',
    # Time grid and year index
    'TimeGrid',
    'generate_time_grid',
    'to_utc',
    'YearIndex',
    'map_year_index',
    'hours_since_year_start',
    # Synthesis and results
    'synthesize_heights',
    'height_at',
    'PredictionSeries',
    'assemble_series',
    'concat_series',
    # Pipeline
    'PredictionRequest',
    'predict_tide',
    'predict_station',
    'iter_predictions',
    # Post-processing
    'extract_high_low_water',
    'extract_mark_crossings',
    'compare_with_observations',
    'summarize_residual',
    'write_prediction_csv',
    # Errors
    'TidePredictionError',
    'CatalogLoadError',
    'StationNotFound',
    'AmbiguousStation',
    'InvalidRange',
    'InvalidInterval',
    'YearOutOfRange',
]
