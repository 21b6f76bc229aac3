"""
CSV export of predicted series.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pandas as pd

from .series import PredictionSeries

logger = logging.getLogger(__name__)


def write_prediction_csv(
    series: PredictionSeries,
    output_path: str | Path,
    metadata: dict[str, Any] | None = None,
    events: pd.DataFrame | None = None,
    logger: logging.Logger | None = None,
) -> Path:
    """
    Write a predicted series to CSV with a ``#``-prefixed metadata header.

    Parameters
    ----------
    series : PredictionSeries
        Series to write.
    output_path : str or Path
        Destination file path; parent directories are created.
    metadata : dict, optional
        Extra key/value pairs to include in the header.
    events : pd.DataFrame, optional
        Event table (high/low water or mark crossings); when given,
        written instead of the full series.
    logger : logging.Logger, optional
        Logger instance.

    Returns
    -------
    Path
        The file written.
    """
    _log = logger or logging.getLogger(__name__)

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    header_lines = [
        f"# Station: {series.station}",
        f"# Datum: {series.datum} {series.units}",
        f"# Interval: {series.interval_minutes} min",
        '# Time zone: UTC',
        f"# Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')}",
    ]
    if metadata:
        for key, value in metadata.items():
            header_lines.append(f"# {key}: {value}")

    table = events if events is not None else series.to_frame()
    with open(path, 'w', newline='') as f:
        for line in header_lines:
            f.write(line + '\n')
        table.to_csv(f, index=False, date_format='%Y-%m-%dT%H:%M:%SZ')

    _log.info('Wrote %d rows for %s to %s.', len(table), series.station, path)
    return path
