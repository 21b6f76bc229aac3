"""
Predict tide heights for a reference station from a harmonics archive.

Example::

    python bin/predict_tide.py --station "Monterey" \
        --start "2013-05-16 16:00" --end "2013-05-20 16:00" --interval 6 \
        --output output/monterey.csv

Options not given on the command line are read from
``conf/tide_harmonics.conf``.  Without ``--station``/``--start``/``--end``
(or with ``--interactive``) the script prompts for them.
"""
from __future__ import annotations

import argparse
import logging.config
import sys
from pathlib import Path

import pandas as pd

from tide_harmonics.prediction import (
    PredictionRequest,
    TidePredictionError,
    extract_high_low_water,
    extract_mark_crossings,
    load_catalog,
    predict_tide,
    write_prediction_csv,
)
from tide_harmonics.prediction.interactive import run_interactive
from tide_harmonics.utils import Utils


def _setup_logger(logger=None):
    """Initialize logger if not provided."""
    if logger is not None:
        return logger

    log_config_file = Utils().get_log_config_file()
    if log_config_file.is_file():
        logging.config.fileConfig(log_config_file)
    else:
        logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger('root')
    logger.info('Using log config %s', log_config_file)
    return logger


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument('--config', help='Configuration file (INI)')
    parser.add_argument('--catalog', help='Harmonics archive (.npz)')
    parser.add_argument('--station', help='Full or partial station name')
    parser.add_argument('--start', help='Start time YYYY-MM-DD HH:MM (UTC)')
    parser.add_argument('--end', help='End time YYYY-MM-DD HH:MM (UTC)')
    parser.add_argument('--interval', type=int,
                        help='Minutes between predictions (1-60)')
    parser.add_argument('--output', help='CSV file to write')
    parser.add_argument('--events', action='store_true',
                        help='Report high/low tide events only')
    parser.add_argument('--mark-level', type=float,
                        help='Report times the tide crosses this height')
    parser.add_argument('--interactive', action='store_true',
                        help='Prompt for the station, interval and range')
    return parser.parse_args(argv)


def _read_defaults(args, utils, logger):
    """Fill the catalog path and interval from the config file if missing."""
    catalog_path = args.catalog
    interval = args.interval
    if catalog_path is None or interval is None:
        logger.info('Using config %s', utils.get_config_file())
        if catalog_path is None:
            catalog_path = utils.read_config_section('catalog', logger)['path']
        if interval is None:
            interval = int(
                utils.read_config_section('prediction', logger)['interval_minutes']
            )
    return Path(catalog_path), interval


def _collect_events(series, args, logger):
    tables = []
    if args.events:
        tables.append(extract_high_low_water(series, logger=logger))
    if args.mark_level is not None:
        tables.append(
            extract_mark_crossings(series, args.mark_level, logger=logger)
        )
    if not tables:
        return None
    events = pd.concat(tables, ignore_index=True)
    return events.sort_values('Time', kind='stable', ignore_index=True)


def main(argv=None, logger=None):
    args = _parse_args(argv)
    logger = _setup_logger(logger)
    utils = Utils(args.config)

    try:
        catalog_path, interval = _read_defaults(args, utils, logger)
    except (FileNotFoundError, KeyError, ValueError) as exc:
        logger.error('Configuration error: %s', exc)
        return 1

    try:
        catalog = load_catalog(catalog_path, logger=logger)
        if args.interactive or not (args.station and args.start and args.end):
            series = run_interactive(catalog, station_query=args.station,
                                     interval_minutes=interval, logger=logger)
        else:
            request = PredictionRequest(args.station, args.start, args.end,
                                        interval)
            series = predict_tide(catalog, request, logger=logger)
        events = _collect_events(series, args, logger)
    except TidePredictionError as exc:
        logger.error('Prediction failed: %s', exc)
        return 1
    except FileNotFoundError as exc:
        logger.error('%s', exc)
        return 1
    except ValueError as exc:
        logger.error('Invalid input: %s', exc)
        return 1

    if args.output:
        write_prediction_csv(series, args.output, events=events, logger=logger)
    else:
        table = events if events is not None else series.to_frame()
        print(table.to_string(index=False))
    return 0


if __name__ == '__main__':
    sys.exit(main())
