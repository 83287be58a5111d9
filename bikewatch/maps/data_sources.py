"""
Station and trip data loading.

Both datasets are fetched concurrently and validated at this boundary, so the
traffic component only ever sees well-formed Trip and Station records.
"""

import io
import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

import pandas as pd
import requests

from bikewatch.traffic.models import Station, Trip
from .map_config import BikeMapConfig

logger = logging.getLogger(__name__)

STATION_REQUIRED_FIELDS = ['short_name', 'name', 'lon', 'lat']
TRIP_REQUIRED_COLUMNS = ['start_station_id', 'end_station_id', 'started_at', 'ended_at']


class DataLoadError(Exception):
    """Raised when a dataset cannot be fetched or does not have the expected shape."""


@dataclass
class TrafficDataset:
    """Stations and trips loaded together."""
    stations: List[Station] = field(default_factory=list)
    trips: List[Trip] = field(default_factory=list)


def is_url(source: Union[str, Path]) -> bool:
    return str(source).startswith(('http://', 'https://'))


def read_source_text(source: Union[str, Path], timeout: float = 30) -> str:
    """
    Read a remote or local source as text.

    Raises:
        DataLoadError: On network, HTTP, file or text decoding errors
    """
    try:
        if is_url(source):
            response = requests.get(str(source), timeout=timeout)
            response.raise_for_status()
            return response.text
        return Path(source).read_text(encoding='utf-8')
    except (requests.RequestException, OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {source}: {e}")
        raise DataLoadError(f"Could not read {source}: {e}") from e


def parse_station_record(record: Dict[str, Any]) -> Station:
    """
    Build a Station from a raw JSON record.

    Raises:
        KeyError: If a required field is missing
        ValueError: If coordinates are not numeric
    """
    missing = [name for name in STATION_REQUIRED_FIELDS if record.get(name) in (None, '')]
    if missing:
        raise KeyError(f"missing fields {missing}")

    station_id = record.get('station_id')
    return Station(
        short_name=str(record['short_name']),
        name=str(record['name']),
        longitude=float(record['lon']),
        latitude=float(record['lat']),
        station_id=str(station_id) if station_id is not None else None,
    )


def parse_stations(payload: Any) -> List[Station]:
    """
    Parse a stations payload shaped ``{"data": {"stations": [...]}}`` or a bare list.

    Records missing required fields are skipped with a warning. Stations are
    keyed by short_name, so only the first record for each short_name is kept.

    Raises:
        DataLoadError: If the payload holds no station list
    """
    if isinstance(payload, dict):
        data = payload.get('data')
        records = data.get('stations') if isinstance(data, dict) else None
    else:
        records = payload

    if not isinstance(records, list):
        raise DataLoadError("Stations payload does not contain a station list")

    stations = []
    seen = set()
    skipped = 0
    duplicates = 0
    for record in records:
        try:
            station = parse_station_record(record)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            skipped += 1
            logger.debug(f"Skipping station record {record!r}: {e}")
            continue

        if station.short_name in seen:
            duplicates += 1
            logger.debug(f"Skipping duplicate station {station.short_name}")
            continue

        seen.add(station.short_name)
        stations.append(station)

    if skipped:
        logger.warning(f"Skipped {skipped} malformed station records")
    if duplicates:
        logger.warning(f"Skipped {duplicates} station records with a duplicate short_name")

    logger.info(f"Parsed {len(stations)} stations")
    return stations


def load_stations(source: Union[str, Path], timeout: float = 30) -> List[Station]:
    """Fetch and parse the station list."""
    text = read_source_text(source, timeout)
    try:
        payload = json.loads(text)
    except ValueError as e:
        logger.error(f"Stations payload from {source} is not valid JSON: {e}")
        raise DataLoadError(f"Invalid stations JSON: {e}") from e
    return parse_stations(payload)


def parse_trips(df: pd.DataFrame) -> List[Trip]:
    """
    Convert a trips table into Trip records, parsing timestamps once.

    Rows with missing station ids or unparseable timestamps are dropped.

    Raises:
        DataLoadError: If a required column is missing
    """
    missing = [col for col in TRIP_REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise DataLoadError(f"Trips data is missing required columns: {missing}")

    trips_df = df.copy()
    trips_df['started_at'] = pd.to_datetime(trips_df['started_at'], format='ISO8601', errors='coerce')
    trips_df['ended_at'] = pd.to_datetime(trips_df['ended_at'], format='ISO8601', errors='coerce')

    initial_count = len(trips_df)
    trips_df = trips_df.dropna(subset=TRIP_REQUIRED_COLUMNS)
    dropped = initial_count - len(trips_df)
    if dropped > 0:
        logger.warning(f"Dropped {dropped} trips with missing station ids or timestamps")

    has_ride_id = 'ride_id' in trips_df.columns
    trips = [
        Trip(
            start_station_id=str(row.start_station_id),
            end_station_id=str(row.end_station_id),
            started_at=row.started_at,
            ended_at=row.ended_at,
            ride_id=str(row.ride_id) if has_ride_id and pd.notna(row.ride_id) else None,
        )
        for row in trips_df.itertuples(index=False)
    ]

    logger.info(f"Parsed {len(trips)} trips")
    return trips


def load_trips(source: Union[str, Path], timeout: float = 30) -> List[Trip]:
    """Fetch and parse the trips CSV."""
    text = read_source_text(source, timeout)
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype={'start_station_id': str, 'end_station_id': str}
        )
    except (ValueError, pd.errors.EmptyDataError) as e:
        logger.error(f"Trips data from {source} could not be parsed: {e}")
        raise DataLoadError(f"Invalid trips CSV: {e}") from e
    return parse_trips(df)


def load_datasets(config: Optional[BikeMapConfig] = None,
                  stations_source: Optional[str] = None,
                  trips_source: Optional[str] = None) -> TrafficDataset:
    """
    Load stations and trips concurrently and join both results.

    Args:
        config: Map configuration; defaults are used when omitted
        stations_source: Overrides the configured stations source
        trips_source: Overrides the configured trips source

    Returns:
        TrafficDataset with both datasets

    Raises:
        DataLoadError: If either load fails; no partial dataset is returned
    """
    config = config or BikeMapConfig()
    sources = config.get_data_sources()
    loading = config.get_loading_settings()
    timeout = loading.get('timeout_sec', 30)

    stations_source = stations_source or sources['stations']
    trips_source = trips_source or sources['trips']

    logger.info(f"Loading stations from {stations_source} and trips from {trips_source}")

    with ThreadPoolExecutor(max_workers=loading.get('max_workers', 2)) as executor:
        stations_future = executor.submit(load_stations, stations_source, timeout)
        trips_future = executor.submit(load_trips, trips_source, timeout)

        # Both futures are awaited before either error propagates
        errors = []
        results = {}
        for name, future in (('stations', stations_future), ('trips', trips_future)):
            try:
                results[name] = future.result()
            except DataLoadError as e:
                errors.append(f"{name}: {e}")
            except Exception as e:
                logger.exception(f"Unexpected error while loading {name}")
                errors.append(f"{name}: {e}")

    if errors:
        message = "; ".join(errors)
        logger.error(f"Data load failed: {message}")
        raise DataLoadError(message)

    dataset = TrafficDataset(stations=results['stations'], trips=results['trips'])
    logger.info(f"Loaded {len(dataset.stations)} stations and {len(dataset.trips)} trips")
    return dataset
