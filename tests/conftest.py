"""
Pytest configuration and fixtures for station traffic tests.
"""

import json
import tempfile
from datetime import datetime

import pandas as pd
import pytest

from bikewatch.traffic.models import Station, Trip


def make_trip(start: str, end: str, started: str = "2024-03-01 08:00",
              ended: str = "2024-03-01 08:20") -> Trip:
    """Build a trip from short timestamp strings."""
    return Trip(
        start_station_id=start,
        end_station_id=end,
        started_at=datetime.strptime(started, "%Y-%m-%d %H:%M"),
        ended_at=datetime.strptime(ended, "%Y-%m-%d %H:%M"),
    )


@pytest.fixture
def trip_factory():
    return make_trip


@pytest.fixture
def sample_stations():
    """Two stations whose internal ids differ from their short names."""
    return [
        Station(short_name="A", name="Kendall T", longitude=-71.0862, latitude=42.3625, station_id="101"),
        Station(short_name="B", name="MIT at Mass Ave", longitude=-71.0939, latitude=42.3581, station_id="A"),
    ]


@pytest.fixture
def sample_trips():
    """A->B and A->A, the second one in the evening."""
    return [
        make_trip("A", "B", "2024-03-01 08:00", "2024-03-01 08:20"),
        make_trip("A", "A", "2024-03-01 18:00", "2024-03-01 18:45"),
    ]


@pytest.fixture
def stations_payload():
    """Stations JSON as published by the bike-share feed."""
    return {
        "data": {
            "stations": [
                {"short_name": "A32000", "name": "Kendall T", "lon": -71.0862, "lat": 42.3625, "station_id": "1"},
                {"short_name": "M32006", "name": "MIT at Mass Ave", "lon": -71.0939, "lat": 42.3581, "station_id": "2"},
                {"short_name": "M32041", "name": "Central Square", "lon": -71.1031, "lat": 42.3651},
            ]
        }
    }


@pytest.fixture
def trips_frame():
    """Trips table in the shape of the published CSV."""
    return pd.DataFrame({
        'ride_id': ['r1', 'r2', 'r3', 'r4'],
        'bike_type': ['classic', 'electric', 'classic', 'classic'],
        'started_at': ['2024-03-01 08:00:00', '2024-03-01 09:15:00', '2024-03-01 17:30:00', 'not a time'],
        'ended_at': ['2024-03-01 08:20:00', '2024-03-01 09:40:00', '2024-03-01 17:55:00', '2024-03-01 18:00:00'],
        'start_station_id': ['A32000', 'M32006', 'A32000', 'A32000'],
        'end_station_id': ['M32006', 'A32000', 'X99999', 'M32006'],
        'is_member': [1, 0, 1, 1],
    })


@pytest.fixture
def temp_directory():
    """Create temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def data_files(temp_directory, stations_payload, trips_frame):
    """Write the sample stations and trips to disk and return their paths."""
    stations_path = f"{temp_directory}/stations.json"
    trips_path = f"{temp_directory}/trips.csv"
    with open(stations_path, 'w') as f:
        json.dump(stations_payload, f)
    trips_frame.to_csv(trips_path, index=False)
    return stations_path, trips_path


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "performance: mark test as a performance test"
    )
