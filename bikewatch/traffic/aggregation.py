"""
Station traffic aggregation.

Counts departures and arrivals per station id over a set of trips and joins
the counts onto station records.
"""

from collections import Counter
from dataclasses import dataclass, field, replace
from typing import List, Sequence
import logging

from .models import Station, Trip

logger = logging.getLogger(__name__)


@dataclass
class TrafficCounts:
    """Departure and arrival counts keyed by station short identifier."""
    departures: Counter = field(default_factory=Counter)
    arrivals: Counter = field(default_factory=Counter)

    def departures_for(self, station_key: str) -> int:
        return self.departures.get(station_key, 0)

    def arrivals_for(self, station_key: str) -> int:
        return self.arrivals.get(station_key, 0)


def count_trips(trips: Sequence[Trip]) -> TrafficCounts:
    """Group trips by start station (departures) and end station (arrivals)."""
    counts = TrafficCounts()
    for trip in trips:
        counts.departures[trip.start_station_id] += 1
        counts.arrivals[trip.end_station_id] += 1
    return counts


def compute_station_traffic(stations: Sequence[Station], trips: Sequence[Trip]) -> List[Station]:
    """
    Attach departure and arrival counts to each station.

    Stations are matched on ``short_name``. Stations without trips get zero
    counts; trips naming an unknown station are not attributed anywhere.

    Args:
        stations: Station reference records
        trips: Trips in the active (possibly filtered) set

    Returns:
        Enriched copies of the stations, in input order
    """
    counts = count_trips(trips)

    enriched = [
        replace(
            station,
            departures=counts.departures_for(station.short_name),
            arrivals=counts.arrivals_for(station.short_name),
        )
        for station in stations
    ]

    logger.debug(f"Aggregated {len(trips)} trips onto {len(enriched)} stations")
    return enriched


def count_unattributed_trips(stations: Sequence[Station], trips: Sequence[Trip]) -> int:
    """Number of trips whose start station is not in the station list."""
    known = {station.short_name for station in stations}
    unattributed = sum(1 for trip in trips if trip.start_station_id not in known)
    if unattributed:
        logger.debug(f"{unattributed} trips start at stations missing from the station list")
    return unattributed
