"""
Record types for bike-share trips and stations.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Trip:
    """A single point-to-point rental."""
    start_station_id: str
    end_station_id: str
    started_at: datetime
    ended_at: datetime
    ride_id: Optional[str] = None


@dataclass(frozen=True)
class Station:
    """
    A bike dock keyed by its short identifier.

    ``short_name`` is the identifier trips refer to. ``station_id`` is the
    provider's internal id and is never used for joining trips.
    """
    short_name: str
    name: str
    longitude: float
    latitude: float
    station_id: Optional[str] = None
    arrivals: int = 0
    departures: int = 0

    @property
    def total_traffic(self) -> int:
        return self.arrivals + self.departures

    def to_dict(self) -> Dict[str, Any]:
        """Flatten to a plain dict, including the derived total."""
        return {
            'short_name': self.short_name,
            'name': self.name,
            'longitude': self.longitude,
            'latitude': self.latitude,
            'station_id': self.station_id,
            'arrivals': self.arrivals,
            'departures': self.departures,
            'total_traffic': self.total_traffic,
        }
