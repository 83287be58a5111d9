"""
Visual scales for station markers.

RadiusScale maps total traffic to a circle radius with a square-root curve so
that circle area grows linearly with traffic. The flow helpers classify a
station by its share of departures.
"""

from typing import Iterable, List, Sequence
import logging

import numpy as np

from .models import Station

logger = logging.getLogger(__name__)

DEFAULT_MAX_RADIUS = 25.0
FLOW_CLASSES = (0.0, 0.5, 1.0)


class RadiusScale:
    """Square-root scale from [0, max_traffic] to [0, max_radius]."""

    def __init__(self, max_traffic: float, max_radius: float = DEFAULT_MAX_RADIUS):
        if max_traffic < 0:
            raise ValueError(f"max_traffic must be non-negative, got {max_traffic}")
        self.max_traffic = max_traffic
        self.max_radius = max_radius

    @classmethod
    def from_stations(cls, stations: Sequence[Station],
                      max_radius: float = DEFAULT_MAX_RADIUS) -> 'RadiusScale':
        """Build a scale whose domain ends at the busiest station."""
        max_traffic = max((station.total_traffic for station in stations), default=0)
        logger.debug(f"Radius scale domain [0, {max_traffic}] -> [0, {max_radius}]")
        return cls(max_traffic, max_radius)

    def __call__(self, total_traffic: float) -> float:
        if total_traffic < 0:
            raise ValueError(f"Traffic must be non-negative, got {total_traffic}")
        if self.max_traffic == 0:
            return 0.0
        return float(np.sqrt(total_traffic / self.max_traffic) * self.max_radius)

    def scale_many(self, values: Iterable[float]) -> List[float]:
        """Vectorized version of calling the scale on each value."""
        values = np.asarray(list(values), dtype=float)
        if values.size == 0:
            return []
        if (values < 0).any():
            raise ValueError("Traffic values must be non-negative")
        if self.max_traffic == 0:
            return [0.0] * len(values)
        return (np.sqrt(values / self.max_traffic) * self.max_radius).tolist()


def departure_ratio(station: Station) -> float:
    """Share of a station's traffic that departs; 0.5 for idle stations."""
    if station.total_traffic == 0:
        return 0.5
    return station.departures / station.total_traffic


def quantize_flow(ratio: float) -> float:
    """
    Snap a departure ratio in [0, 1] to 0, 0.5 or 1 using three equal bins.
    """
    if not 0.0 <= ratio <= 1.0:
        raise ValueError(f"Ratio must be between 0 and 1, got {ratio}")
    index = min(int(ratio * len(FLOW_CLASSES)), len(FLOW_CLASSES) - 1)
    return FLOW_CLASSES[index]
