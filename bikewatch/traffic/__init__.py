"""
Traffic Component - station traffic aggregation and time filtering.

This component turns trip records into per-station departure and arrival
counts, filtered by time of day, and provides the scales used to draw them.
"""

from .models import Trip, Station
from .time_filter import (
    NO_TIME_FILTER,
    filter_trips_by_time,
    format_selector,
    format_time,
    minutes_since_midnight,
)
from .aggregation import TrafficCounts, compute_station_traffic, count_trips, count_unattributed_trips
from .scale import RadiusScale, departure_ratio, quantize_flow

__all__ = [
    'Trip',
    'Station',
    'NO_TIME_FILTER',
    'filter_trips_by_time',
    'format_selector',
    'format_time',
    'minutes_since_midnight',
    'TrafficCounts',
    'compute_station_traffic',
    'count_trips',
    'count_unattributed_trips',
    'RadiusScale',
    'departure_ratio',
    'quantize_flow'
]
