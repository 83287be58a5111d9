"""
Bikewatch - bike lane and bike-share station traffic map.

The ``traffic`` component holds the station-traffic aggregation and
time-filtering logic; the ``maps`` component loads data and renders it.
"""

__version__ = "1.0.0"
