"""
Maps Component - data loading and interactive map rendering.

Stations and trips are loaded concurrently, bike lanes are read as GeoJSON
overlays, and the result is drawn with Folium inside a Streamlit page.
"""

from .map_config import BikeMapConfig, get_map_config
from .data_sources import DataLoadError, TrafficDataset, load_datasets
from .bike_lanes import BikeLaneLayer, BikeLaneLoader
from .symbology import StationSymbology
from .map_renderer import StationMapRenderer
from .traffic_page import render_traffic_page

__all__ = [
    'BikeMapConfig',
    'get_map_config',
    'DataLoadError',
    'TrafficDataset',
    'load_datasets',
    'BikeLaneLayer',
    'BikeLaneLoader',
    'StationSymbology',
    'StationMapRenderer',
    'render_traffic_page'
]
