"""
Station traffic page.

Streamlit page with a time-of-day slider. Data is loaded once per session;
every slider change reruns the script, which filters, aggregates and
redraws from the current selector value.
"""

from dataclasses import dataclass
from typing import Optional
import logging
import time

import pandas as pd
import streamlit as st

from bikewatch.traffic import (
    NO_TIME_FILTER,
    compute_station_traffic,
    count_unattributed_trips,
    filter_trips_by_time,
    format_selector,
)
from .bike_lanes import BikeLaneLoader
from .data_sources import DataLoadError, TrafficDataset, load_datasets
from .map_config import BikeMapConfig, get_map_config
from .map_renderer import StationMapRenderer
from .symbology import StationSymbology

logger = logging.getLogger(__name__)


@dataclass
class StationView:
    """Everything the page shows for one selector value."""
    selector: int
    stations: pd.DataFrame
    trips_in_window: int
    unattributed_trips: int


def build_station_view(dataset: TrafficDataset, selector: int,
                       symbology: StationSymbology, window_minutes: int = 60) -> StationView:
    """Filter, aggregate and style the dataset for a selector value."""
    started = time.time()

    trips = filter_trips_by_time(dataset.trips, selector, window_minutes)
    stations = compute_station_traffic(dataset.stations, trips)
    styled = symbology.style_stations(stations)

    logger.debug(f"Built view for selector {selector} in {time.time() - started:.3f}s")
    return StationView(
        selector=selector,
        stations=styled,
        trips_in_window=len(trips),
        unattributed_trips=count_unattributed_trips(dataset.stations, trips)
    )


class TrafficPageInterface:
    """Main interface for the station traffic page."""

    def __init__(self, config: Optional[BikeMapConfig] = None):
        self.config = config or get_map_config()
        self.symbology = StationSymbology(self.config.get_station_style())
        self.renderer = StationMapRenderer(
            self.config.get_map_settings(),
            self.config.get_bike_lane_style(),
            self.config.get_station_style()
        )
        self.lane_loader = BikeLaneLoader()

    def render(self) -> None:
        st.title("🚲 Bikewatch")
        st.markdown("Bike lanes and bike-share station traffic by time of day")

        self._initialize_session_state()

        if st.sidebar.button("🔄 Reload data", key="bikewatch_reload"):
            st.session_state.bikewatch_dataset = None
            st.session_state.bikewatch_load_error = None

        dataset = self._ensure_dataset()
        if dataset is None:
            return

        selector = st.slider(
            "Filter by time",
            min_value=NO_TIME_FILTER,
            max_value=1439,
            value=NO_TIME_FILTER,
            key="bikewatch_time_filter"
        )
        st.caption(f"Showing trips around: **{format_selector(selector)}**")

        view = build_station_view(
            dataset, selector, self.symbology, self.config.get_window_minutes()
        )

        col1, col2, col3 = st.columns(3)
        col1.metric("Trips in window", f"{view.trips_in_window:,}")
        col2.metric("Stations", f"{len(view.stations):,}")
        col3.metric("Unattributed trips", f"{view.unattributed_trips:,}")

        map_obj = self.renderer.build_map(view.stations, st.session_state.bikewatch_lanes)
        self.renderer.render_to_streamlit(map_obj, self.config.get_map_settings().get('height', 650))

    def _initialize_session_state(self) -> None:
        if 'bikewatch_dataset' not in st.session_state:
            st.session_state.bikewatch_dataset = None
        if 'bikewatch_load_error' not in st.session_state:
            st.session_state.bikewatch_load_error = None
        if 'bikewatch_lanes' not in st.session_state:
            st.session_state.bikewatch_lanes = None

    def _ensure_dataset(self) -> Optional[TrafficDataset]:
        """Load stations, trips and lanes once per session, reporting failures."""
        if st.session_state.bikewatch_load_error:
            st.error(f"❌ Data could not be loaded: {st.session_state.bikewatch_load_error}")
            return None

        if st.session_state.bikewatch_dataset is None:
            with st.spinner("Loading stations and trips..."):
                try:
                    st.session_state.bikewatch_dataset = load_datasets(self.config)
                except DataLoadError as e:
                    st.session_state.bikewatch_load_error = str(e)
                    st.error(f"❌ Data could not be loaded: {e}")
                    return None

        if st.session_state.bikewatch_lanes is None:
            with st.spinner("Loading bike lanes..."):
                st.session_state.bikewatch_lanes = self.lane_loader.load_layers(
                    self.config.get_bike_lane_sources()
                )

        return st.session_state.bikewatch_dataset


def render_traffic_page(config: Optional[BikeMapConfig] = None) -> None:
    """Render the station traffic page."""
    TrafficPageInterface(config).render()
