"""
Tests for station marker symbology.
"""

import pytest

from bikewatch.maps.symbology import STYLED_COLUMNS, FlowColorScheme, StationSymbology
from bikewatch.traffic.aggregation import compute_station_traffic
from bikewatch.traffic.models import Station


class TestFlowColorScheme:

    def setup_method(self):
        self.colors = FlowColorScheme('#0000ff', '#ff0000')

    def test_end_colors(self):
        assert self.colors.color_for(1.0) == '#0000ff'
        assert self.colors.color_for(0.0) == '#ff0000'

    def test_balanced_is_a_blend(self):
        assert self.colors.color_for(0.5) == '#800080'

    def test_legend_entries(self):
        entries = self.colors.legend_entries()
        assert [e['label'] for e in entries] == ['More departures', 'Balanced', 'More arrivals']
        assert all(e['color'].startswith('#') for e in entries)

    def test_named_colors(self):
        assert FlowColorScheme().color_for(1.0) == '#4682b4'


class TestStationSymbology:
    """Test cases for StationSymbology."""

    def setup_method(self):
        self.symbology = StationSymbology({'max_radius': 25})

    def test_style_stations(self, sample_stations, sample_trips):
        stations = compute_station_traffic(sample_stations, sample_trips)
        styled = self.symbology.style_stations(stations).set_index('short_name')

        assert list(styled.reset_index().columns) == STYLED_COLUMNS
        assert styled.loc['A', 'total_traffic'] == 3
        assert styled.loc['A', 'radius'] == pytest.approx(25)
        assert styled.loc['B', 'radius'] == pytest.approx(25 * (1 / 3) ** 0.5)
        assert styled.loc['A', 'flow'] == 1.0
        assert styled.loc['B', 'flow'] == 0.0

    def test_all_idle_stations_get_zero_radius(self, sample_stations):
        styled = self.symbology.style_stations(compute_station_traffic(sample_stations, []))

        assert (styled['radius'] == 0).all()
        assert (styled['flow'] == 0.5).all()

    def test_empty_station_list(self):
        styled = self.symbology.style_stations([])

        assert styled.empty
        assert list(styled.columns) == STYLED_COLUMNS

    def test_colors_follow_flow(self):
        stations = [
            Station("D", "Departures", -71.0, 42.0, departures=9, arrivals=1),
            Station("R", "Arrivals", -71.0, 42.0, departures=1, arrivals=9),
        ]
        styled = self.symbology.style_stations(stations).set_index('short_name')

        assert styled.loc['D', 'color'] == self.symbology.colors.color_for(1.0)
        assert styled.loc['R', 'color'] == self.symbology.colors.color_for(0.0)
