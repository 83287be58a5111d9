"""
Tests for the Folium station map renderer.
"""

import folium
import geopandas as gpd
import pytest
from shapely.geometry import LineString

from bikewatch.maps.bike_lanes import BikeLaneLayer
from bikewatch.maps.map_renderer import StationMapRenderer, station_tooltip
from bikewatch.maps.symbology import StationSymbology
from bikewatch.traffic.aggregation import compute_station_traffic


@pytest.fixture
def styled_stations(sample_stations, sample_trips):
    stations = compute_station_traffic(sample_stations, sample_trips)
    return StationSymbology().style_stations(stations)


@pytest.fixture
def lane_layer():
    gdf = gpd.GeoDataFrame({
        'Street': ['Mass Ave'],
        'geometry': [LineString([(-71.094, 42.358), (-71.100, 42.362)])]
    }, crs="EPSG:4326")
    return BikeLaneLayer(layer_id='bike-lanes-cambridge', data=gdf)


def children_of_type(parent, cls):
    return [child for child in parent._children.values() if isinstance(child, cls)]


class TestStationMapRenderer:
    """Test cases for StationMapRenderer."""

    def setup_method(self):
        self.renderer = StationMapRenderer(
            map_settings={'center': [42.36, -71.09], 'zoom': 13, 'tiles': 'OpenStreetMap'}
        )

    def test_create_base_map(self):
        m = self.renderer.create_base_map()

        assert isinstance(m, folium.Map)
        assert m.location == [42.36, -71.09]

    def test_add_station_markers(self, styled_stations):
        m = self.renderer.create_base_map()
        self.renderer.add_station_markers(m, styled_stations)

        groups = children_of_type(m, folium.FeatureGroup)
        markers = children_of_type(groups[0], folium.CircleMarker)
        assert len(markers) == 2
        radii = sorted(marker.options['radius'] for marker in markers)
        assert radii[-1] == pytest.approx(25)

    def test_no_stations_adds_nothing(self, styled_stations):
        m = self.renderer.create_base_map()
        self.renderer.add_station_markers(m, styled_stations.iloc[0:0])

        assert children_of_type(m, folium.FeatureGroup) == []

    def test_add_bike_lane_layer(self, lane_layer):
        m = self.renderer.create_base_map()
        self.renderer.add_bike_lane_layer(m, lane_layer)

        layers = children_of_type(m, folium.GeoJson)
        assert len(layers) == 1
        assert layers[0].layer_name == 'bike-lanes-cambridge'

    def test_build_map_renders_html(self, styled_stations, lane_layer):
        m = self.renderer.build_map(styled_stations, [lane_layer])
        html = m.get_root().render()

        assert 'Traffic flow' in html
        assert 'More departures' in html
        assert '3 trips (2 departures, 1 arrivals)' in html
        assert '#32D400' in html

    def test_tooltip_text(self, styled_stations):
        station = styled_stations.set_index('short_name').loc['B']
        assert station_tooltip(station) == "<b>MIT at Mass Ave</b><br>1 trips (0 departures, 1 arrivals)"
