"""
Map rendering module for the station traffic map.

This module builds the Folium map: base tiles, bike lane overlays, station
circle markers with tooltips and a flow legend.
"""

from typing import Any, Dict, List, Optional
import logging

import folium
import pandas as pd

from .bike_lanes import BikeLaneLayer
from .symbology import FlowColorScheme

logger = logging.getLogger(__name__)


def station_tooltip(station: pd.Series) -> str:
    """Tooltip text for one station marker."""
    return (
        f"<b>{station['name']}</b><br>"
        f"{int(station['total_traffic'])} trips "
        f"({int(station['departures'])} departures, {int(station['arrivals'])} arrivals)"
    )


class StationMapRenderer:
    """Core map rendering using Folium."""

    def __init__(self, map_settings: Optional[Dict[str, Any]] = None,
                 lane_style: Optional[Dict[str, Any]] = None,
                 station_style: Optional[Dict[str, Any]] = None):
        self.map_settings = map_settings or {}
        self.lane_style = lane_style or {'color': '#32D400', 'weight': 5, 'opacity': 0.6}
        self.station_style = station_style or {}
        self.colors = FlowColorScheme(
            self.station_style.get('departure_color', 'steelblue'),
            self.station_style.get('arrival_color', 'darkorange')
        )

    def create_base_map(self) -> folium.Map:
        """Create the base map from the configured view settings."""
        center = self.map_settings.get('center', [42.36027, -71.09415])
        m = folium.Map(
            location=center,
            zoom_start=self.map_settings.get('zoom', 12),
            min_zoom=self.map_settings.get('min_zoom', 5),
            max_zoom=self.map_settings.get('max_zoom', 18),
            tiles=self.map_settings.get('tiles', 'CartoDB positron')
        )
        logger.debug(f"Created base map centered at {center}")
        return m

    def add_bike_lane_layer(self, map_obj: folium.Map, layer: BikeLaneLayer) -> folium.Map:
        """Draw a bike lane layer with the shared lane style."""
        if layer.data.empty:
            logger.warning(f"Bike lane layer {layer.layer_id} has no features")
            return map_obj

        style = {
            'color': self.lane_style.get('color', '#32D400'),
            'weight': self.lane_style.get('weight', 5),
            'opacity': self.lane_style.get('opacity', 0.6)
        }

        # Only geometry is needed; extra columns may not be JSON serializable
        folium.GeoJson(
            layer.data[['geometry']],
            name=layer.layer_id,
            style_function=lambda feature, style=style: style
        ).add_to(map_obj)

        logger.info(f"Added bike lane layer {layer.layer_id} with {len(layer.data)} features")
        return map_obj

    def add_station_markers(self, map_obj: folium.Map, stations: pd.DataFrame) -> folium.Map:
        """
        Add one circle marker per station.

        Args:
            map_obj: Folium Map object
            stations: Styled stations as returned by StationSymbology.style_stations

        Returns:
            Updated Folium Map object
        """
        if stations.empty:
            logger.warning("No stations to render")
            return map_obj

        group = folium.FeatureGroup(name='Stations')

        # Largest circles first so small stations stay on top and hoverable
        for _, station in stations.sort_values('radius', ascending=False).iterrows():
            folium.CircleMarker(
                location=[station['latitude'], station['longitude']],
                radius=float(station['radius']),
                color=self.station_style.get('stroke_color', '#ffffff'),
                weight=self.station_style.get('stroke_width', 1),
                fill=True,
                fill_color=station['color'],
                fill_opacity=self.station_style.get('fill_opacity', 0.6),
                tooltip=folium.Tooltip(station_tooltip(station), sticky=True)
            ).add_to(group)

        group.add_to(map_obj)
        logger.info(f"Added {len(stations)} station markers to map")
        return map_obj

    def add_legend(self, map_obj: folium.Map) -> folium.Map:
        """Add the departure/arrival flow legend."""
        swatches = "".join(
            f'<div style="display: flex; align-items: center; gap: 6px; margin: 2px 0;">'
            f'<span style="width: 12px; height: 12px; border-radius: 50%; background: {entry["color"]};"></span>'
            f'{entry["label"]}</div>'
            for entry in self.colors.legend_entries()
        )
        legend_html = f"""
        <div style="position: fixed; bottom: 30px; left: 30px; z-index: 9999;
                    background-color: white; border: 1px solid grey; border-radius: 5px;
                    padding: 8px 12px; font-size: 12px; box-shadow: 0 2px 4px rgba(0,0,0,0.2);">
            <div style="font-weight: 600; margin-bottom: 4px;">Traffic flow</div>
            {swatches}
        </div>
        """
        map_obj.get_root().html.add_child(folium.Element(legend_html))
        return map_obj

    def build_map(self, stations: pd.DataFrame,
                  lane_layers: Optional[List[BikeLaneLayer]] = None) -> folium.Map:
        """Compose the full station traffic map."""
        m = self.create_base_map()

        for layer in lane_layers or []:
            self.add_bike_lane_layer(m, layer)

        self.add_station_markers(m, stations)
        self.add_legend(m)
        folium.LayerControl(collapsed=True).add_to(m)
        return m

    def render_to_streamlit(self, map_obj: folium.Map, height: int = 650) -> None:
        """Render Folium map in Streamlit."""
        from streamlit_folium import st_folium

        st_folium(map_obj, width=None, height=height, returned_objects=[])
