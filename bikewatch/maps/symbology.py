"""
Symbology for station markers.

Marker radius follows total traffic on a square-root scale; marker color
blends the arrival and departure colors by the station's quantized
departure ratio.
"""

from typing import Any, Dict, List, Optional, Sequence
import logging

import matplotlib.colors as mcolors
import numpy as np
import pandas as pd

from bikewatch.traffic.models import Station
from bikewatch.traffic.scale import RadiusScale, departure_ratio, quantize_flow, FLOW_CLASSES

logger = logging.getLogger(__name__)

STYLED_COLUMNS = [
    'short_name', 'name', 'longitude', 'latitude',
    'departures', 'arrivals', 'total_traffic',
    'radius', 'flow', 'color'
]


class FlowColorScheme:
    """Colors for the departure ratio classes."""

    def __init__(self, departure_color: str = 'steelblue', arrival_color: str = 'darkorange'):
        self.departure_rgb = np.array(mcolors.to_rgb(departure_color))
        self.arrival_rgb = np.array(mcolors.to_rgb(arrival_color))

    def color_for(self, flow: float) -> str:
        """Hex color for a flow value: 1 is all departures, 0 all arrivals."""
        rgb = flow * self.departure_rgb + (1 - flow) * self.arrival_rgb
        return mcolors.to_hex(rgb)

    def legend_entries(self) -> List[Dict[str, str]]:
        labels = {1.0: 'More departures', 0.5: 'Balanced', 0.0: 'More arrivals'}
        return [
            {'label': labels[flow], 'color': self.color_for(flow)}
            for flow in sorted(FLOW_CLASSES, reverse=True)
        ]


class StationSymbology:
    """Turns enriched stations into a table of marker styles."""

    def __init__(self, style_config: Optional[Dict[str, Any]] = None):
        style_config = style_config or {}
        self.max_radius = style_config.get('max_radius', 25)
        self.colors = FlowColorScheme(
            style_config.get('departure_color', 'steelblue'),
            style_config.get('arrival_color', 'darkorange')
        )

    def style_stations(self, stations: Sequence[Station]) -> pd.DataFrame:
        """
        Compute radius, flow class and color for each station.

        Args:
            stations: Stations with traffic counts

        Returns:
            DataFrame with one row per station and STYLED_COLUMNS
        """
        if len(stations) == 0:
            return pd.DataFrame(columns=STYLED_COLUMNS)

        scale = RadiusScale.from_stations(stations, self.max_radius)

        df = pd.DataFrame([station.to_dict() for station in stations])
        df['radius'] = scale.scale_many(df['total_traffic'])
        df['flow'] = [quantize_flow(departure_ratio(station)) for station in stations]
        df['color'] = df['flow'].map(self.colors.color_for)

        logger.debug(f"Styled {len(df)} stations, max traffic {scale.max_traffic}")
        return df[STYLED_COLUMNS]
