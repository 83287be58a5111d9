"""
Configuration management for the station traffic map.

Settings are read from a JSON file and merged over built-in defaults, so a
user file only needs the keys it changes.
"""

import copy
import json
import os
from typing import Dict, Any, Optional, List
from pathlib import Path
import logging

logger = logging.getLogger(__name__)


class BikeMapConfig:
    """Manages data source, map and styling settings."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or "bike_map_config.json"
        self.default_config = self._get_default_config()
        self.config = self._load_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "data_sources": {
                "stations": "https://dsc106.com/labs/lab07/data/bluebikes-stations.json",
                "trips": "https://dsc106.com/labs/lab07/data/bluebikes-traffic-2024-03.csv",
                "bike_lanes": [
                    {
                        "id": "bike-lanes-boston",
                        "source": "https://bostonopendata-boston.opendata.arcgis.com/datasets/boston::existing-bike-network-2022.geojson"
                    },
                    {
                        "id": "bike-lanes-cambridge",
                        "source": "https://data.cambridgema.gov/api/geospatial/gb5w-yva3?method=export&format=GeoJSON"
                    }
                ]
            },
            "map_settings": {
                "center": [42.36027, -71.09415],
                "zoom": 12,
                "min_zoom": 5,
                "max_zoom": 18,
                "tiles": "CartoDB positron",
                "height": 650
            },
            "bike_lane_style": {
                "color": "#32D400",
                "weight": 5,
                "opacity": 0.6
            },
            "station_style": {
                "max_radius": 25,
                "fill_opacity": 0.6,
                "stroke_color": "#ffffff",
                "stroke_width": 1,
                "departure_color": "steelblue",
                "arrival_color": "darkorange"
            },
            "time_filter": {
                "window_minutes": 60
            },
            "loading": {
                "timeout_sec": 30,
                "max_workers": 2
            }
        }

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file or use defaults."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    config = json.load(f)
                logger.info(f"Loaded map configuration from {self.config_path}")

                return self._merge_configs(self.default_config, config)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load config from {self.config_path}: {e}")
                logger.info("Using default configuration")
                return copy.deepcopy(self.default_config)
        else:
            logger.info(f"Config file {self.config_path} not found, using defaults")
            return copy.deepcopy(self.default_config)

    def _merge_configs(self, default: Dict, user: Dict) -> Dict:
        """Recursively merge user config with defaults."""
        merged = copy.deepcopy(default)

        for key, value in user.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._merge_configs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def save_config(self) -> None:
        """Save current configuration to file."""
        try:
            config_dir = Path(self.config_path).parent
            config_dir.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, 'w') as f:
                json.dump(self.config, f, indent=2)
            logger.info(f"Saved map configuration to {self.config_path}")
        except OSError as e:
            logger.error(f"Failed to save config to {self.config_path}: {e}")

    def get_data_sources(self) -> Dict[str, Any]:
        """Get station, trip and bike lane sources."""
        return self.config["data_sources"]

    def get_bike_lane_sources(self) -> List[Dict[str, str]]:
        return self.config["data_sources"]["bike_lanes"]

    def get_map_settings(self) -> Dict[str, Any]:
        """Get map display settings."""
        return self.config["map_settings"]

    def get_bike_lane_style(self) -> Dict[str, Any]:
        return self.config["bike_lane_style"]

    def get_station_style(self) -> Dict[str, Any]:
        return self.config["station_style"]

    def get_window_minutes(self) -> int:
        return int(self.config["time_filter"]["window_minutes"])

    def get_loading_settings(self) -> Dict[str, Any]:
        """Get timeout and worker settings for data loading."""
        return self.config["loading"]

    def reset_to_defaults(self) -> None:
        """Reset configuration to defaults."""
        self.config = copy.deepcopy(self.default_config)
        logger.info("Reset configuration to defaults")


# Global configuration instance
_map_config = None

def get_map_config(config_path: Optional[str] = None) -> BikeMapConfig:
    """Get global map configuration instance."""
    global _map_config
    if _map_config is None:
        _map_config = BikeMapConfig(config_path)
    elif config_path is not None and config_path != _map_config.config_path:
        logger.warning(
            f"Map configuration already loaded from {_map_config.config_path}, ignoring {config_path}"
        )
    return _map_config
