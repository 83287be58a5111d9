"""
Bike lane overlay loading.

Lane networks are published as GeoJSON line layers. They are read with
GeoPandas, brought to WGS84 for Folium and cleaned of unusable geometries.
"""

from dataclasses import dataclass
from typing import Dict, List
import logging

import geopandas as gpd
from shapely.validation import make_valid

logger = logging.getLogger(__name__)

WGS84 = "EPSG:4326"


@dataclass
class BikeLaneLayer:
    """A named bike lane overlay."""
    layer_id: str
    data: gpd.GeoDataFrame


class BikeLaneLoader:
    """Loads bike lane GeoJSON sources into GeoDataFrames."""

    def load(self, source: str) -> gpd.GeoDataFrame:
        """
        Load one lane source in WGS84 with valid geometries.

        Raises:
            Exception: Whatever GeoPandas raises for unreadable sources, after logging
        """
        try:
            gdf = gpd.read_file(source)
        except Exception as e:
            logger.error(f"Failed to load bike lanes from {source}: {e}")
            raise

        gdf = self.to_wgs84(gdf)
        gdf = self.cleanup_invalid_geometries(gdf)
        logger.info(f"Loaded {len(gdf)} bike lane features from {source}")
        return gdf

    def to_wgs84(self, gdf: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
        """Reproject to WGS84, assuming WGS84 when no CRS is set (GeoJSON default)."""
        if gdf.crs is None:
            logger.warning("No CRS defined, assuming EPSG:4326")
            return gdf.set_crs(WGS84)
        if gdf.crs.to_string() != WGS84:
            logger.info(f"Reprojecting bike lanes from {gdf.crs} to {WGS84}")
            return gdf.to_crs(WGS84)
        return gdf

    def cleanup_invalid_geometries(self, gdf: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
        """Repair invalid geometries and drop null or empty ones."""
        initial_count = len(gdf)
        gdf = gdf[~gdf.geometry.isnull()].copy()

        invalid_mask = ~gdf.geometry.is_valid
        if invalid_mask.any():
            logger.warning(f"Found {invalid_mask.sum()} invalid geometries, attempting to fix")
            gdf.loc[invalid_mask, 'geometry'] = gdf.loc[invalid_mask, 'geometry'].apply(make_valid)
            gdf = gdf[gdf.geometry.is_valid].copy()

        gdf = gdf[~gdf.geometry.is_empty].copy()

        removed_count = initial_count - len(gdf)
        if removed_count > 0:
            logger.info(f"Removed {removed_count} unusable lane features, {len(gdf)} remaining")

        return gdf

    def load_layers(self, sources: List[Dict[str, str]]) -> List[BikeLaneLayer]:
        """
        Load every configured lane layer, skipping layers that fail.

        Args:
            sources: List of {"id": ..., "source": ...} entries

        Returns:
            Successfully loaded layers, in configured order
        """
        layers = []
        for entry in sources:
            try:
                gdf = self.load(entry['source'])
            except Exception:
                logger.warning(f"Skipping bike lane layer {entry['id']}")
                continue
            layers.append(BikeLaneLayer(layer_id=entry['id'], data=gdf))
        return layers
