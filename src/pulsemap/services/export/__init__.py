"""Export services."""

from .geojson import (
    dc_feature,
    feature_collection,
    region_feature,
    save_geojson,
    store_feature,
)

__all__ = [
    "feature_collection",
    "store_feature",
    "dc_feature",
    "region_feature",
    "save_geojson",
]
