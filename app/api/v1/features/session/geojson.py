"""GeoJSON sources and style expressions for the map view."""

from typing import Any, Dict, List, Optional, Sequence

from app.api.v1.features.catalog.models import BBox, Scene, bbox_ring

# Matches no feature; used to blank a highlight layer
NONE_UID = "__none__"


def empty_feature_collection() -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": []}


def roi_feature_collection(bbox: Optional[BBox]) -> Dict[str, Any]:
    """ROI outline as a one-feature collection (empty when there is no ROI)."""
    if bbox is None:
        return empty_feature_collection()
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {},
                "geometry": {"type": "Polygon", "coordinates": [bbox_ring(bbox)]},
            }
        ],
    }


def footprints_feature_collection(scenes: Sequence[Scene]) -> Dict[str, Any]:
    """One feature per scene, tagged with ``scene_uid`` for hit testing."""
    features: List[Dict[str, Any]] = [
        {
            "type": "Feature",
            "properties": {"scene_uid": scene.scene_uid},
            "geometry": scene.geometry.model_dump(),
        }
        for scene in scenes
    ]
    return {"type": "FeatureCollection", "features": features}


def highlight_filter(scene_uid: Optional[str]) -> List[Any]:
    """Layer filter expression selecting a single footprint by id."""
    return ["==", ["get", "scene_uid"], scene_uid or NONE_UID]


def preview_layer(scene: Optional[Scene], opacity: float) -> Optional[Dict[str, Any]]:
    """Raster overlay layer for the selected scene's preview tiles."""
    if scene is None or not scene.assets.preview_tiles:
        return None
    return {
        "scene_uid": scene.scene_uid,
        "type": "raster",
        "tiles": [scene.assets.preview_tiles],
        "tileSize": 256,
        "opacity": opacity,
    }
