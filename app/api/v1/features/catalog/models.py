"""Catalog data models: products, scenes and the search contract."""

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

BBox = Tuple[float, float, float, float]


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 instant, accepting a trailing ``Z``."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def check_bbox(bbox: BBox) -> BBox:
    min_lon, min_lat, max_lon, max_lat = bbox
    if min_lon > max_lon or min_lat > max_lat:
        raise ValueError("bbox must be [min_lon, min_lat, max_lon, max_lat]")
    return bbox


def bbox_ring(bbox: BBox) -> List[List[float]]:
    """Closed exterior ring (counter-clockwise) for a bbox."""
    min_lon, min_lat, max_lon, max_lat = bbox
    return [
        [min_lon, min_lat],
        [max_lon, min_lat],
        [max_lon, max_lat],
        [min_lon, max_lat],
        [min_lon, min_lat],
    ]


class ProductKind(str, Enum):
    """How a product's pixel values should be read."""

    CONTINUOUS = "continuous"
    CLASSIFICATION = "classification"
    OTHER = "other"


class Product(BaseModel):
    """Catalog entry describing a data layer."""

    product_id: str
    name: str
    legend_url: Optional[str] = None
    kind: ProductKind = Field(ProductKind.OTHER, alias="type")

    class Config:
        frozen = True
        populate_by_name = True


class SceneAssets(BaseModel):
    """Preview assets of a scene."""

    quicklook: Optional[str] = None
    preview_tiles: str = Field(..., description="XYZ template, e.g. /tiles/{z}/{x}/{y}.png")

    class Config:
        frozen = True


class GeoJSONPolygon(BaseModel):
    """GeoJSON Polygon geometry."""

    type: Literal["Polygon"] = "Polygon"
    coordinates: List[List[List[float]]]

    class Config:
        frozen = True


class Scene(BaseModel):
    """One observation record issued by the catalog."""

    scene_uid: str
    product_id: str
    title: str
    datetime_start: str
    datetime_end: str
    sensors: List[str] = Field(default_factory=list)
    resolution_m: Optional[float] = Field(None, gt=0)
    bbox: BBox
    footprint: Optional[GeoJSONPolygon] = None
    assets: SceneAssets

    class Config:
        frozen = True

    @field_validator("bbox")
    @classmethod
    def validate_bbox(cls, v: BBox) -> BBox:
        return check_bbox(v)

    @model_validator(mode="after")
    def validate_time_range(self) -> "Scene":
        if parse_instant(self.datetime_start) > parse_instant(self.datetime_end):
            raise ValueError("datetime_start must not be after datetime_end")
        return self

    @property
    def geometry(self) -> GeoJSONPolygon:
        """Footprint if the catalog provided one, otherwise the bbox rectangle."""
        if self.footprint is not None:
            return self.footprint
        return GeoJSONPolygon(coordinates=[bbox_ring(self.bbox)])


class SearchQuery(BaseModel):
    """Normalized query handed to the search engine."""

    product_id: Optional[str] = None
    date_start: Optional[str] = Field(None, description="YYYY-MM-DD")
    date_end: Optional[str] = Field(None, description="YYYY-MM-DD")
    roi_bbox: Optional[BBox] = Field(
        None, description="Region of interest [min_lon, min_lat, max_lon, max_lat]"
    )
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=200)

    class Config:
        frozen = True

    @field_validator("roi_bbox")
    @classmethod
    def validate_roi(cls, v: Optional[BBox]) -> Optional[BBox]:
        return check_bbox(v) if v is not None else v


class SearchResponse(BaseModel):
    """One page of search results."""

    total: int = Field(0, ge=0, description="Matches before paging")
    page: int = 1
    limit: int = 20
    items: List[Scene] = Field(default_factory=list)

    class Config:
        frozen = True


class Catalog(BaseModel):
    """Products and scenes the engine searches over."""

    products: List[Product] = Field(default_factory=list)
    scenes: List[Scene] = Field(default_factory=list)

    class Config:
        frozen = True
