"""Unit tests for lenient search request parsing and catalog models."""

import pytest
from pydantic import ValidationError

from app.api.v1.features.catalog.models import Product, ProductKind, Scene
from app.api.v1.features.catalog.schemas import parse_search_body


class TestParseSearchBody:
    """Test cases for wire query normalization."""

    def test_invalid_page_and_limit_fall_back(self):
        query = parse_search_body({"page": -1, "limit": 9999})

        assert query.page == 1
        assert query.limit == 20

    def test_missing_body_is_default_query(self):
        query = parse_search_body(None)

        assert query.page == 1
        assert query.limit == 20
        assert query.product_id is None
        assert query.roi_bbox is None

    def test_non_object_body_is_default_query(self):
        assert parse_search_body([1, 2, 3]).page == 1

    def test_valid_fields_are_kept(self):
        query = parse_search_body(
            {
                "product_id": "ndvi",
                "date_start": "2024-01-01",
                "date_end": "2024-02-01",
                "roi_bbox": [126.9, 36.9, 127.1, 37.1],
                "page": 2,
                "limit": 50,
            }
        )

        assert query.product_id == "ndvi"
        assert query.date_start == "2024-01-01"
        assert query.date_end == "2024-02-01"
        assert query.roi_bbox == (126.9, 36.9, 127.1, 37.1)
        assert query.page == 2
        assert query.limit == 50

    @pytest.mark.parametrize(
        "roi",
        [[1, 2, 3], "126,36,127,37", [1, 2, "x", 4], [1, 2, None, 4], {"a": 1}],
    )
    def test_malformed_roi_is_dropped(self, roi):
        assert parse_search_body({"roi_bbox": roi}).roi_bbox is None

    def test_inverted_roi_is_reordered(self):
        query = parse_search_body({"roi_bbox": [127.1, 37.1, 126.9, 36.9]})

        assert query.roi_bbox == (126.9, 36.9, 127.1, 37.1)

    def test_bad_dates_are_dropped(self):
        query = parse_search_body({"date_start": "yesterday", "date_end": 20240101})

        assert query.date_start is None
        assert query.date_end is None

    def test_datetime_is_truncated_to_day(self):
        query = parse_search_body({"date_start": "2024-01-05T12:00:00Z"})

        assert query.date_start == "2024-01-05"

    def test_empty_product_is_unset(self):
        assert parse_search_body({"product_id": ""}).product_id is None


class TestCatalogModels:
    """Test cases for product and scene validation."""

    def test_product_type_alias(self):
        product = Product(**{"product_id": "lc", "name": "Land", "type": "classification"})

        assert product.kind is ProductKind.CLASSIFICATION
        assert product.model_dump(by_alias=True)["type"] == "classification"

    def test_scene_rejects_reversed_time_range(self, make_scene):
        with pytest.raises(ValidationError):
            make_scene(
                "bad",
                datetime_start="2024-01-02T00:00:00Z",
                datetime_end="2024-01-01T00:00:00Z",
            )

    def test_scene_rejects_inverted_bbox(self, make_scene):
        with pytest.raises(ValidationError):
            make_scene("bad", bbox=(127.2, 36.0, 127.0, 36.2))

    def test_scene_rejects_non_positive_resolution(self, make_scene):
        with pytest.raises(ValidationError):
            make_scene("bad", resolution_m=0)

    def test_geometry_falls_back_to_bbox(self, make_scene):
        scene = make_scene("rect", bbox=(1.0, 2.0, 3.0, 4.0))

        assert scene.geometry.coordinates == [
            [[1.0, 2.0], [3.0, 2.0], [3.0, 4.0], [1.0, 4.0], [1.0, 2.0]]
        ]

    def test_geometry_prefers_footprint(self, make_scene):
        ring = [[1.0, 2.0], [3.0, 2.5], [2.0, 4.0], [1.0, 2.0]]
        scene = make_scene(
            "poly",
            bbox=(1.0, 2.0, 3.0, 4.0),
            footprint={"type": "Polygon", "coordinates": [ring]},
        )

        assert scene.geometry.coordinates == [ring]

    def test_scene_is_immutable(self, make_scene):
        scene = make_scene("frozen")

        with pytest.raises(ValidationError):
            scene.title = "changed"

    def test_fixture_loads(self, fixture_catalog):
        assert len(fixture_catalog.products) == 3
        assert len(fixture_catalog.scenes) == 8
        assert len({s.scene_uid for s in fixture_catalog.scenes}) == 8
