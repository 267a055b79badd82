"""Tests for snapshot loading, lenient coercion and settings."""

import json
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from campaign_dashboard.config import DashboardSettings, load_settings
from campaign_dashboard.exceptions import ConfigLoadError, DataLoadError
from campaign_dashboard.ingestion import load_marketing_data
from campaign_dashboard.models import Campaign, coerce_label, coerce_number


class TestLoadMarketingData:
    """Tests for load_marketing_data()."""

    def test_from_mapping(self, raw_data: dict[str, Any]) -> None:
        data = load_marketing_data(raw_data)
        assert len(data.campaigns) == 3

    def test_from_json_string(self, raw_data: dict[str, Any]) -> None:
        data = load_marketing_data(json.dumps(raw_data))
        assert data.campaigns[0].campaign_name == "Spring Sale"

    def test_from_path(self, tmp_path: Path, raw_data: dict[str, Any]) -> None:
        path = tmp_path / "marketing-data.json"
        path.write_text(json.dumps(raw_data), encoding="utf-8")
        data = load_marketing_data(path)
        assert data.campaigns[1].campaign_id == "c2"

    def test_id_and_name_aliases(self, raw_data: dict[str, Any]) -> None:
        """The demographic feed uses id/name instead of campaign_id/campaign_name."""
        data = load_marketing_data(raw_data)
        assert data.campaigns[1].campaign_name == "Summer Promo"

    def test_missing_campaigns_is_empty(self) -> None:
        assert load_marketing_data({}).campaigns == ()
        assert load_marketing_data({"campaigns": None}).campaigns == ()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(DataLoadError, match="Failed to read"):
            load_marketing_data(tmp_path / "nope.json")

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(DataLoadError, match="Invalid JSON"):
            load_marketing_data("{not json")

    def test_non_object_document_raises(self) -> None:
        with pytest.raises(DataLoadError, match="Expected a JSON object"):
            load_marketing_data("[1, 2, 3]")

    def test_unreadable_campaign_raises(self) -> None:
        with pytest.raises(DataLoadError) as exc_info:
            load_marketing_data({"campaigns": ["not a campaign"]})
        assert exc_info.value.errors

    def test_snapshot_is_immutable(self, raw_data: dict[str, Any]) -> None:
        data = load_marketing_data(raw_data)
        with pytest.raises(ValidationError):
            data.campaigns[0].spend = 5


class TestLenientCoercion:
    """Malformed values degrade to 0 / None instead of failing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (7, 7.0),
            (2.5, 2.5),
            ("1,200", 1200.0),
            ("$45.50", 45.5),
            ("12%", 12.0),
            ("abc", 0.0),
            ("", 0.0),
            (None, 0.0),
            (True, 0.0),
            (float("nan"), 0.0),
            (float("inf"), 0.0),
            ([1], 0.0),
        ],
    )
    def test_coerce_number(self, raw: Any, expected: float) -> None:
        assert coerce_number(raw) == expected

    def test_coerce_label(self) -> None:
        assert coerce_label(None) is None
        assert coerce_label(123) == "123"
        assert coerce_label("Mobile") == "Mobile"

    def test_non_list_breakdown_is_absent(self) -> None:
        campaign = Campaign.model_validate({"device_performance": "oops"})
        assert campaign.device_performance is None

    def test_missing_numbers_default_to_zero(self) -> None:
        campaign = Campaign.model_validate(
            {"demographic_breakdown": [{"age_group": "18-24"}]}
        )
        record = campaign.demographic_breakdown[0]
        assert record.percentage_of_audience == 0
        assert record.performance.clicks == 0
        assert campaign.spend == 0


class TestSettings:
    """Tests for load_settings()."""

    def test_bundled_settings(self) -> None:
        settings = load_settings()
        assert isinstance(settings, DashboardSettings)
        assert len(settings.reference_points) == 20
        assert settings.charts.min_radius == 10
        assert settings.charts.max_radius == 60
        assert settings.charts.sentinel_value == 1000
        assert settings.charts.line_chart_height == 220

    def test_reference_table_order(self) -> None:
        points = load_settings().reference_points
        assert [p.city for p in points][:2] == ["Dubai", "Abu Dhabi"]
        casablanca = next(p for p in points if p.city == "Casablanca")
        assert casablanca.longitude == pytest.approx(-7.5898)
        assert points[-1].country == "Turkey"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="Failed to load"):
            load_settings(tmp_path / "missing.yaml")

    def test_invalid_radius_bounds_raise(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("charts:\n  min_radius: 50\n  max_radius: 20\n")
        with pytest.raises(ConfigLoadError, match="Invalid settings"):
            load_settings(path)

    def test_out_of_range_latitude_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(
            "reference_points:\n"
            "  - {city: Nowhere, longitude: 0, latitude: 120, country: X}\n"
        )
        with pytest.raises(ConfigLoadError):
            load_settings(path)

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        settings = load_settings(path)
        assert settings.reference_points == ()
        assert settings.charts.map_width == 1000
