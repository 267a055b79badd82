"""Shared fixtures: a small three-campaign snapshot."""

from typing import Any

import pytest

from campaign_dashboard.models import MarketingData


@pytest.fixture
def raw_data() -> dict[str, Any]:
    """Decoded JSON document with every breakdown represented."""
    return {
        "campaigns": [
            {
                "campaign_id": "c1",
                "campaign_name": "Spring Sale",
                "spend": 1000,
                "revenue": 2000,
                "device_performance": [
                    {
                        "device": "Mobile",
                        "impressions": 1000,
                        "clicks": 50,
                        "conversions": 5,
                        "spend": 300,
                        "revenue": 900,
                        "ctr": 5.0,
                        "percentage_of_traffic": 60,
                    },
                    {
                        "device": "Desktop",
                        "impressions": 500,
                        "clicks": 40,
                        "conversions": 8,
                        "spend": 200,
                        "revenue": 700,
                        "ctr": 8.0,
                        "percentage_of_traffic": 40,
                    },
                ],
                "weekly_performance": [
                    {
                        "week_start": "2024-01-15",
                        "week_end": "2024-01-21",
                        "impressions": 100,
                        "clicks": 10,
                        "conversions": 1,
                        "spend": 50,
                        "revenue": 120,
                    },
                    {
                        "week_start": "2024-01-01",
                        "week_end": "2024-01-07",
                        "impressions": 200,
                        "clicks": 20,
                        "conversions": 2,
                        "spend": 100,
                        "revenue": 250,
                    },
                ],
                "regional_performance": [
                    {
                        "region": "Dubai",
                        "country": "UAE",
                        "impressions": 400,
                        "clicks": 30,
                        "conversions": 3,
                        "spend": 150,
                        "revenue": 500,
                    },
                    {
                        "region": "Cairo",
                        "country": "Egypt",
                        "impressions": 300,
                        "clicks": 20,
                        "conversions": 2,
                        "spend": 100,
                        "revenue": 200,
                    },
                ],
                "demographic_breakdown": [
                    {
                        "age_group": "25-34",
                        "gender": "Male",
                        "percentage_of_audience": 25,
                        "performance": {
                            "impressions": 300,
                            "clicks": 30,
                            "conversions": 3,
                            "ctr": 10.0,
                            "conversion_rate": 10.0,
                        },
                    },
                    {
                        "age_group": "25-34",
                        "gender": "Female",
                        "percentage_of_audience": 35,
                        "performance": {"impressions": 200, "clicks": 20, "conversions": 4},
                    },
                    {
                        "age_group": "18-24",
                        "gender": "Male",
                        "percentage_of_audience": 40,
                        "performance": {"impressions": 100, "clicks": 5, "conversions": 1},
                    },
                ],
            },
            {
                "id": "c2",
                "name": "Summer Promo",
                "spend": 500,
                "revenue": 800,
                "device_performance": [
                    {
                        "device": "Desktop",
                        "impressions": 700,
                        "clicks": 70,
                        "conversions": 7,
                        "spend": 250,
                        "revenue": 400,
                        "ctr": 10.0,
                        "percentage_of_traffic": 55,
                    },
                    {
                        "device": "Tablet",
                        "impressions": 100,
                        "clicks": 5,
                        "conversions": 0,
                        "spend": 0,
                        "revenue": 0,
                        "percentage_of_traffic": 45,
                    },
                ],
                "weekly_performance": [
                    {
                        "week_start": "2024-01-08",
                        "week_end": "2024-01-14",
                        "impressions": 300,
                        "clicks": 15,
                        "conversions": 3,
                        "spend": 80,
                        "revenue": 160,
                    },
                    {
                        "week_start": "2024-01-01",
                        "week_end": "2024-01-06",
                        "impressions": 50,
                        "clicks": 5,
                        "conversions": 1,
                        "spend": 20,
                        "revenue": 40,
                    },
                ],
                "regional_performance": [
                    {
                        "region": "Dubai",
                        "country": "United Arab Emirates",
                        "impressions": 100,
                        "clicks": 10,
                        "conversions": 1,
                        "spend": 50,
                        "revenue": 150,
                    },
                    {
                        "region": "Lagos",
                        "country": "Nigeria",
                        "impressions": 80,
                        "clicks": 4,
                        "conversions": 0,
                        "spend": 40,
                        "revenue": 60,
                    },
                ],
                "demographic_breakdown": [
                    {
                        "age_group": "25-34",
                        "gender": "Male",
                        "percentage_of_audience": 50,
                        "performance": {"impressions": 150, "clicks": 12, "conversions": 2},
                    },
                    {
                        "age_group": "45-54",
                        "gender": "Female",
                        "percentage_of_audience": 50,
                        "performance": {"impressions": 90, "clicks": 6, "conversions": 1},
                    },
                ],
            },
            {
                "campaign_id": "c3",
                "campaign_name": "Brand Awareness",
                "spend": 0,
                "revenue": 0,
                "weekly_performance": [],
            },
        ]
    }


@pytest.fixture
def sample_data(raw_data: dict[str, Any]) -> MarketingData:
    return MarketingData.model_validate(raw_data)
