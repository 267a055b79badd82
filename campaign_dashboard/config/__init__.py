"""Dashboard configuration."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    ChartSettings,
    DashboardSettings,
    ReferencePoint,
    load_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ChartSettings",
    "DashboardSettings",
    "ReferencePoint",
    "load_settings",
]
