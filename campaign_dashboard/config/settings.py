"""Dashboard configuration loaded from YAML."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..exceptions import ConfigLoadError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "dashboard.yaml"


class ChartSettings(BaseModel):
    """Fixed chart constants.

    Line charts are drawn in a normalized plot width; the drawable height is
    the widget height minus the label padding. Bubble maps use a fixed view
    box and encode value as a radius between min_radius and max_radius.
    """

    model_config = ConfigDict(frozen=True)

    line_height: float = 300
    line_padding: float = 80
    plot_width: float = Field(default=100, gt=0)
    map_width: float = Field(default=1000, gt=0)
    map_height: float = Field(default=500, gt=0)
    min_radius: float = Field(default=10, ge=0)
    max_radius: float = 60
    sentinel_value: float = 1000  # value given to reference cities with no data

    @model_validator(mode="after")
    def _check_bounds(self) -> "ChartSettings":
        if self.max_radius < self.min_radius:
            raise ValueError("max_radius must be >= min_radius")
        if self.line_height <= self.line_padding:
            raise ValueError("line_height must exceed line_padding")
        return self

    @property
    def line_chart_height(self) -> float:
        return self.line_height - self.line_padding


class ReferencePoint(BaseModel):
    """Named geographic point always shown on the bubble map."""

    model_config = ConfigDict(frozen=True)

    city: str
    longitude: float = Field(ge=-180, le=180)
    latitude: float = Field(ge=-90, le=90)
    country: str


class DashboardSettings(BaseModel):
    """Complete dashboard configuration."""

    model_config = ConfigDict(frozen=True)

    charts: ChartSettings = Field(default_factory=ChartSettings)
    reference_points: tuple[ReferencePoint, ...] = ()


def load_settings(path: Path | None = None) -> DashboardSettings:
    """Load dashboard settings from YAML.

    Args:
        path: Path to a settings file. Defaults to the bundled dashboard.yaml.

    Returns:
        Validated DashboardSettings.

    Raises:
        ConfigLoadError: If the file cannot be read or does not validate.
    """
    path = path or DEFAULT_CONFIG_PATH
    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigLoadError(f"Failed to load settings from {path}: {e}") from e

    try:
        settings = DashboardSettings.model_validate(raw)
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid settings in {path}: {e}") from e

    logger.debug(
        "Loaded settings from %s (%d reference points)",
        path,
        len(settings.reference_points),
    )
    return settings
