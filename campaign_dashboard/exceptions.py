"""Custom exceptions for the dashboard engine."""

from typing import Any


class DashboardError(Exception):
    """Base exception for dashboard errors."""

    pass


class ConfigLoadError(DashboardError):
    """Failed to load dashboard configuration."""

    pass


class DataLoadError(DashboardError):
    """Marketing data snapshot could not be loaded."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        self.errors = errors or []
        if self.errors:
            message = f"{message}. First error: {self.errors[0]}"
        super().__init__(message)
