"""Aggregation and chart geometry engine for the marketing dashboard."""

__version__ = "0.1.0"
