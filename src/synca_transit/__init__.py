"""Nearby station and railway status aggregation for the Synca dashboard."""

__version__ = "0.1.0"
