"""
Configuration domain package.

Contains the pydantic models validating settings and catalog overrides.
"""

from .settings import AppSettings, CheckpointSpec

__all__ = [
    "AppSettings",
    "CheckpointSpec",
]
