"""Configuration file loading."""

from venueaudit.infrastructure.config.repository import ConfigRepository

__all__ = ["ConfigRepository"]
