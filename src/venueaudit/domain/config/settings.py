"""
Application settings domain model.

This module defines the settings that control where audit data lives,
how logging behaves, which venues can be audited, and the optional
catalog override file.
"""

import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from venueaudit.domain.models import Checkpoint

logger = logging.getLogger(__name__)


class AppSettings(BaseModel):
    """
    Settings loaded from ``venueaudit.json`` in the config directory.

    A missing file yields the defaults.
    """

    model_config = ConfigDict(extra="ignore")

    data_dir: str = Field(default="output", description="Directory holding the audit database")
    database_name: str = Field(default="audit_history.db", description="SQLite file name")
    log_file: Optional[str] = Field(default=None, description="Optional log file path")
    log_level: str = Field(default="WARNING", description="Console log level")

    venues: List[str] = Field(
        default_factory=lambda: ["Suzie Q", "Windsor Wine Room"],
        description="Venues that can be audited",
    )

    default_due_offset_days: int = Field(
        default=3,
        ge=0,
        le=365,
        description="Due offset for catalog entries that do not specify one",
    )

    catalog_file: Optional[str] = Field(
        default=None,
        description="JSON file in the config directory overriding the built-in catalog",
    )

    @field_validator("venues")
    @classmethod
    def validate_venues(cls, v: List[str]) -> List[str]:
        cleaned = [venue.strip() for venue in v if venue and venue.strip()]
        if not cleaned:
            raise ValueError("At least one venue must be configured")
        return cleaned

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def log_level_value(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]


class CheckpointSpec(BaseModel):
    """
    One entry of a catalog override file.

    Validated here, then frozen into a domain ``Checkpoint``.
    """

    category: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1, description="Check being performed")
    target: str = Field(default="", description="Pass criterion, informational")
    owner: str = Field(default="Head Chef", min_length=1)
    default_due_offset_days: Optional[int] = Field(default=None, ge=0)
    suggested_remediation: str = Field(default="Correct and retrain.")
    photo_mandatory: bool = False

    @field_validator("category", "text", "owner")
    @classmethod
    def strip_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Value cannot be blank")
        return v.strip()

    def to_checkpoint(self, fallback_offset: int) -> Checkpoint:
        offset = self.default_due_offset_days
        return Checkpoint(
            category=self.category,
            text=self.text,
            target=self.target,
            owner=self.owner,
            default_due_offset_days=fallback_offset if offset is None else offset,
            suggested_remediation=self.suggested_remediation,
            photo_mandatory=self.photo_mandatory,
        )
