"""
RFP Schemas

Data models for RFP records and narrative summaries.
"""

import json
from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from schemas.common import CamelModel


class RfpSummary(CamelModel):
    """One-line summary plus bullet key points for an RFP."""
    summary: str = Field(default="", description="First line of the completion")
    key_points: list[str] = Field(default_factory=list, description="Remaining non-blank lines")


class RFPRead(CamelModel):
    """RFP as returned by the API."""
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    budget: Optional[float] = None
    summary: Optional[str] = None
    key_points: Optional[list[str]] = None
    created_at: Optional[datetime] = None

    @field_validator("key_points", mode="before")
    @classmethod
    def decode_key_points(cls, value: Any) -> Any:
        """Key points are persisted as serialized JSON text."""
        if not isinstance(value, str):
            return value
        try:
            decoded = json.loads(value)
        except json.JSONDecodeError:
            return None
        return decoded if isinstance(decoded, list) else None
