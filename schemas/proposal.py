"""
Proposal Schemas

Data models for extracted proposal fields, AI scoring and vendor ranking.
"""

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import Field

from schemas.common import CamelModel
from schemas.vendor import VendorRead


class ExtractionResult(CamelModel):
    """Structured fields extracted from a vendor email."""
    total_price: Optional[Union[int, float]] = Field(default=None, description="Quoted total price")
    delivery_days: Optional[Union[int, float]] = Field(default=None, description="Delivery time in days")
    payment_terms: Optional[str] = Field(default=None, description="Payment terms")
    warranty_years: Optional[Union[int, float]] = Field(default=None, description="Warranty in years")


class ProposalScore(CamelModel):
    """AI evaluation of one proposal against an RFP."""
    ai_score: Optional[int] = Field(default=None, description="First number found in the analysis")
    ai_analysis: str = Field(default="", description="Full completion text")


class RankingResult(CamelModel):
    """Vendor comparison and recommendation for one RFP."""
    summary: Any = Field(default="", description="Overall comparison summary")
    recommended_vendor_name: Any = Field(default=None, description="Recommended vendor name")
    recommended_vendor_id: Any = Field(default=None, description="Recommended vendor ID")
    reasoning: Any = Field(default="", description="Why the vendor was recommended")
    ranked_vendors: list[Any] = Field(
        default_factory=list,
        description="Ranked entries as returned by the model"
    )


class ProposalRead(CamelModel):
    """Persisted proposal with its vendor."""
    id: int
    rfp_id: int
    vendor_id: int
    total_price: Optional[float] = None
    delivery_days: Optional[float] = None
    payment_terms: Optional[str] = None
    warranty_years: Optional[float] = None
    raw_email_body: str = ""
    items_json: Optional[str] = None
    ai_score: Optional[int] = None
    ai_analysis: Optional[str] = None
    created_at: Optional[datetime] = None
    vendor: Optional[VendorRead] = None
