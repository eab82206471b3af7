"""
Vendor Schemas
"""

from datetime import datetime
from typing import Optional

from schemas.common import CamelModel


class VendorRead(CamelModel):
    """Vendor as returned by the API."""
    id: int
    name: str
    email: str
    category: Optional[str] = None
    created_at: Optional[datetime] = None


class ProposalSummary(CamelModel):
    """Compact proposal listing nested under a vendor."""
    id: int
    rfp_id: int
    total_price: Optional[float] = None
    ai_score: Optional[float] = None


class VendorWithProposals(VendorRead):
    proposals: list[ProposalSummary] = []
