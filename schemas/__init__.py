"""
Procurement Intelligence - Pydantic Schemas

Data models for RFPs, vendors, proposals and AI results.
"""

from schemas.common import CamelModel
from schemas.rfp import RfpSummary, RFPRead
from schemas.vendor import VendorRead, VendorWithProposals, ProposalSummary
from schemas.proposal import (
    ExtractionResult,
    ProposalScore,
    RankingResult,
    ProposalRead,
)

__all__ = [
    "CamelModel",
    # RFP
    "RfpSummary",
    "RFPRead",
    # Vendor
    "VendorRead",
    "VendorWithProposals",
    "ProposalSummary",
    # Proposal
    "ExtractionResult",
    "ProposalScore",
    "RankingResult",
    "ProposalRead",
]
