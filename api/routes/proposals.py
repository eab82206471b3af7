"""
Proposals Router

Proposal creation (manual entry or parsed email), listing, and AI ranking.
"""

import logging
from typing import Any, Optional, List

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies import get_procurement_service
from api.middleware.logging import get_correlation_id
from schemas.common import CamelModel
from schemas.proposal import ExtractionResult, ProposalRead, RankingResult
from services.procurement_service import ProcurementService

logger = logging.getLogger("procurement.api.proposals")

router = APIRouter(prefix="/proposals", tags=["Proposals"])


class ProposalCreateRequest(CamelModel):
    rfp_id: Optional[int] = None
    vendor_id: Optional[int] = None
    total_price: Optional[float] = None
    delivery_days: Optional[float] = None
    payment_terms: Optional[str] = None
    warranty_years: Optional[float] = None
    raw_email_body: Optional[str] = None
    items: Optional[list] = None
    items_json: Optional[Any] = None


class ParseEmailRequest(CamelModel):
    email_body: Optional[str] = None
    rfp_id: Optional[int] = None
    vendor_id: Optional[int] = None


class ParseEmailResponse(CamelModel):
    message: str
    proposal: ProposalRead
    extracted: ExtractionResult


@router.post("", response_model=ProposalRead)
async def create_proposal(
    body: ProposalCreateRequest,
    request: Request,
    service: ProcurementService = Depends(get_procurement_service)
):
    """
    Create a proposal and score it against its RFP.

    The RFP and vendor must exist; both are checked before the model is called.
    """
    logger.info(
        f"[{get_correlation_id(request)}] Scoring proposal "
        f"(rfp={body.rfp_id}, vendor={body.vendor_id})"
    )
    fields = ExtractionResult(
        total_price=body.total_price,
        delivery_days=body.delivery_days,
        payment_terms=body.payment_terms,
        warranty_years=body.warranty_years,
    )
    return await service.create_scored_proposal(
        body.rfp_id,
        body.vendor_id,
        fields,
        raw_email_body=body.raw_email_body,
        items=body.items,
        items_json=body.items_json,
    )


@router.post("/parse-email", response_model=ParseEmailResponse)
async def parse_email(
    body: ParseEmailRequest,
    service: ProcurementService = Depends(get_procurement_service)
):
    """Extract price, delivery, payment terms and warranty from a vendor email."""
    proposal, extracted = await service.create_from_email(
        body.email_body,
        body.rfp_id,
        body.vendor_id
    )
    return ParseEmailResponse(
        message="Email parsed & proposal created",
        proposal=ProposalRead.model_validate(proposal),
        extracted=extracted,
    )


@router.get("", response_model=List[ProposalRead])
async def list_proposals(
    rfp_id: Optional[int] = Query(default=None, alias="rfpId"),
    service: ProcurementService = Depends(get_procurement_service)
):
    """Proposals for one RFP, newest first."""
    return await service.list_for_rfp(rfp_id)


@router.get("/summary/{rfp_id}", response_model=RankingResult)
async def rank_proposals(
    rfp_id: int,
    service: ProcurementService = Depends(get_procurement_service)
):
    """Compare all proposals for an RFP and recommend a vendor."""
    return await service.rank_for_rfp(rfp_id)
