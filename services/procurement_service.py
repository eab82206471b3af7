"""
Procurement Service

Procurement workflows that combine the store with the AI pipeline.

References are always resolved before any completion call, and a proposal is
only written after its completion call has succeeded.
"""

import json
import logging
from typing import Any, Optional, List

from api.middleware.error_handler import (
    MissingInputError,
    NotFoundError,
    ReferenceNotFoundError,
)
from database.models import RFP, Vendor, Proposal
from pipeline import ProcurementPipeline
from schemas.proposal import ExtractionResult, RankingResult
from services.procurement_store import ProcurementStore

logger = logging.getLogger("procurement.services.workflows")


def _serialize_items(items: Optional[list], items_json: Any) -> Optional[str]:
    """itemsJson wins when it is already a string; otherwise serialize items."""
    if isinstance(items_json, str):
        return items_json
    if items:
        return json.dumps(items)
    return None


def rfp_context(rfp: RFP) -> dict:
    """RFP fields shown to the model."""
    return {
        "id": rfp.id,
        "title": rfp.title,
        "description": rfp.description,
        "budget": rfp.budget,
        "summary": rfp.summary,
        "createdAt": rfp.created_at,
    }


def proposal_context(proposal: Proposal) -> dict:
    vendor = proposal.vendor
    return {
        "id": proposal.id,
        "vendor_name": vendor.name if vendor else None,
        "vendor_email": vendor.email if vendor else None,
        "total_price": proposal.total_price,
        "delivery_days": proposal.delivery_days,
        "payment_terms": proposal.payment_terms,
        "warranty_years": proposal.warranty_years,
    }


class ProcurementService:
    """Creates, lists and ranks proposals; summarizes RFPs."""

    def __init__(self, store: ProcurementStore, pipeline: ProcurementPipeline):
        self.store = store
        self.pipeline = pipeline

    async def _resolve(self, rfp_id: int, vendor_id: int) -> tuple[RFP, Vendor]:
        rfp = await self.store.get_rfp(rfp_id)
        if rfp is None:
            raise ReferenceNotFoundError("RFP not found for given rfpId")

        vendor = await self.store.get_vendor(vendor_id)
        if vendor is None:
            raise ReferenceNotFoundError("Vendor not found for given vendorId")

        return rfp, vendor

    async def create_scored_proposal(
        self,
        rfp_id: Optional[int],
        vendor_id: Optional[int],
        fields: ExtractionResult,
        raw_email_body: Optional[str] = None,
        items: Optional[list] = None,
        items_json: Any = None
    ) -> Proposal:
        """
        Create a proposal and score it against its RFP.

        When no email body was pasted, the structured fields are rendered
        into a text block so the scorer always has something to evaluate.
        """
        if not rfp_id or not vendor_id:
            raise MissingInputError("rfpId and vendorId are required")

        rfp, _ = await self._resolve(rfp_id, vendor_id)

        ai = await self.pipeline.score_proposal(
            rfp.description or "",
            raw_email_body,
            fields
        )

        return await self.store.create_proposal(
            rfp_id=rfp_id,
            vendor_id=vendor_id,
            total_price=fields.total_price,
            delivery_days=fields.delivery_days,
            payment_terms=fields.payment_terms or None,
            warranty_years=fields.warranty_years,
            raw_email_body=raw_email_body or "",
            items_json=_serialize_items(items, items_json),
            ai_score=ai.ai_score,
            ai_analysis=ai.ai_analysis,
        )

    async def create_from_email(
        self,
        email_body: Optional[str],
        rfp_id: Optional[int],
        vendor_id: Optional[int]
    ) -> tuple[Proposal, ExtractionResult]:
        """Extract fields from a vendor email and store them unscored."""
        if not email_body or not rfp_id or not vendor_id:
            raise MissingInputError("emailBody, rfpId and vendorId are required")

        await self._resolve(rfp_id, vendor_id)

        extracted = await self.pipeline.extract_proposal_fields(email_body)
        if extracted == ExtractionResult():
            logger.warning(f"No fields extracted from email for rfp={rfp_id}, vendor={vendor_id}")

        proposal = await self.store.create_proposal(
            rfp_id=rfp_id,
            vendor_id=vendor_id,
            raw_email_body=email_body,
            total_price=extracted.total_price,
            delivery_days=extracted.delivery_days,
            payment_terms=extracted.payment_terms,
            warranty_years=extracted.warranty_years,
            items_json=None,
            ai_score=None,
            ai_analysis=None,
        )
        return proposal, extracted

    async def list_for_rfp(self, rfp_id: Optional[int]) -> List[Proposal]:
        if not rfp_id:
            raise MissingInputError("rfpId query parameter is required")
        return await self.store.list_proposals(rfp_id)

    async def rank_for_rfp(self, rfp_id: int) -> RankingResult:
        """Ask the pipeline to compare every proposal submitted for an RFP."""
        rfp = await self.store.get_rfp(rfp_id)
        if rfp is None:
            raise NotFoundError("RFP not found")

        proposals = await self.store.list_proposals(rfp_id)
        if not proposals:
            logger.info(f"RFP {rfp_id} has no proposals; ranking an empty set")
        return await self.pipeline.rank_proposals(
            rfp_context(rfp),
            [proposal_context(p) for p in proposals]
        )

    async def summarize_rfp(self, rfp_id: int) -> RFP:
        """Summarize an RFP's description and persist the result on the record."""
        rfp = await self.store.get_rfp(rfp_id)
        if rfp is None:
            raise NotFoundError("RFP not found")

        summary = await self.pipeline.summarize_rfp(rfp.description or "")
        return await self.store.save_rfp_summary(rfp, summary)
