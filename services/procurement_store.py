"""
Procurement Store

Async CRUD over RFPs, vendors and proposals.
"""

import json
import logging
from typing import Optional, List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from api.middleware.error_handler import ConflictError
from database.models import RFP, Vendor, Proposal
from schemas.rfp import RfpSummary

logger = logging.getLogger("procurement.services.store")


class ProcurementStore:
    """
    Persistence collaborator for the procurement pipeline.

    Every write commits immediately; there is no cross-call transaction.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    # =========================================================================
    # RFPs
    # =========================================================================

    async def create_rfp(
        self,
        title: Optional[str],
        description: Optional[str],
        budget: Optional[float] = None
    ) -> RFP:
        rfp = RFP(title=title, description=description, budget=budget)
        self.db.add(rfp)
        await self.db.commit()
        await self.db.refresh(rfp)
        logger.info(f"Created RFP {rfp.id}")
        return rfp

    async def list_rfps(self) -> List[RFP]:
        """All RFPs, newest first."""
        result = await self.db.execute(select(RFP).order_by(RFP.id.desc()))
        return list(result.scalars().all())

    async def get_rfp(self, rfp_id: int) -> Optional[RFP]:
        return await self.db.get(RFP, rfp_id)

    async def save_rfp_summary(self, rfp: RFP, summary: RfpSummary) -> RFP:
        """Persist a narrative summary; key points are stored as JSON text."""
        rfp.summary = summary.summary
        rfp.key_points = json.dumps(summary.key_points)
        await self.db.commit()
        await self.db.refresh(rfp)
        return rfp

    # =========================================================================
    # Vendors
    # =========================================================================

    async def create_vendor(
        self,
        name: str,
        email: str,
        category: Optional[str] = None
    ) -> Vendor:
        """
        Create a vendor.

        Raises:
            ConflictError: If a vendor with this email already exists
        """
        vendor = Vendor(name=name, email=email, category=category or None)
        self.db.add(vendor)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Duplicate vendor email {email}: {e.orig}")
            raise ConflictError("Vendor with this email already exists") from e

        await self.db.refresh(vendor)
        return vendor

    async def list_vendors(self) -> List[Vendor]:
        """All vendors with their proposals loaded."""
        result = await self.db.execute(
            select(Vendor)
            .options(selectinload(Vendor.proposals))
            .order_by(Vendor.id)
        )
        return list(result.scalars().all())

    async def get_vendor(self, vendor_id: int) -> Optional[Vendor]:
        return await self.db.get(Vendor, vendor_id)

    # =========================================================================
    # Proposals
    # =========================================================================

    async def create_proposal(self, **fields) -> Proposal:
        """Insert a proposal and return it with its vendor loaded."""
        proposal = Proposal(**fields)
        self.db.add(proposal)
        await self.db.commit()
        logger.info(
            f"Created proposal {proposal.id} "
            f"(rfp={proposal.rfp_id}, vendor={proposal.vendor_id})"
        )
        return await self.get_proposal(proposal.id)

    async def get_proposal(self, proposal_id: int) -> Optional[Proposal]:
        result = await self.db.execute(
            select(Proposal)
            .options(selectinload(Proposal.vendor))
            .where(Proposal.id == proposal_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_proposals(self, rfp_id: int) -> List[Proposal]:
        """Proposals for one RFP with vendors, newest first."""
        result = await self.db.execute(
            select(Proposal)
            .options(selectinload(Proposal.vendor))
            .where(Proposal.rfp_id == rfp_id)
            .order_by(Proposal.id.desc())
        )
        return list(result.scalars().all())
