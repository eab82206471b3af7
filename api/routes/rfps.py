"""
RFPs Router

Endpoints for creating, listing and summarizing RFPs.
"""

from typing import Optional, List

from fastapi import APIRouter, Depends

from api.dependencies import get_procurement_service, get_store
from api.middleware.error_handler import NotFoundError
from schemas.common import CamelModel
from schemas.rfp import RFPRead
from services.procurement_service import ProcurementService
from services.procurement_store import ProcurementStore


router = APIRouter(prefix="/rfps", tags=["RFPs"])


class RFPCreateRequest(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    budget: Optional[float] = None


@router.post("", response_model=RFPRead)
async def create_rfp(
    body: RFPCreateRequest,
    store: ProcurementStore = Depends(get_store)
):
    """Create an RFP from a title, free-text description and optional budget."""
    return await store.create_rfp(body.title, body.description, body.budget)


@router.get("", response_model=List[RFPRead])
async def list_rfps(store: ProcurementStore = Depends(get_store)):
    """List all RFPs, newest first."""
    return await store.list_rfps()


@router.get("/{rfp_id}", response_model=RFPRead)
async def get_rfp(rfp_id: int, store: ProcurementStore = Depends(get_store)):
    rfp = await store.get_rfp(rfp_id)
    if rfp is None:
        raise NotFoundError("RFP not found")
    return rfp


@router.post("/{rfp_id}/summary", response_model=RFPRead)
async def summarize_rfp(
    rfp_id: int,
    service: ProcurementService = Depends(get_procurement_service)
):
    """Generate a one-line summary and key points and store them on the RFP."""
    return await service.summarize_rfp(rfp_id)
