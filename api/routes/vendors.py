"""
Vendors Router
"""

from typing import Optional, List

from fastapi import APIRouter, Depends, status

from api.dependencies import get_store
from api.middleware.error_handler import MissingInputError
from schemas.common import CamelModel
from schemas.vendor import VendorRead, VendorWithProposals
from services.procurement_store import ProcurementStore


router = APIRouter(prefix="/vendors", tags=["Vendors"])


class VendorCreateRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    category: Optional[str] = None


@router.post("", response_model=VendorRead, status_code=status.HTTP_201_CREATED)
async def create_vendor(
    body: VendorCreateRequest,
    store: ProcurementStore = Depends(get_store)
):
    """Create a vendor. Emails are unique; duplicates return 409."""
    if not body.name or not body.email:
        raise MissingInputError("name and email are required")
    return await store.create_vendor(body.name, body.email, body.category)


@router.get("", response_model=List[VendorWithProposals])
async def list_vendors(store: ProcurementStore = Depends(get_store)):
    """List vendors with their proposals."""
    return await store.list_vendors()
