"""
API Dependencies

FastAPI dependency providers. The pipeline and mail service are built once
in the application lifespan and kept on app.state.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from database.connection import get_db
from pipeline import ProcurementPipeline
from services.mail_service import MailService
from services.procurement_service import ProcurementService
from services.procurement_store import ProcurementStore


def get_pipeline(request: Request) -> ProcurementPipeline:
    return request.app.state.pipeline


def get_mail_service(request: Request) -> MailService:
    return request.app.state.mail_service


def get_store(db: AsyncSession = Depends(get_db)) -> ProcurementStore:
    return ProcurementStore(db)


def get_procurement_service(
    store: ProcurementStore = Depends(get_store),
    pipeline: ProcurementPipeline = Depends(get_pipeline)
) -> ProcurementService:
    return ProcurementService(store, pipeline)
