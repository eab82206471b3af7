"""
Email Router

Send RFPs to vendors and list recent inbox messages.
"""

from datetime import datetime
from typing import Optional, List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from api.dependencies import get_mail_service
from api.middleware.error_handler import MissingInputError
from services.mail_service import MailService


router = APIRouter(prefix="/email", tags=["Email"])


class SendEmailRequest(BaseModel):
    to: Optional[str] = None
    subject: Optional[str] = None
    text: Optional[str] = None
    html: Optional[str] = None


class SendEmailResponse(BaseModel):
    message: str
    id: str


class InboxMessage(BaseModel):
    seq: int
    subject: str = ""
    from_: str = Field(default="", alias="from")
    date: Optional[datetime] = None


@router.post("/send", response_model=SendEmailResponse)
async def send_email(
    body: SendEmailRequest,
    mail: MailService = Depends(get_mail_service)
):
    if not body.to:
        raise MissingInputError("to is required")
    info = await mail.send(body.to, body.subject or "", body.text, body.html)
    return SendEmailResponse(message="Email sent", id=info["messageId"])


@router.get("/inbox", response_model=List[InboxMessage], response_model_by_alias=True)
async def inbox(
    limit: int = Query(default=5, ge=1, le=100),
    mail: MailService = Depends(get_mail_service)
):
    """Envelopes of the latest messages, newest first."""
    return await mail.fetch_inbox(limit)
