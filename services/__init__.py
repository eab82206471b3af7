"""
Procurement Intelligence - Services Package

Persistence, procurement workflows and mail transport.
"""

from services.procurement_store import ProcurementStore
from services.procurement_service import ProcurementService
from services.mail_service import MailService, MailConfig

__all__ = [
    "ProcurementStore",
    "ProcurementService",
    "MailService",
    "MailConfig",
]
