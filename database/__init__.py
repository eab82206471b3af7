"""
Database Package

SQLAlchemy models and connection management.
"""

from database.connection import (
    get_db,
    init_db,
    close_db,
    get_engine,
    get_session_factory,
)

from database.models import (
    Base,
    RFP,
    Vendor,
    Proposal,
)

__all__ = [
    # Connection
    "get_db",
    "init_db",
    "close_db",
    "get_engine",
    "get_session_factory",
    # Models
    "Base",
    "RFP",
    "Vendor",
    "Proposal",
]
