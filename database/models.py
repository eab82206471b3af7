"""
Database Models

SQLAlchemy models for RFPs, vendors and their proposals.
"""

from datetime import datetime
from typing import Optional, List

from sqlalchemy import String, Text, Integer, Float, DateTime, ForeignKey, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class RFP(Base):
    """
    Request for proposal.

    summary/key_points are filled in after narrative summarization;
    key_points holds a JSON-serialized list of strings.
    """
    __tablename__ = "rfps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[Optional[str]] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text)
    budget: Mapped[Optional[float]] = mapped_column(Float)
    summary: Mapped[Optional[str]] = mapped_column(Text)
    key_points: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )

    # Relationships
    proposals: Mapped[List["Proposal"]] = relationship(
        back_populates="rfp",
        cascade="all, delete-orphan"
    )


class Vendor(Base):
    """Vendor contact; email is unique."""
    __tablename__ = "vendors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(100))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )

    # Relationships
    proposals: Mapped[List["Proposal"]] = relationship(
        back_populates="vendor",
        cascade="all, delete-orphan"
    )


class Proposal(Base):
    """
    One vendor's response to an RFP.

    ai_score/ai_analysis are written once when the proposal is created.
    """
    __tablename__ = "proposals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rfp_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rfps.id", ondelete="CASCADE"),
        nullable=False
    )
    vendor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("vendors.id", ondelete="CASCADE"),
        nullable=False
    )
    total_price: Mapped[Optional[float]] = mapped_column(Float)
    delivery_days: Mapped[Optional[float]] = mapped_column(Float)
    payment_terms: Mapped[Optional[str]] = mapped_column(String(255))
    warranty_years: Mapped[Optional[float]] = mapped_column(Float)
    raw_email_body: Mapped[str] = mapped_column(Text, default="")
    items_json: Mapped[Optional[str]] = mapped_column(Text)
    ai_score: Mapped[Optional[int]] = mapped_column(Integer)
    ai_analysis: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )

    # Relationships
    rfp: Mapped["RFP"] = relationship(back_populates="proposals")
    vendor: Mapped["Vendor"] = relationship(back_populates="proposals")

    __table_args__ = (
        Index("idx_proposals_rfp", "rfp_id"),
        Index("idx_proposals_vendor", "vendor_id"),
    )
