from __future__ import annotations

from datetime import datetime
from decimal import Decimal
import uuid

from sqlalchemy import Column, DateTime, Index, Numeric, String, Text
from sqlmodel import Field, SQLModel

from tour_payments.core.common.constants import EvidenceStatus
from tour_payments.utils.clock import utcnow


class PaymentEvidence(SQLModel, table=True):
    __tablename__ = "payment_evidence"
    __table_args__ = (
        Index("idx_payment_evidence_booking", "booking_document_id"),
        Index("idx_payment_evidence_status", "status"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    booking_document_id: uuid.UUID = Field(nullable=False)
    installment_term: str = Field(sa_column=Column(String(20), nullable=False))

    amount: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    currency: str = Field(default="EUR", sa_column=Column(String(10), nullable=False))
    screenshot_ref: str = Field(sa_column=Column(Text, nullable=False))

    status: str = Field(
        default=EvidenceStatus.PENDING.value,
        sa_column=Column(String(20), nullable=False),
    )
    rejection_reason: str | None = Field(default=None, sa_column=Column(Text))

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False, default=utcnow),
    )
    decided_at: datetime | None = Field(default=None, sa_column=Column(DateTime))
