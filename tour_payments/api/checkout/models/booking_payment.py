from __future__ import annotations

from datetime import datetime
from decimal import Decimal
import uuid

from sqlalchemy import Column, DateTime, Index, Numeric, String
from sqlmodel import Field, SQLModel

from tour_payments.utils.clock import utcnow


class BookingPayment(SQLModel, table=True):
    __tablename__ = "booking_payments"
    __table_args__ = (
        Index("idx_booking_payments_payer_email", "payer_email"),
        Index("idx_booking_payments_tour_package", "tour_package_id"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    external_reference: str = Field(
        sa_column=Column("external_reference", String(100), unique=True, nullable=False)
    )
    payer_email: str = Field(sa_column=Column(String(255), nullable=False))
    tour_package_id: str = Field(sa_column=Column(String(64), nullable=False))
    booking_type: str = Field(sa_column=Column(String(20), nullable=False))
    payment_method: str = Field(sa_column=Column(String(20), nullable=False))

    amount_paid: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    currency: str = Field(default="EUR", sa_column=Column(String(10), nullable=False))

    booking_document_id: uuid.UUID | None = Field(default=None)
    booking_code: str | None = Field(default=None, sa_column=Column(String(20)))

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False, default=utcnow),
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow),
    )
