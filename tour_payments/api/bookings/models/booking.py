from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
import uuid

from sqlalchemy import Boolean, Column, Date, DateTime, Index, Integer, Numeric, String, UniqueConstraint
from sqlmodel import Field, SQLModel

from tour_payments.core.common.constants import BookingPaymentState
from tour_payments.utils.clock import utcnow


class Booking(SQLModel, table=True):
    __tablename__ = "bookings"
    __table_args__ = (
        UniqueConstraint("group_id", "email", name="uq_bookings_group_email"),
        Index("idx_bookings_booking_id", "booking_id"),
        Index("idx_bookings_tour_package", "tour_package_id"),
        Index("idx_bookings_payment_id", "payment_id"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    booking_id: str = Field(sa_column=Column(String(20), nullable=False))
    group_id: str = Field(sa_column=Column(String(40), nullable=False))
    member_code: str | None = Field(default=None, sa_column=Column(String(40)))
    booking_type: str = Field(sa_column=Column(String(20), nullable=False))
    is_main_booker: bool = Field(
        default=False, sa_column=Column(Boolean, nullable=False, default=False)
    )

    email: str = Field(sa_column=Column(String(255), nullable=False))
    first_name: str = Field(sa_column=Column(String(100), nullable=False))
    last_name: str = Field(sa_column=Column(String(100), nullable=False))

    tour_package_id: str = Field(sa_column=Column(String(64), nullable=False))
    tour_package_name: str = Field(sa_column=Column(String(200), nullable=False))
    tour_date: date = Field(sa_column=Column(Date, nullable=False))
    return_date: date | None = Field(default=None, sa_column=Column(Date))

    original_tour_cost: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    discounted_tour_cost: Decimal | None = Field(
        default=None, sa_column=Column(Numeric(12, 2))
    )
    reservation_fee: Decimal = Field(
        default=Decimal("0.00"), sa_column=Column(Numeric(12, 2), nullable=False)
    )
    currency: str = Field(default="EUR", sa_column=Column(String(10), nullable=False))

    payment_plan: str = Field(sa_column=Column(String(100), nullable=False))
    payment_method: str = Field(sa_column=Column(String(20), nullable=False))
    payment_id: uuid.UUID | None = Field(default=None)
    parent_booking_id: uuid.UUID | None = Field(default=None)

    # Installment slots
    p1_amount: Decimal | None = Field(default=None, sa_column=Column(Numeric(12, 2)))
    p1_due_date: date | None = Field(default=None, sa_column=Column(Date))
    p1_date_paid: date | None = Field(default=None, sa_column=Column(Date))
    p1_evidence_id: uuid.UUID | None = Field(default=None)

    p2_amount: Decimal | None = Field(default=None, sa_column=Column(Numeric(12, 2)))
    p2_due_date: date | None = Field(default=None, sa_column=Column(Date))
    p2_date_paid: date | None = Field(default=None, sa_column=Column(Date))
    p2_evidence_id: uuid.UUID | None = Field(default=None)

    p3_amount: Decimal | None = Field(default=None, sa_column=Column(Numeric(12, 2)))
    p3_due_date: date | None = Field(default=None, sa_column=Column(Date))
    p3_date_paid: date | None = Field(default=None, sa_column=Column(Date))
    p3_evidence_id: uuid.UUID | None = Field(default=None)

    p4_amount: Decimal | None = Field(default=None, sa_column=Column(Numeric(12, 2)))
    p4_due_date: date | None = Field(default=None, sa_column=Column(Date))
    p4_date_paid: date | None = Field(default=None, sa_column=Column(Date))
    p4_evidence_id: uuid.UUID | None = Field(default=None)

    full_payment_amount: Decimal | None = Field(
        default=None, sa_column=Column(Numeric(12, 2))
    )
    full_payment_due_date: date | None = Field(default=None, sa_column=Column(Date))
    full_payment_date_paid: date | None = Field(default=None, sa_column=Column(Date))
    full_payment_evidence_id: uuid.UUID | None = Field(default=None)

    # Derived from the slots, see ledger.refresh_derived_fields
    payment_state: str = Field(
        default=BookingPaymentState.AWAITING_PAYMENT.value,
        sa_column=Column(String(20), nullable=False),
    )
    booking_status: str = Field(default="", sa_column=Column(String(100), nullable=False))
    payment_progress: int = Field(
        default=0, sa_column=Column(Integer, nullable=False, default=0)
    )
    paid: Decimal = Field(
        default=Decimal("0.00"), sa_column=Column(Numeric(12, 2), nullable=False)
    )
    remaining_balance: Decimal = Field(
        default=Decimal("0.00"), sa_column=Column(Numeric(12, 2), nullable=False)
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False, default=utcnow),
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow),
    )
