from __future__ import annotations

from datetime import datetime
import uuid

from sqlalchemy import Column, DateTime, String, UniqueConstraint
from sqlmodel import Field, SQLModel

from tour_payments.core.common.constants import InvitationStatus
from tour_payments.utils.clock import utcnow


class GuestInvitation(SQLModel, table=True):
    __tablename__ = "guest_invitations"
    __table_args__ = (
        UniqueConstraint("payment_id", "email", name="uq_guest_invitations_payment_email"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    payment_id: uuid.UUID = Field(
        foreign_key="booking_payments.id", nullable=False, index=True
    )
    email: str = Field(sa_column=Column(String(255), nullable=False))
    status: str = Field(
        default=InvitationStatus.PENDING.value,
        sa_column=Column(String(20), nullable=False),
    )

    invited_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False, default=utcnow),
    )
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    accepted_at: datetime | None = Field(default=None, sa_column=Column(DateTime))
    guest_booking_id: uuid.UUID | None = Field(default=None)
