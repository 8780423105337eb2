from __future__ import annotations

from datetime import datetime
import uuid

from sqlalchemy import JSON, Boolean, Column, DateTime, Index, Integer, String, Text
from sqlmodel import Field, SQLModel

from tour_payments.utils.clock import utcnow


class PaymentTerm(SQLModel, table=True):
    __tablename__ = "payment_terms"
    __table_args__ = (
        Index("idx_payment_terms_sort_order", "sort_order"),
        Index("idx_payment_terms_active", "is_active"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    name: str = Field(sa_column=Column(String(100), nullable=False))
    description: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))

    payment_type: str = Field(sa_column=Column(String(30), nullable=False))
    days_required: int | None = Field(default=None, sa_column=Column(Integer))
    months_required: int | None = Field(default=None, sa_column=Column(Integer))
    monthly_percentages: list[float] | None = Field(default=None, sa_column=Column(JSON))

    is_active: bool = Field(
        default=True, sa_column=Column(Boolean, nullable=False, default=True)
    )
    sort_order: int = Field(sa_column=Column(Integer, nullable=False))
    color: str = Field(default="#3b82f6", sa_column=Column(String(20), nullable=False))

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False, default=utcnow),
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow),
    )
