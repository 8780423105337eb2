from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field

from tour_payments.core.common.constants import PaymentType


class PaymentTermConfig(BaseModel):
    """The fields the registry validates, independent of storage."""

    name: str
    payment_type: PaymentType
    days_required: int | None = None
    months_required: int | None = None
    monthly_percentages: list[Decimal] | None = None


class PaymentTermCreateRequest(BaseModel):
    name: Annotated[str, Field(min_length=1, max_length=100)]
    description: str = ""
    payment_type: Annotated[PaymentType, Field(alias="paymentType")]
    days_required: Annotated[int | None, Field(alias="daysRequired")] = None
    months_required: Annotated[int | None, Field(alias="monthsRequired")] = None
    monthly_percentages: Annotated[
        list[Decimal] | None, Field(alias="monthlyPercentages")
    ] = None
    is_active: Annotated[bool, Field(alias="isActive")] = True
    color: str = "#3b82f6"

    model_config = {"populate_by_name": True}


class PaymentTermUpdateRequest(BaseModel):
    name: Annotated[str | None, Field(min_length=1, max_length=100)] = None
    description: str | None = None
    payment_type: Annotated[PaymentType | None, Field(alias="paymentType")] = None
    days_required: Annotated[int | None, Field(alias="daysRequired")] = None
    months_required: Annotated[int | None, Field(alias="monthsRequired")] = None
    monthly_percentages: Annotated[
        list[Decimal] | None, Field(alias="monthlyPercentages")
    ] = None
    is_active: Annotated[bool | None, Field(alias="isActive")] = None
    sort_order: Annotated[int | None, Field(alias="sortOrder")] = None
    color: str | None = None

    model_config = {"populate_by_name": True}


class PaymentTermResponse(BaseModel):
    id: UUID
    name: str
    description: str
    payment_type: Annotated[PaymentType, Field(alias="paymentType")]
    days_required: Annotated[int | None, Field(alias="daysRequired")]
    months_required: Annotated[int | None, Field(alias="monthsRequired")]
    monthly_percentages: Annotated[
        list[Decimal] | None, Field(alias="monthlyPercentages")
    ]
    is_active: Annotated[bool, Field(alias="isActive")]
    sort_order: Annotated[int, Field(alias="sortOrder")]
    color: str

    model_config = {"populate_by_name": True}


class PaymentTermListResponse(BaseModel):
    payment_terms: Annotated[list[PaymentTermResponse], Field(alias="paymentTerms")]
    total: int

    model_config = {"populate_by_name": True}


class InitializeDefaultsResponse(BaseModel):
    created: int
    total: int


class AvailablePaymentTerm(BaseModel):
    term: PaymentTermResponse
    first_due_date: Annotated[date, Field(alias="firstDueDate")]
    last_due_date: Annotated[date, Field(alias="lastDueDate")]

    model_config = {"populate_by_name": True}


class AvailablePaymentTermsResponse(BaseModel):
    eligible_installment_dates: Annotated[
        list[date], Field(alias="eligibleInstallmentDates")
    ]
    available: list[AvailablePaymentTerm]

    model_config = {"populate_by_name": True}
