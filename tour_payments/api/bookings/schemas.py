from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from tour_payments.core.common.constants import BookingPaymentState, BookingType


class CreateBookingRequest(BaseModel):
    payment_id: Annotated[UUID, Field(alias="paymentId")]
    payment_term_id: Annotated[UUID, Field(alias="paymentTermId")]
    tour_date: Annotated[date, Field(alias="tourDate")]
    return_date: Annotated[date | None, Field(alias="returnDate")] = None
    first_name: Annotated[str, Field(alias="firstName", min_length=1)]
    last_name: Annotated[str, Field(alias="lastName", min_length=1)]
    booked_on: Annotated[date | None, Field(alias="bookedOn")] = None
    guest_emails: Annotated[list[EmailStr], Field(alias="guestEmails")] = []

    model_config = {"populate_by_name": True}


class GuestData(BaseModel):
    first_name: Annotated[str, Field(alias="firstName", min_length=1)]
    last_name: Annotated[str, Field(alias="lastName", min_length=1)]

    model_config = {"populate_by_name": True, "extra": "ignore"}


class GuestBookingRequest(BaseModel):
    payment_doc_id: Annotated[UUID, Field(alias="paymentDocId")]
    parent_booking_id: Annotated[UUID, Field(alias="parentBookingId")]
    guest_email: Annotated[EmailStr, Field(alias="guestEmail")]
    guest_data: Annotated[GuestData, Field(alias="guestData")]

    model_config = {"populate_by_name": True}


class GuestBookingResponse(BaseModel):
    booking_document_id: Annotated[UUID, Field(alias="bookingDocumentId")]
    booking_id: Annotated[str, Field(alias="bookingId")]

    model_config = {"populate_by_name": True}


class InstallmentItem(BaseModel):
    term: str
    amount: Decimal
    due_date: Annotated[date, Field(alias="dueDate")]
    date_paid: Annotated[date | None, Field(alias="datePaid")] = None
    evidence_id: Annotated[UUID | None, Field(alias="evidenceId")] = None

    model_config = {"populate_by_name": True}


class BookingResponse(BaseModel):
    id: UUID
    booking_id: Annotated[str, Field(alias="bookingId")]
    group_id: Annotated[str, Field(alias="groupId")]
    member_code: Annotated[str | None, Field(alias="memberCode")] = None
    booking_type: Annotated[BookingType, Field(alias="bookingType")]
    is_main_booker: Annotated[bool, Field(alias="isMainBooker")]
    email: str
    first_name: Annotated[str, Field(alias="firstName")]
    last_name: Annotated[str, Field(alias="lastName")]
    tour_package_id: Annotated[str, Field(alias="tourPackageId")]
    tour_package_name: Annotated[str, Field(alias="tourPackageName")]
    tour_date: Annotated[date, Field(alias="tourDate")]
    return_date: Annotated[date | None, Field(alias="returnDate")] = None
    original_tour_cost: Annotated[Decimal, Field(alias="originalTourCost")]
    discounted_tour_cost: Annotated[Decimal | None, Field(alias="discountedTourCost")] = None
    reservation_fee: Annotated[Decimal, Field(alias="reservationFee")]
    currency: str
    payment_plan: Annotated[str, Field(alias="paymentPlan")]
    payment_method: Annotated[str, Field(alias="paymentMethod")]
    payment_id: Annotated[UUID | None, Field(alias="paymentId")] = None
    parent_booking_id: Annotated[UUID | None, Field(alias="parentBookingId")] = None
    installments: list[InstallmentItem]
    payment_state: Annotated[BookingPaymentState, Field(alias="paymentState")]
    booking_status: Annotated[str, Field(alias="bookingStatus")]
    payment_progress: Annotated[int, Field(alias="paymentProgress")]
    paid: Decimal
    remaining_balance: Annotated[Decimal, Field(alias="remainingBalance")]

    model_config = {"populate_by_name": True}
