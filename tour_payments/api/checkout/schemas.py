from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from tour_payments.core.common.constants import BookingType, InvitationStatus, PaymentMethod


class CheckoutPaymentRequest(BaseModel):
    external_reference: Annotated[str, Field(alias="externalReference", min_length=1)]
    payer_email: Annotated[EmailStr, Field(alias="payerEmail")]
    tour_package_id: Annotated[str, Field(alias="tourPackageId", min_length=1)]
    booking_type: Annotated[BookingType, Field(alias="bookingType")]
    payment_method: Annotated[PaymentMethod, Field(alias="paymentMethod")] = PaymentMethod.CARD
    amount_paid: Annotated[Decimal, Field(alias="amountPaid", ge=0)]
    currency: str | None = None

    model_config = {"populate_by_name": True}


class GuestInvitationResponse(BaseModel):
    id: UUID
    email: str
    status: InvitationStatus
    invited_at: Annotated[datetime, Field(alias="invitedAt")]
    expires_at: Annotated[datetime, Field(alias="expiresAt")]
    accepted_at: Annotated[datetime | None, Field(alias="acceptedAt")] = None
    guest_booking_id: Annotated[UUID | None, Field(alias="guestBookingId")] = None

    model_config = {"populate_by_name": True}


class CheckoutPaymentResponse(BaseModel):
    id: UUID
    external_reference: Annotated[str, Field(alias="externalReference")]
    payer_email: Annotated[str, Field(alias="payerEmail")]
    tour_package_id: Annotated[str, Field(alias="tourPackageId")]
    booking_type: Annotated[BookingType, Field(alias="bookingType")]
    payment_method: Annotated[PaymentMethod, Field(alias="paymentMethod")]
    amount_paid: Annotated[Decimal, Field(alias="amountPaid")]
    currency: str
    booking_document_id: Annotated[UUID | None, Field(alias="bookingDocumentId")] = None
    booking_code: Annotated[str | None, Field(alias="bookingCode")] = None
    invitations: list[GuestInvitationResponse] = []

    model_config = {"populate_by_name": True}


class InviteGuestsRequest(BaseModel):
    emails: Annotated[list[EmailStr], Field(min_length=1)]


class InviteGuestsResponse(BaseModel):
    invitations: list[GuestInvitationResponse]
