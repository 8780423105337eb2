from __future__ import annotations

from tour_payments.api.checkout.models import BookingPayment, GuestInvitation
from tour_payments.api.checkout.schemas import CheckoutPaymentResponse, GuestInvitationResponse


def to_invitation_response(invitation: GuestInvitation) -> GuestInvitationResponse:
    return GuestInvitationResponse(
        id=invitation.id,
        email=invitation.email,
        status=invitation.status,
        invitedAt=invitation.invited_at,
        expiresAt=invitation.expires_at,
        acceptedAt=invitation.accepted_at,
        guestBookingId=invitation.guest_booking_id,
    )


def to_checkout_payment_response(
    payment: BookingPayment, invitations: list[GuestInvitation] | None = None
) -> CheckoutPaymentResponse:
    return CheckoutPaymentResponse(
        id=payment.id,
        externalReference=payment.external_reference,
        payerEmail=payment.payer_email,
        tourPackageId=payment.tour_package_id,
        bookingType=payment.booking_type,
        paymentMethod=payment.payment_method,
        amountPaid=payment.amount_paid,
        currency=payment.currency,
        bookingDocumentId=payment.booking_document_id,
        bookingCode=payment.booking_code,
        invitations=[to_invitation_response(item) for item in invitations or []],
    )
