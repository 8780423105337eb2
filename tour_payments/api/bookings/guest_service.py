"""Onboarding a guest into an existing Duo or Group booking.

The guest never gets a fresh schedule: plan, dates and installment amounts
are copied from the main booking of the group. Every step checks what an
earlier, interrupted attempt already wrote, so the whole operation can be
retried until it completes.
"""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from tour_payments.api.bookings.identifiers import (
    count_bookings_for_package,
    next_booking_code,
    next_group_member_code,
)
from tour_payments.api.bookings.ledger import InheritedTerms, refresh_derived_fields, write_installments
from tour_payments.api.bookings.models import Booking
from tour_payments.api.bookings.schemas import GuestData
from tour_payments.api.bookings.service import commit_new_booking, find_group_member, link_payment_record
from tour_payments.api.checkout.models import BookingPayment, GuestInvitation
from tour_payments.api.checkout.service import find_invitation, get_payment_record, normalize_email
from tour_payments.core.common.constants import (
    INVITATION_TRANSITIONS,
    InvitationStatus,
    ensure_transition,
)
from tour_payments.core.exceptions import (
    DuplicateBooking,
    InvitationInvalid,
    ResourceNotFound,
    ValidationException,
)
from tour_payments.core.messages import ErrorMessage
from tour_payments.core.middlewares import logger
from tour_payments.utils.clock import utcnow
from tour_payments.utils.money import money


def check_invitation(invitation: GuestInvitation | None, *, resuming: bool = False) -> GuestInvitation:
    if invitation is None:
        raise InvitationInvalid(ErrorMessage.INVITATION_NOT_FOUND)
    if invitation.status == InvitationStatus.ACCEPTED.value:
        raise InvitationInvalid(ErrorMessage.INVITATION_ALREADY_ACCEPTED)
    # the booking already exists, so only the acceptance is left to finish
    if not resuming and invitation.expires_at < utcnow():
        raise InvitationInvalid(ErrorMessage.INVITATION_EXPIRED)
    return invitation


def check_guest_payment(guest_payment: BookingPayment, parent: Booking, email: str) -> None:
    """The guest's own checkout must be for the same tour and group type."""
    if guest_payment.booking_document_id is not None:
        raise DuplicateBooking(ErrorMessage.PAYMENT_RECORD_ALREADY_USED)
    if guest_payment.tour_package_id != parent.tour_package_id:
        raise ValidationException(ErrorMessage.GUEST_PAYMENT_OTHER_TOUR)
    if guest_payment.booking_type != parent.booking_type:
        raise ValidationException(ErrorMessage.GUEST_PAYMENT_OTHER_BOOKING_TYPE)
    if normalize_email(guest_payment.payer_email) != email:
        raise ValidationException(ErrorMessage.GUEST_PAYMENT_OTHER_PAYER)


async def _load_parent_booking(session: AsyncSession, parent_payment: BookingPayment) -> Booking:
    parent = None
    if parent_payment.booking_document_id:
        parent = await session.get(Booking, parent_payment.booking_document_id)
    if parent is None:
        raise ResourceNotFound(ErrorMessage.PARENT_BOOKING_NOT_FOUND)
    return parent


async def _create_guest_booking(
    session: AsyncSession,
    guest_payment: BookingPayment,
    parent: Booking,
    email: str,
    guest_profile: GuestData,
) -> Booking:
    terms = InheritedTerms.from_booking(parent)
    existing_count = await count_bookings_for_package(session, terms.tour_package_id)

    booking = Booking(
        booking_id=next_booking_code(terms.tour_date, existing_count),
        group_id=terms.group_id,
        member_code=next_group_member_code(
            terms.booking_type,
            terms.tour_package_name,
            guest_profile.first_name,
            guest_profile.last_name,
            email,
        ),
        booking_type=terms.booking_type.value,
        is_main_booker=False,
        email=email,
        first_name=guest_profile.first_name,
        last_name=guest_profile.last_name,
        tour_package_id=terms.tour_package_id,
        tour_package_name=terms.tour_package_name,
        tour_date=terms.tour_date,
        return_date=terms.return_date,
        original_tour_cost=terms.original_tour_cost,
        discounted_tour_cost=terms.discounted_tour_cost,
        reservation_fee=money(guest_payment.amount_paid),
        currency=terms.currency,
        payment_plan=terms.payment_plan,
        payment_method=guest_payment.payment_method,
        payment_id=guest_payment.id,
        parent_booking_id=parent.id,
    )
    write_installments(booking, terms.installments)
    refresh_derived_fields(booking)

    session.add(booking)
    link_payment_record(guest_payment, booking)
    session.add(guest_payment)
    await commit_new_booking(session, booking)
    logger.info(
        "Created guest booking %s in group %s", booking.booking_id, booking.group_id
    )
    return booking


async def onboard_guest(
    session: AsyncSession,
    *,
    payment_id: uuid.UUID,
    parent_payment_id: uuid.UUID,
    guest_email: str,
    guest_profile: GuestData,
) -> Booking:
    email = normalize_email(guest_email)

    guest_payment = await get_payment_record(session, payment_id)
    parent_payment = await get_payment_record(
        session, parent_payment_id, ErrorMessage.PARENT_PAYMENT_RECORD_NOT_FOUND
    )

    invitation = await find_invitation(session, parent_payment.id, email)
    parent = await _load_parent_booking(session, parent_payment)

    booking = await find_group_member(session, parent.group_id, email)
    resuming = booking is not None and booking.payment_id == guest_payment.id
    check_invitation(invitation, resuming=resuming)

    if booking is not None:
        if not resuming:
            raise DuplicateBooking()
        logger.warning(
            "Resuming guest onboarding for %s: booking %s exists, invitation still pending",
            email,
            booking.booking_id,
        )
        if guest_payment.booking_document_id != booking.id:
            link_payment_record(guest_payment, booking)
            session.add(guest_payment)
    else:
        check_guest_payment(guest_payment, parent, email)
        booking = await _create_guest_booking(
            session, guest_payment, parent, email, guest_profile
        )

    ensure_transition(
        INVITATION_TRANSITIONS,
        InvitationStatus(invitation.status),
        InvitationStatus.ACCEPTED,
    )
    invitation.status = InvitationStatus.ACCEPTED.value
    invitation.accepted_at = utcnow()
    invitation.guest_booking_id = booking.id
    session.add(invitation)
    await session.commit()

    logger.info("Invitation for %s accepted with booking %s", email, booking.booking_id)
    return booking
