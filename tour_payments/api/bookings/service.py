from __future__ import annotations

import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tour_payments.api.bookings.identifiers import (
    count_bookings_for_package,
    new_group_id,
    next_booking_code,
    next_group_member_code,
)
from tour_payments.api.bookings.ledger import refresh_derived_fields, write_installments
from tour_payments.api.bookings.models import Booking
from tour_payments.api.bookings.schedule import compute_schedule
from tour_payments.api.bookings.schemas import CreateBookingRequest
from tour_payments.api.checkout.models import BookingPayment
from tour_payments.api.checkout.service import get_payment_record, list_invitations, stage_invitations
from tour_payments.api.payment_terms.service import get_payment_term
from tour_payments.core.common.constants import BookingType
from tour_payments.core.exceptions import DuplicateBooking, ResourceNotFound, ValidationException
from tour_payments.core.messages import ErrorMessage
from tour_payments.core.middlewares import logger
from tour_payments.utils.catalog_service import fetch_tour_package
from tour_payments.utils.clock import utc_today
from tour_payments.utils.money import money


async def get_booking(session: AsyncSession, document_id: uuid.UUID) -> Booking:
    booking = await session.get(Booking, document_id)
    if not booking:
        raise ResourceNotFound(ErrorMessage.BOOKING_NOT_FOUND)
    return booking


async def find_booking_for_payment(
    session: AsyncSession, payment_id: uuid.UUID
) -> Booking | None:
    stmt = select(Booking).where(Booking.payment_id == payment_id)
    return (await session.execute(stmt)).scalars().first()


async def find_group_member(
    session: AsyncSession, group_id: str, email: str
) -> Booking | None:
    stmt = select(Booking).where(Booking.group_id == group_id, Booking.email == email)
    return (await session.execute(stmt)).scalars().first()


def link_payment_record(payment: BookingPayment, booking: Booking) -> None:
    payment.booking_document_id = booking.id
    payment.booking_code = booking.booking_id


async def commit_new_booking(session: AsyncSession, booking: Booking) -> None:
    # rollback expires every loaded instance, so read these up front
    email, group_id = booking.email, booking.group_id
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        logger.warning("Booking for %s in group %s already exists", email, group_id)
        raise DuplicateBooking() from exc


async def _resume_existing(
    session: AsyncSession, payment: BookingPayment
) -> Booking | None:
    if payment.booking_document_id:
        return await get_booking(session, payment.booking_document_id)

    booking = await find_booking_for_payment(session, payment.id)
    if booking:
        logger.warning(
            "Payment %s produced booking %s but was never linked, linking now",
            payment.id,
            booking.booking_id,
        )
        link_payment_record(payment, booking)
        session.add(payment)
        await session.commit()
    return booking


async def create_booking(session: AsyncSession, payload: CreateBookingRequest) -> Booking:
    """Materialize the main booking for a checkout payment record."""
    payment = await get_payment_record(session, payload.payment_id)
    existing = await _resume_existing(session, payment)
    if existing:
        return existing

    term = await get_payment_term(session, payload.payment_term_id)
    if not term.is_active:
        raise ValidationException(ErrorMessage.PAYMENT_TERM_INACTIVE)

    package = await fetch_tour_package(payment.tour_package_id)
    travel_date = package.travel_date_for(payload.tour_date)
    if package.travel_dates and travel_date is None:
        raise ValidationException("Tour date is not offered for this tour package")
    return_date = payload.return_date or (travel_date.end_date if travel_date else None)

    total_cost = money(
        package.discounted_cost if package.discounted_cost is not None else package.original_cost
    )
    installments = compute_schedule(
        term,
        payload.tour_date,
        total_cost,
        booked_on=payload.booked_on or utc_today(),
    )

    booking_type = BookingType(payment.booking_type)
    existing_count = await count_bookings_for_package(session, payment.tour_package_id)
    booking = Booking(
        booking_id=next_booking_code(payload.tour_date, existing_count),
        group_id=new_group_id(),
        member_code=next_group_member_code(
            booking_type,
            package.name,
            payload.first_name,
            payload.last_name,
            payment.payer_email,
        ),
        booking_type=booking_type.value,
        is_main_booker=True,
        email=payment.payer_email,
        first_name=payload.first_name,
        last_name=payload.last_name,
        tour_package_id=payment.tour_package_id,
        tour_package_name=package.name,
        tour_date=payload.tour_date,
        return_date=return_date,
        original_tour_cost=money(package.original_cost),
        discounted_tour_cost=(
            money(package.discounted_cost) if package.discounted_cost is not None else None
        ),
        reservation_fee=money(payment.amount_paid),
        currency=payment.currency,
        payment_plan=term.name,
        payment_method=payment.payment_method,
        payment_id=payment.id,
    )
    write_installments(booking, installments)
    refresh_derived_fields(booking)

    if payload.guest_emails:
        stage_invitations(
            session,
            payment,
            list(payload.guest_emails),
            await list_invitations(session, payment.id),
        )

    session.add(booking)
    link_payment_record(payment, booking)
    session.add(payment)
    await commit_new_booking(session, booking)

    logger.info(
        "Created %s %s for payment %s (%s)",
        booking.booking_type,
        booking.booking_id,
        payment.id,
        booking.payment_plan,
    )
    return booking
