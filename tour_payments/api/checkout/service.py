from __future__ import annotations

from datetime import timedelta
import uuid

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tour_payments.api.checkout.models import BookingPayment, GuestInvitation
from tour_payments.api.checkout.schemas import CheckoutPaymentRequest
from tour_payments.core.common.constants import BookingType, InvitationStatus
from tour_payments.core.config import Config
from tour_payments.core.exceptions import ResourceNotFound, ValidationException
from tour_payments.core.messages import ErrorMessage
from tour_payments.core.middlewares import logger
from tour_payments.utils.clock import utcnow
from tour_payments.utils.money import money


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_payment_record(
    session: AsyncSession,
    payment_id: uuid.UUID,
    message: str = ErrorMessage.PAYMENT_RECORD_NOT_FOUND,
) -> BookingPayment:
    payment = await session.get(BookingPayment, payment_id)
    if not payment:
        raise ResourceNotFound(message)
    return payment


async def list_invitations(
    session: AsyncSession, payment_id: uuid.UUID
) -> list[GuestInvitation]:
    stmt = (
        select(GuestInvitation)
        .where(GuestInvitation.payment_id == payment_id)
        .order_by(GuestInvitation.invited_at, GuestInvitation.email)
    )
    return list((await session.execute(stmt)).scalars().all())


async def find_invitation(
    session: AsyncSession, payment_id: uuid.UUID, email: str
) -> GuestInvitation | None:
    stmt = select(GuestInvitation).where(
        GuestInvitation.payment_id == payment_id,
        GuestInvitation.email == normalize_email(email),
    )
    return (await session.execute(stmt)).scalars().first()


async def record_checkout_payment(
    session: AsyncSession, payload: CheckoutPaymentRequest
) -> BookingPayment:
    stmt = select(BookingPayment).where(
        BookingPayment.external_reference == payload.external_reference
    )
    existing = (await session.execute(stmt)).scalars().first()
    if existing:
        return existing

    payment = BookingPayment(
        external_reference=payload.external_reference,
        payer_email=normalize_email(payload.payer_email),
        tour_package_id=payload.tour_package_id,
        booking_type=payload.booking_type.value,
        payment_method=payload.payment_method.value,
        amount_paid=money(payload.amount_paid),
        currency=(payload.currency or Config.DEFAULT_CURRENCY).upper(),
    )
    session.add(payment)
    await session.commit()
    logger.info(
        "Recorded checkout payment %s ref=%s", payment.id, payment.external_reference
    )
    return payment


def stage_invitations(
    session: AsyncSession,
    payment: BookingPayment,
    emails: list[str],
    existing: list[GuestInvitation],
) -> list[GuestInvitation]:
    """Add pending invitations for emails not yet invited; caller commits."""
    if not BookingType(payment.booking_type).is_shared:
        raise ValidationException(ErrorMessage.INVITATIONS_NOT_ALLOWED)

    known = {invitation.email for invitation in existing}
    now = utcnow()
    created: list[GuestInvitation] = []
    for email in emails:
        normalized = normalize_email(email)
        if normalized in known or normalized == payment.payer_email:
            continue
        invitation = GuestInvitation(
            payment_id=payment.id,
            email=normalized,
            status=InvitationStatus.PENDING.value,
            invited_at=now,
            expires_at=now + timedelta(days=Config.INVITATION_TTL_DAYS),
        )
        session.add(invitation)
        known.add(normalized)
        created.append(invitation)
    return created


async def invite_guests(
    session: AsyncSession, payment_id: uuid.UUID, emails: list[str]
) -> list[GuestInvitation]:
    payment = await get_payment_record(session, payment_id)
    existing = await list_invitations(session, payment_id)
    created = stage_invitations(session, payment, emails, existing)
    if created:
        await session.commit()
        logger.info("Invited %d guest(s) to payment %s", len(created), payment_id)
    return existing + created
