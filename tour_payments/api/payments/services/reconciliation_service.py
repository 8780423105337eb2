from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tour_payments.api.bookings.ledger import (
    has_installment,
    installment_date_paid,
    installment_evidence_id,
    mark_installment_paid,
)
from tour_payments.api.bookings.models import Booking
from tour_payments.api.bookings.service import get_booking
from tour_payments.api.payments.models import PaymentEvidence
from tour_payments.api.payments.schemas import EvidenceSubmitRequest
from tour_payments.core.common.constants import (
    EVIDENCE_TRANSITIONS,
    EvidenceStatus,
    ensure_transition,
)
from tour_payments.core.exceptions import InstallmentAlreadyPaid, ResourceNotFound, ValidationException
from tour_payments.core.messages import ErrorMessage
from tour_payments.core.middlewares import logger
from tour_payments.utils.clock import utcnow
from tour_payments.utils.money import money


async def get_evidence(session: AsyncSession, evidence_id: uuid.UUID) -> PaymentEvidence:
    evidence = await session.get(PaymentEvidence, evidence_id)
    if not evidence:
        raise ResourceNotFound(ErrorMessage.EVIDENCE_NOT_FOUND)
    return evidence


async def list_evidence(
    session: AsyncSession, status: EvidenceStatus | None = None
) -> list[PaymentEvidence]:
    stmt = select(PaymentEvidence)
    if status is not None:
        stmt = stmt.where(PaymentEvidence.status == status.value)
    stmt = stmt.order_by(PaymentEvidence.created_at)
    return list((await session.execute(stmt)).scalars().all())


async def _lock_booking(session: AsyncSession, document_id: uuid.UUID) -> Booking:
    stmt = (
        select(Booking)
        .where(Booking.id == document_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    booking = (await session.execute(stmt)).scalars().first()
    if not booking:
        raise ResourceNotFound(ErrorMessage.BOOKING_NOT_FOUND)
    return booking


async def submit_evidence(
    session: AsyncSession, payload: EvidenceSubmitRequest
) -> PaymentEvidence:
    booking = await get_booking(session, payload.booking_document_id)
    if not has_installment(booking, payload.installment_term):
        raise ValidationException(ErrorMessage.INSTALLMENT_NOT_IN_PLAN)
    if installment_date_paid(booking, payload.installment_term) is not None:
        raise InstallmentAlreadyPaid()

    evidence = PaymentEvidence(
        booking_document_id=booking.id,
        installment_term=payload.installment_term,
        amount=money(payload.amount),
        currency=(payload.currency or booking.currency).upper(),
        screenshot_ref=payload.screenshot_ref,
        status=EvidenceStatus.PENDING.value,
    )
    session.add(evidence)
    await session.commit()
    logger.info(
        "Evidence %s submitted for %s %s",
        evidence.id,
        booking.booking_id,
        evidence.installment_term,
    )
    return evidence


async def approve_evidence(session: AsyncSession, evidence_id: uuid.UUID) -> PaymentEvidence:
    evidence = await get_evidence(session, evidence_id)
    if evidence.status != EvidenceStatus.PENDING.value:
        return evidence

    booking = await _lock_booking(session, evidence.booking_document_id)
    slot = evidence.installment_term
    if not has_installment(booking, slot):
        raise ValidationException(ErrorMessage.INSTALLMENT_NOT_IN_PLAN)

    decided_at = utcnow()
    if installment_date_paid(booking, slot) is not None:
        if installment_evidence_id(booking, slot) != evidence.id:
            raise InstallmentAlreadyPaid()
        logger.warning(
            "Installment %s of %s already paid by evidence %s, completing its status",
            slot,
            booking.booking_id,
            evidence.id,
        )
    else:
        mark_installment_paid(booking, slot, decided_at.date(), evidence.id)
        session.add(booking)

    ensure_transition(
        EVIDENCE_TRANSITIONS, EvidenceStatus(evidence.status), EvidenceStatus.APPROVED
    )
    evidence.status = EvidenceStatus.APPROVED.value
    evidence.decided_at = decided_at
    session.add(evidence)
    await session.commit()

    logger.info(
        "Evidence %s approved, %s is now '%s'",
        evidence.id,
        booking.booking_id,
        booking.booking_status,
    )
    return evidence


async def reject_evidence(
    session: AsyncSession, evidence_id: uuid.UUID, reason: str
) -> PaymentEvidence:
    evidence = await get_evidence(session, evidence_id)
    if evidence.status != EvidenceStatus.PENDING.value:
        return evidence

    ensure_transition(
        EVIDENCE_TRANSITIONS, EvidenceStatus(evidence.status), EvidenceStatus.REJECTED
    )
    evidence.status = EvidenceStatus.REJECTED.value
    evidence.rejection_reason = reason
    evidence.decided_at = utcnow()
    session.add(evidence)
    await session.commit()

    logger.info("Evidence %s rejected", evidence.id)
    return evidence
