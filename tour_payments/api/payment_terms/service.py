from __future__ import annotations

from datetime import date
from decimal import Decimal
import uuid

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tour_payments.api.bookings.schedule import compute_schedule, eligible_installment_dates
from tour_payments.api.payment_terms.helpers import to_payment_term_response
from tour_payments.api.payment_terms.models import PaymentTerm
from tour_payments.api.payment_terms.schemas import (
    AvailablePaymentTerm,
    AvailablePaymentTermsResponse,
    InitializeDefaultsResponse,
    PaymentTermConfig,
    PaymentTermCreateRequest,
    PaymentTermUpdateRequest,
)
from tour_payments.core.common.constants import (
    MAX_MONTHS_REQUIRED,
    MONTHLY_SLOTS,
    PERCENTAGE_TOLERANCE,
    PaymentType,
)
from tour_payments.core.exceptions import InvalidConfig, ResourceNotFound, ScheduleInfeasible
from tour_payments.core.messages import ErrorMessage
from tour_payments.core.middlewares import logger


DEFAULT_PAYMENT_TERMS: list[dict] = [
    {
        "name": "Full Payment",
        "description": "Whole tour cost due 30 days before departure.",
        "payment_type": PaymentType.FULL_PAYMENT,
        "days_required": 30,
        "color": "#f59e0b",
    },
    {
        "name": "P1 - Single Instalment",
        "description": "One payment on the next eligible 2nd of the month.",
        "payment_type": PaymentType.MONTHLY_SCHEDULED,
        "months_required": 1,
        "monthly_percentages": [Decimal("100")],
        "color": "#3b82f6",
    },
    {
        "name": "P2 - Two Instalments",
        "description": "Two equal payments on consecutive 2nd-of-month dates.",
        "payment_type": PaymentType.MONTHLY_SCHEDULED,
        "months_required": 2,
        "monthly_percentages": [Decimal("50"), Decimal("50")],
        "color": "#8b5cf6",
    },
    {
        "name": "P3 - Three Instalments",
        "description": "Three payments on consecutive 2nd-of-month dates.",
        "payment_type": PaymentType.MONTHLY_SCHEDULED,
        "months_required": 3,
        "monthly_percentages": [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")],
        "color": "#10b981",
    },
    {
        "name": "P4 - Four Instalments",
        "description": "Four equal payments for early planners.",
        "payment_type": PaymentType.MONTHLY_SCHEDULED,
        "months_required": 4,
        "monthly_percentages": [Decimal("25")] * 4,
        "color": "#06b6d4",
    },
]

# Cost used to probe whether a term can be scheduled for given dates.
_PROBE_COST = Decimal("100.00")


def validate(config: PaymentTermConfig) -> None:
    """Raise ``InvalidConfig`` unless the term can produce a well-formed schedule."""
    if config.months_required is not None and config.months_required < 1:
        raise InvalidConfig(ErrorMessage.MONTHS_OUT_OF_RANGE)
    if config.days_required is not None and config.days_required < 0:
        raise InvalidConfig(ErrorMessage.DAYS_REQUIRED_INVALID)

    if config.payment_type == PaymentType.FULL_PAYMENT:
        if config.days_required is None:
            raise InvalidConfig(ErrorMessage.DAYS_REQUIRED_INVALID)
        if config.months_required is not None or config.monthly_percentages:
            raise InvalidConfig("Full payment terms cannot define monthly installments")
        return

    if config.months_required is None or config.months_required > MAX_MONTHS_REQUIRED:
        raise InvalidConfig(ErrorMessage.MONTHS_OUT_OF_RANGE)
    percentages = config.monthly_percentages or []
    if len(percentages) != config.months_required:
        raise InvalidConfig(ErrorMessage.PERCENTAGES_LENGTH_MISMATCH)
    if any(pct <= 0 for pct in percentages):
        raise InvalidConfig("Each monthly percentage must be greater than zero")
    if abs(sum(percentages, Decimal("0")) - Decimal("100")) > Decimal(PERCENTAGE_TOLERANCE):
        raise InvalidConfig(ErrorMessage.PERCENTAGES_DO_NOT_SUM)


def _stored_percentages(percentages: list[Decimal] | None) -> list[float] | None:
    if percentages is None:
        return None
    return [float(pct) for pct in percentages]


async def get_payment_term(session: AsyncSession, term_id: uuid.UUID) -> PaymentTerm:
    term = await session.get(PaymentTerm, term_id)
    if not term:
        raise ResourceNotFound(ErrorMessage.PAYMENT_TERM_NOT_FOUND)
    return term


async def list_payment_terms(
    session: AsyncSession, active_only: bool = False
) -> list[PaymentTerm]:
    stmt = select(PaymentTerm)
    if active_only:
        stmt = stmt.where(PaymentTerm.is_active.is_(True))
    stmt = stmt.order_by(PaymentTerm.sort_order, PaymentTerm.name)
    return list((await session.execute(stmt)).scalars().all())


async def _next_sort_order(session: AsyncSession) -> int:
    stmt = select(func.max(PaymentTerm.sort_order))
    current = (await session.execute(stmt)).scalar_one_or_none()
    return (current or 0) + 1


async def create_payment_term(
    session: AsyncSession, payload: PaymentTermCreateRequest
) -> PaymentTerm:
    validate(
        PaymentTermConfig(
            name=payload.name,
            payment_type=payload.payment_type,
            days_required=payload.days_required,
            months_required=payload.months_required,
            monthly_percentages=payload.monthly_percentages,
        )
    )

    term = PaymentTerm(
        name=payload.name,
        description=payload.description,
        payment_type=payload.payment_type.value,
        days_required=payload.days_required,
        months_required=payload.months_required,
        monthly_percentages=_stored_percentages(payload.monthly_percentages),
        is_active=payload.is_active,
        sort_order=await _next_sort_order(session),
        color=payload.color,
    )
    session.add(term)
    await session.commit()
    logger.info("Created payment term %s (%s)", term.name, term.id)
    return term


async def update_payment_term(
    session: AsyncSession, term_id: uuid.UUID, payload: PaymentTermUpdateRequest
) -> PaymentTerm:
    term = await get_payment_term(session, term_id)
    changes = payload.model_dump(exclude_unset=True)
    for required in ("name", "payment_type"):
        if changes.get(required, "") is None:
            changes.pop(required)

    merged = {
        "name": term.name,
        "payment_type": PaymentType(term.payment_type),
        "days_required": term.days_required,
        "months_required": term.months_required,
        "monthly_percentages": (
            [Decimal(str(pct)) for pct in term.monthly_percentages]
            if term.monthly_percentages is not None
            else None
        ),
    }
    merged.update({key: value for key, value in changes.items() if key in merged})

    new_type = PaymentType(merged["payment_type"])
    if new_type != PaymentType(term.payment_type):
        if new_type == PaymentType.FULL_PAYMENT:
            merged["months_required"] = None
            merged["monthly_percentages"] = None
        else:
            merged["days_required"] = None

    config = PaymentTermConfig(**merged)
    validate(config)

    term.name = config.name
    term.payment_type = config.payment_type.value
    term.days_required = config.days_required
    term.months_required = config.months_required
    term.monthly_percentages = _stored_percentages(config.monthly_percentages)
    for field in ("description", "is_active", "sort_order", "color"):
        if changes.get(field) is not None:
            setattr(term, field, changes[field])

    session.add(term)
    await session.commit()
    logger.info("Updated payment term %s", term.id)
    return term


async def initialize_default_terms(session: AsyncSession) -> InitializeDefaultsResponse:
    existing = await list_payment_terms(session)
    if existing:
        return InitializeDefaultsResponse(created=0, total=len(existing))

    for sort_order, definition in enumerate(DEFAULT_PAYMENT_TERMS, start=1):
        session.add(
            PaymentTerm(
                name=definition["name"],
                description=definition["description"],
                payment_type=definition["payment_type"].value,
                days_required=definition.get("days_required"),
                months_required=definition.get("months_required"),
                monthly_percentages=_stored_percentages(definition.get("monthly_percentages")),
                is_active=True,
                sort_order=sort_order,
                color=definition["color"],
            )
        )
    await session.commit()
    logger.info("Seeded %d default payment terms", len(DEFAULT_PAYMENT_TERMS))
    return InitializeDefaultsResponse(
        created=len(DEFAULT_PAYMENT_TERMS), total=len(DEFAULT_PAYMENT_TERMS)
    )


async def list_available_terms(
    session: AsyncSession, tour_date: date, booked_on: date
) -> AvailablePaymentTermsResponse:
    available: list[AvailablePaymentTerm] = []
    for term in await list_payment_terms(session, active_only=True):
        try:
            installments = compute_schedule(
                term, tour_date, _PROBE_COST, booked_on=booked_on
            )
        except ScheduleInfeasible:
            continue
        if len(installments) > len(MONTHLY_SLOTS):
            continue
        available.append(
            AvailablePaymentTerm(
                term=to_payment_term_response(term),
                firstDueDate=installments[0].due_date,
                lastDueDate=installments[-1].due_date,
            )
        )

    return AvailablePaymentTermsResponse(
        eligibleInstallmentDates=eligible_installment_dates(tour_date, booked_on),
        available=available,
    )
