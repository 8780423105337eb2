from __future__ import annotations

from datetime import date
from decimal import Decimal
import uuid

from pydantic import BaseModel

from tour_payments.api.bookings.models import Booking
from tour_payments.api.bookings.schedule import Installment
from tour_payments.core.common.constants import (
    BOOKING_PAYMENT_TRANSITIONS,
    FULL_PAYMENT_SLOT,
    INSTALLMENT_SLOTS,
    MONTHLY_SLOTS,
    BookingPaymentState,
    BookingType,
    ensure_transition,
)
from tour_payments.core.exceptions import ScheduleInfeasible
from tour_payments.core.messages import ErrorMessage
from tour_payments.utils.money import money


class InheritedTerms(BaseModel):
    """What a guest booking copies from the group's main booking."""

    group_id: str
    booking_type: BookingType
    payment_plan: str
    tour_package_id: str
    tour_package_name: str
    tour_date: date
    return_date: date | None = None
    original_tour_cost: Decimal
    discounted_tour_cost: Decimal | None = None
    currency: str
    installments: list[Installment]

    @classmethod
    def from_booking(cls, booking: Booking) -> "InheritedTerms":
        return cls(
            group_id=booking.group_id,
            booking_type=BookingType(booking.booking_type),
            payment_plan=booking.payment_plan,
            tour_package_id=booking.tour_package_id,
            tour_package_name=booking.tour_package_name,
            tour_date=booking.tour_date,
            return_date=booking.return_date,
            original_tour_cost=booking.original_tour_cost,
            discounted_tour_cost=booking.discounted_tour_cost,
            currency=booking.currency,
            # amounts and due dates only, the guest has paid nothing yet
            installments=[
                item.model_copy(update={"date_paid": None})
                for item in read_installments(booking)
            ],
        )


def total_tour_cost(booking: Booking) -> Decimal:
    if booking.discounted_tour_cost is not None:
        return money(booking.discounted_tour_cost)
    return money(booking.original_tour_cost)


def read_installments(booking: Booking) -> list[Installment]:
    installments: list[Installment] = []
    for slot in INSTALLMENT_SLOTS:
        amount = getattr(booking, f"{slot}_amount")
        if amount is None:
            continue
        installments.append(
            Installment(
                label=slot,
                amount=money(amount),
                due_date=getattr(booking, f"{slot}_due_date"),
                date_paid=getattr(booking, f"{slot}_date_paid"),
            )
        )
    return installments


def write_installments(booking: Booking, installments: list[Installment]) -> None:
    monthly = [item for item in installments if item.label != FULL_PAYMENT_SLOT]
    if len(monthly) > len(MONTHLY_SLOTS):
        raise ScheduleInfeasible(ErrorMessage.TOO_MANY_INSTALLMENTS)

    for slot in INSTALLMENT_SLOTS:
        setattr(booking, f"{slot}_amount", None)
        setattr(booking, f"{slot}_due_date", None)
        setattr(booking, f"{slot}_date_paid", None)
        setattr(booking, f"{slot}_evidence_id", None)

    for item in installments:
        setattr(booking, f"{item.label}_amount", item.amount)
        setattr(booking, f"{item.label}_due_date", item.due_date)
        setattr(booking, f"{item.label}_date_paid", item.date_paid)


def has_installment(booking: Booking, slot: str) -> bool:
    return slot in INSTALLMENT_SLOTS and getattr(booking, f"{slot}_amount") is not None


def installment_evidence_id(booking: Booking, slot: str) -> uuid.UUID | None:
    return getattr(booking, f"{slot}_evidence_id")


def installment_date_paid(booking: Booking, slot: str) -> date | None:
    return getattr(booking, f"{slot}_date_paid")


def mark_installment_paid(
    booking: Booking, slot: str, paid_on: date, evidence_id: uuid.UUID
) -> None:
    setattr(booking, f"{slot}_date_paid", paid_on)
    setattr(booking, f"{slot}_evidence_id", evidence_id)
    refresh_derived_fields(booking)


def _display_date(value: date) -> str:
    return f"{value:%b} {value.day}, {value.year}"


def derive_payment_state(installments: list[Installment]) -> BookingPaymentState:
    paid_count = sum(1 for item in installments if item.date_paid is not None)
    if installments and paid_count == len(installments):
        return BookingPaymentState.CONFIRMED
    if paid_count:
        return BookingPaymentState.PARTIALLY_PAID
    return BookingPaymentState.AWAITING_PAYMENT


def derive_booking_status(installments: list[Installment]) -> str:
    paid_dates = [item.date_paid for item in installments if item.date_paid is not None]
    if installments and len(paid_dates) == len(installments):
        return f"Booking Confirmed - {_display_date(max(paid_dates))}"

    if any(item.label == FULL_PAYMENT_SLOT for item in installments):
        return "Waiting for Full Payment"

    status = f"Installment {len(paid_dates)}/{len(installments)}"
    if paid_dates:
        status += f" - last paid {_display_date(max(paid_dates))}"
    return status


def derive_payment_progress(installments: list[Installment]) -> int:
    if not installments:
        return 0
    paid_count = sum(1 for item in installments if item.date_paid is not None)
    return int(round(paid_count / len(installments) * 100))


def refresh_derived_fields(booking: Booking) -> None:
    installments = read_installments(booking)

    state = derive_payment_state(installments)
    current = BookingPaymentState(booking.payment_state)
    if state != current:
        ensure_transition(BOOKING_PAYMENT_TRANSITIONS, current, state)
    booking.payment_state = state.value

    booking.booking_status = derive_booking_status(installments)
    booking.payment_progress = derive_payment_progress(installments)

    paid_installments = sum(
        (item.amount for item in installments if item.date_paid is not None),
        Decimal("0.00"),
    )
    booking.paid = money(money(booking.reservation_fee) + paid_installments)
    booking.remaining_balance = money(
        sum(
            (item.amount for item in installments if item.date_paid is None),
            Decimal("0.00"),
        )
    )
