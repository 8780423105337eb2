"""Payment schedule calculation.

Everything in this module is a pure function of its arguments: the booking
date is passed in rather than read from the clock, so a schedule can be
recomputed and checked at any time.
"""
from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from pydantic import BaseModel, Field

from tour_payments.core.common.constants import FULL_PAYMENT_SLOT, MONTHLY_SLOTS, PaymentType
from tour_payments.core.exceptions import ScheduleInfeasible
from tour_payments.core.messages import ErrorMessage
from tour_payments.utils.money import money


INSTALLMENT_DAY = 2
# Days after the booking date before the first monthly installment can fall.
FIRST_DUE_GRACE_DAYS = 2
# The last monthly installment must be settled this many days before the tour.
LAST_DUE_LEAD_DAYS = 3


class Installment(BaseModel):
    label: str
    amount: Decimal
    due_date: date
    date_paid: date | None = None


def _add_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    return day.replace(year=day.year + month_index // 12, month=month_index % 12 + 1)


def first_installment_date(booked_on: date) -> date:
    """First 2nd-of-month strictly after the booking grace period."""
    anchor = booked_on + timedelta(days=FIRST_DUE_GRACE_DAYS)
    candidate = anchor.replace(day=INSTALLMENT_DAY)
    if candidate <= anchor:
        candidate = _add_months(candidate, 1)
    return candidate


def last_installment_deadline(tour_date: date) -> date:
    return tour_date - timedelta(days=LAST_DUE_LEAD_DAYS)


def eligible_installment_dates(tour_date: date, booked_on: date) -> list[date]:
    deadline = last_installment_deadline(tour_date)
    dates: list[date] = []
    current = first_installment_date(booked_on)
    while current <= deadline:
        dates.append(current)
        current = _add_months(current, 1)
    return dates


def _full_payment_schedule(
    days_required: int | None, tour_date: date, total: Decimal, booked_on: date
) -> list[Installment]:
    due_date = tour_date - timedelta(days=days_required or 0)
    if due_date < booked_on:
        raise ScheduleInfeasible(
            f"Full payment would be due on {due_date.isoformat()}, "
            f"before the booking date {booked_on.isoformat()}"
        )
    return [Installment(label=FULL_PAYMENT_SLOT, amount=total, due_date=due_date)]


def _monthly_schedule(
    percentages: list, tour_date: date, total: Decimal, booked_on: date
) -> list[Installment]:
    months = len(percentages)
    first_due = first_installment_date(booked_on)
    due_dates = [_add_months(first_due, offset) for offset in range(months)]
    deadline = last_installment_deadline(tour_date)
    if not due_dates or due_dates[-1] > deadline:
        raise ScheduleInfeasible(
            f"{months} monthly installment(s) starting {first_due.isoformat()} "
            f"cannot be completed by {deadline.isoformat()}"
        )

    installments: list[Installment] = []
    allocated = Decimal("0.00")
    for index, (pct, due_date) in enumerate(zip(percentages, due_dates)):
        if index == months - 1:
            amount = total - allocated
        else:
            amount = money(total * Decimal(str(pct)) / Decimal("100"))
            allocated += amount
        installments.append(
            Installment(label=_monthly_label(index), amount=amount, due_date=due_date)
        )
    # percentages may sum to 100 within tolerance, which can starve the last share
    if any(item.amount <= 0 for item in installments):
        raise ScheduleInfeasible(ErrorMessage.INSTALLMENT_NOT_POSITIVE)
    return installments


def _monthly_label(index: int) -> str:
    if index < len(MONTHLY_SLOTS):
        return MONTHLY_SLOTS[index]
    return f"p{index + 1}"


def compute_schedule(
    term,
    tour_date: date,
    total_cost: Decimal,
    *,
    booked_on: date,
) -> list[Installment]:
    """Turn a payment term into dated installments summing to ``total_cost``.

    ``term`` is anything exposing ``payment_type``, ``days_required`` and
    ``monthly_percentages`` (the stored model or a validated config).
    Raises ``ScheduleInfeasible`` instead of shortening the plan.
    """
    total = money(total_cost)
    if total <= 0:
        raise ScheduleInfeasible("Total cost must be greater than zero")

    payment_type = PaymentType(term.payment_type)
    if payment_type == PaymentType.FULL_PAYMENT:
        return _full_payment_schedule(term.days_required, tour_date, total, booked_on)

    percentages = list(term.monthly_percentages or [])
    if not percentages:
        raise ScheduleInfeasible(ErrorMessage.SCHEDULE_INFEASIBLE)
    return _monthly_schedule(percentages, tour_date, total, booked_on)
