"""
Schedule calculation tests.

Verifies:
- Full payment due dates
- 2nd-of-month installment dates and the booking grace period
- Rounding remainder lands on the last installment, amounts always sum to the total
- Infeasible schedules are rejected, never truncated
"""

from datetime import date
from decimal import Decimal

import pytest

from tour_payments.api.bookings.schedule import (
    compute_schedule,
    eligible_installment_dates,
    first_installment_date,
)
from tour_payments.api.payment_terms.schemas import PaymentTermConfig
from tour_payments.api.payment_terms.service import validate
from tour_payments.core.common.constants import PaymentType
from tour_payments.core.exceptions import ScheduleInfeasible


def full_payment(days_required: int) -> PaymentTermConfig:
    return PaymentTermConfig(
        name="Full Payment", payment_type=PaymentType.FULL_PAYMENT, days_required=days_required
    )


def monthly(*percentages: str) -> PaymentTermConfig:
    return PaymentTermConfig(
        name=f"P{len(percentages)}",
        payment_type=PaymentType.MONTHLY_SCHEDULED,
        months_required=len(percentages),
        monthly_percentages=[Decimal(pct) for pct in percentages],
    )


# =============================================================================
# FULL PAYMENT
# =============================================================================


class TestFullPayment:
    def test_due_thirty_days_before_tour(self):
        installments = compute_schedule(
            full_payment(30), date(2026, 3, 1), Decimal("1000"), booked_on=date(2026, 1, 5)
        )

        assert len(installments) == 1
        assert installments[0].label == "full_payment"
        assert installments[0].amount == Decimal("1000.00")
        assert installments[0].due_date == date(2026, 1, 30)

    def test_due_date_on_booking_day_is_allowed(self):
        installments = compute_schedule(
            full_payment(30), date(2026, 3, 1), Decimal("1000"), booked_on=date(2026, 1, 30)
        )
        assert installments[0].due_date == date(2026, 1, 30)

    def test_due_date_before_booking_is_infeasible(self):
        with pytest.raises(ScheduleInfeasible):
            compute_schedule(
                full_payment(30), date(2026, 3, 1), Decimal("1000"), booked_on=date(2026, 2, 10)
            )


# =============================================================================
# INSTALLMENT DATES
# =============================================================================


class TestInstallmentDates:
    @pytest.mark.parametrize(
        "booked_on,expected",
        [
            (date(2026, 1, 10), date(2026, 2, 2)),
            (date(2026, 1, 30), date(2026, 2, 2)),
            (date(2026, 1, 31), date(2026, 3, 2)),
            (date(2025, 12, 31), date(2026, 2, 2)),
            (date(2025, 12, 29), date(2026, 1, 2)),
        ],
    )
    def test_first_installment_date(self, booked_on, expected):
        assert first_installment_date(booked_on) == expected

    def test_eligible_dates_stop_three_days_before_tour(self):
        dates = eligible_installment_dates(date(2026, 6, 15), date(2026, 1, 10))
        assert dates == [
            date(2026, 2, 2),
            date(2026, 3, 2),
            date(2026, 4, 2),
            date(2026, 5, 2),
            date(2026, 6, 2),
        ]

    def test_no_eligible_dates_for_short_lead_time(self):
        assert eligible_installment_dates(date(2026, 1, 20), date(2026, 1, 10)) == []

    def test_monthly_installments_fall_on_consecutive_seconds(self):
        installments = compute_schedule(
            monthly("25", "25", "25", "25"),
            date(2026, 6, 15),
            Decimal("1000"),
            booked_on=date(2026, 1, 10),
        )
        assert [item.label for item in installments] == ["p1", "p2", "p3", "p4"]
        assert [item.due_date for item in installments] == [
            date(2026, 2, 2),
            date(2026, 3, 2),
            date(2026, 4, 2),
            date(2026, 5, 2),
        ]
        assert all(item.date_paid is None for item in installments)


# =============================================================================
# AMOUNTS
# =============================================================================


class TestAmounts:
    def test_even_split(self):
        installments = compute_schedule(
            monthly("50", "50"), date(2026, 6, 15), Decimal("1000"), booked_on=date(2026, 1, 10)
        )
        assert [item.amount for item in installments] == [Decimal("500.00"), Decimal("500.00")]

    def test_last_installment_absorbs_remainder(self):
        installments = compute_schedule(
            monthly("33.33", "33.33", "33.34"),
            date(2026, 6, 15),
            Decimal("1000.01"),
            booked_on=date(2026, 1, 10),
        )
        assert [item.amount for item in installments] == [
            Decimal("333.30"),
            Decimal("333.30"),
            Decimal("333.41"),
        ]
        assert sum(item.amount for item in installments) == Decimal("1000.01")

    def test_half_cent_rounds_up_and_total_is_exact(self):
        installments = compute_schedule(
            monthly("50", "50"), date(2026, 6, 15), Decimal("100.01"), booked_on=date(2026, 1, 10)
        )
        assert [item.amount for item in installments] == [Decimal("50.01"), Decimal("50.00")]

    def test_starved_last_installment_is_infeasible(self):
        # sums to 100.01, inside the validation tolerance
        with pytest.raises(ScheduleInfeasible):
            compute_schedule(
                monthly("99.995", "0.015"),
                date(2026, 6, 15),
                Decimal("1.00"),
                booked_on=date(2026, 1, 10),
            )

    @pytest.mark.parametrize(
        "percentages",
        [
            ("100",),
            ("50", "50"),
            ("33.33", "33.33", "33.34"),
            ("33.33", "33.33", "33.33"),
            ("25", "25", "25", "25"),
            ("10", "20", "30", "40"),
            ("40", "30", "20", "10.005"),
        ],
    )
    @pytest.mark.parametrize("total", ["0.10", "1.00", "99.99", "1000.01", "123456.78"])
    def test_amounts_always_sum_to_total(self, percentages, total):
        term = monthly(*percentages)
        validate(term)

        installments = compute_schedule(
            term, date(2026, 6, 15), Decimal(total), booked_on=date(2026, 1, 10)
        )

        assert len(installments) == len(percentages)
        assert sum(item.amount for item in installments) == Decimal(total)
        assert all(item.amount > 0 for item in installments)
        assert all(item.amount == item.amount.quantize(Decimal("0.01")) for item in installments)

    @pytest.mark.parametrize("total", ["0", "-10"])
    def test_non_positive_total_is_infeasible(self, total):
        with pytest.raises(ScheduleInfeasible):
            compute_schedule(
                monthly("100"), date(2026, 6, 15), Decimal(total), booked_on=date(2026, 1, 10)
            )


# =============================================================================
# INFEASIBLE SCHEDULES
# =============================================================================


class TestInfeasible:
    def test_tour_before_first_due_date(self):
        with pytest.raises(ScheduleInfeasible):
            compute_schedule(
                monthly("100"), date(2026, 1, 20), Decimal("1000"), booked_on=date(2026, 1, 10)
            )

    def test_too_many_months_for_lead_time(self):
        with pytest.raises(ScheduleInfeasible):
            compute_schedule(
                monthly("25", "25", "25", "25"),
                date(2026, 4, 1),
                Decimal("1000"),
                booked_on=date(2026, 1, 10),
            )

    def test_last_due_date_exactly_three_days_before_tour(self):
        installments = compute_schedule(
            monthly("50", "50"), date(2026, 3, 5), Decimal("1000"), booked_on=date(2026, 1, 10)
        )
        assert installments[-1].due_date == date(2026, 3, 2)

    def test_last_due_date_inside_three_day_window(self):
        with pytest.raises(ScheduleInfeasible):
            compute_schedule(
                monthly("50", "50"), date(2026, 3, 4), Decimal("1000"), booked_on=date(2026, 1, 10)
            )
