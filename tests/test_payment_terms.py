"""
Payment term registry tests.

Verifies:
- Configuration invariants are enforced on write
- Sort order assignment and ordering
- Updates are re-validated against the merged configuration
- Default seeding and availability by date
"""

from datetime import date
from decimal import Decimal

import pytest

from tour_payments.api.payment_terms.schemas import (
    PaymentTermConfig,
    PaymentTermCreateRequest,
    PaymentTermUpdateRequest,
)
from tour_payments.api.payment_terms.service import (
    create_payment_term,
    get_payment_term,
    initialize_default_terms,
    list_available_terms,
    list_payment_terms,
    update_payment_term,
    validate,
)
from tour_payments.core.common.constants import PaymentType
from tour_payments.core.exceptions import InvalidConfig


def monthly_config(months, percentages) -> PaymentTermConfig:
    return PaymentTermConfig(
        name="Custom",
        payment_type=PaymentType.MONTHLY_SCHEDULED,
        months_required=months,
        monthly_percentages=[Decimal(str(pct)) for pct in percentages],
    )


# =============================================================================
# VALIDATION
# =============================================================================


class TestValidate:
    def test_valid_monthly(self):
        validate(monthly_config(3, ["33.33", "33.33", "33.34"]))

    def test_sum_within_tolerance(self):
        validate(monthly_config(3, ["33.33", "33.33", "33.33"]))

    def test_sum_outside_tolerance(self):
        with pytest.raises(InvalidConfig):
            validate(monthly_config(2, ["50", "49"]))

    def test_length_must_match_months(self):
        with pytest.raises(InvalidConfig):
            validate(monthly_config(3, ["50", "50"]))

    @pytest.mark.parametrize("months", [0, -1, 13])
    def test_months_out_of_range(self, months):
        with pytest.raises(InvalidConfig):
            validate(monthly_config(months, ["100"]))

    def test_percentages_must_be_positive(self):
        with pytest.raises(InvalidConfig):
            validate(monthly_config(2, ["100", "0"]))

    def test_full_payment_requires_days(self):
        with pytest.raises(InvalidConfig):
            validate(PaymentTermConfig(name="Full", payment_type=PaymentType.FULL_PAYMENT))

    def test_full_payment_negative_days(self):
        with pytest.raises(InvalidConfig):
            validate(
                PaymentTermConfig(
                    name="Full", payment_type=PaymentType.FULL_PAYMENT, days_required=-1
                )
            )

    def test_full_payment_rejects_monthly_fields(self):
        with pytest.raises(InvalidConfig):
            validate(
                PaymentTermConfig(
                    name="Full",
                    payment_type=PaymentType.FULL_PAYMENT,
                    days_required=30,
                    months_required=1,
                    monthly_percentages=[Decimal("100")],
                )
            )


# =============================================================================
# REGISTRY
# =============================================================================


def create_request(name: str, **overrides) -> PaymentTermCreateRequest:
    values = {
        "name": name,
        "paymentType": PaymentType.MONTHLY_SCHEDULED,
        "monthsRequired": 2,
        "monthlyPercentages": [Decimal("50"), Decimal("50")],
    }
    values.update(overrides)
    return PaymentTermCreateRequest(**values)


class TestRegistry:
    async def test_sort_order_is_assigned_sequentially(self, session):
        first = await create_payment_term(session, create_request("P2"))
        second = await create_payment_term(
            session,
            create_request(
                "Full", paymentType=PaymentType.FULL_PAYMENT, daysRequired=30,
                monthsRequired=None, monthlyPercentages=None,
            ),
        )
        assert (first.sort_order, second.sort_order) == (1, 2)
        assert [term.name for term in await list_payment_terms(session)] == ["P2", "Full"]

    async def test_invalid_term_is_not_stored(self, session):
        with pytest.raises(InvalidConfig):
            await create_payment_term(
                session, create_request("Broken", monthlyPercentages=[Decimal("60"), Decimal("60")])
            )
        assert await list_payment_terms(session) == []

    async def test_update_is_revalidated(self, session):
        term = await create_payment_term(session, create_request("P2"))

        with pytest.raises(InvalidConfig):
            await update_payment_term(
                session, term.id, PaymentTermUpdateRequest(monthsRequired=3)
            )

        stored = await get_payment_term(session, term.id)
        assert stored.months_required == 2

    async def test_changing_type_clears_other_fields(self, session):
        term = await create_payment_term(session, create_request("P2"))

        updated = await update_payment_term(
            session,
            term.id,
            PaymentTermUpdateRequest(paymentType=PaymentType.FULL_PAYMENT, daysRequired=14),
        )

        assert updated.payment_type == PaymentType.FULL_PAYMENT.value
        assert updated.days_required == 14
        assert updated.months_required is None
        assert updated.monthly_percentages is None

    async def test_deactivate_hides_from_active_list(self, session):
        term = await create_payment_term(session, create_request("P2"))
        await update_payment_term(session, term.id, PaymentTermUpdateRequest(isActive=False))

        assert await list_payment_terms(session, active_only=True) == []
        assert len(await list_payment_terms(session)) == 1

    async def test_initialize_defaults_once(self, session):
        result = await initialize_default_terms(session)
        assert (result.created, result.total) == (5, 5)

        terms = await list_payment_terms(session)
        assert [term.name for term in terms] == [
            "Full Payment",
            "P1 - Single Instalment",
            "P2 - Two Instalments",
            "P3 - Three Instalments",
            "P4 - Four Instalments",
        ]
        assert terms[3].monthly_percentages == [33.33, 33.33, 33.34]

        again = await initialize_default_terms(session)
        assert (again.created, again.total) == (0, 5)


class TestAvailableTerms:
    async def test_only_feasible_terms_are_offered(self, session):
        await initialize_default_terms(session)

        # two eligible 2nd-of-month dates: Feb 2 and Mar 2
        result = await list_available_terms(session, date(2026, 3, 20), date(2026, 1, 10))

        assert result.eligible_installment_dates == [date(2026, 2, 2), date(2026, 3, 2)]
        assert [item.term.name for item in result.available] == [
            "Full Payment",
            "P1 - Single Instalment",
            "P2 - Two Instalments",
        ]

    async def test_full_payment_offered_when_due_date_not_passed(self, session):
        await initialize_default_terms(session)

        result = await list_available_terms(session, date(2026, 6, 15), date(2026, 1, 10))

        names = [item.term.name for item in result.available]
        assert names[0] == "Full Payment"
        assert result.available[0].first_due_date == date(2026, 5, 16)
        assert "P4 - Four Instalments" in names
