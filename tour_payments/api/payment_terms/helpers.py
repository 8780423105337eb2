from __future__ import annotations

from decimal import Decimal

from tour_payments.api.payment_terms.models import PaymentTerm
from tour_payments.api.payment_terms.schemas import PaymentTermResponse


def to_payment_term_response(term: PaymentTerm) -> PaymentTermResponse:
    percentages = term.monthly_percentages
    return PaymentTermResponse(
        id=term.id,
        name=term.name,
        description=term.description,
        paymentType=term.payment_type,
        daysRequired=term.days_required,
        monthsRequired=term.months_required,
        monthlyPercentages=(
            [Decimal(str(pct)) for pct in percentages] if percentages is not None else None
        ),
        isActive=term.is_active,
        sortOrder=term.sort_order,
        color=term.color,
    )
