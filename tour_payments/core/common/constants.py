from enum import Enum

from tour_payments.core.exceptions import InvalidStateTransition


class BookingType(str, Enum):
    SINGLE = "Single Booking"
    DUO = "Duo Booking"
    GROUP = "Group Booking"

    @property
    def is_shared(self) -> bool:
        return self in (BookingType.DUO, BookingType.GROUP)


class PaymentType(str, Enum):
    FULL_PAYMENT = "full_payment"
    MONTHLY_SCHEDULED = "monthly_scheduled"


class PaymentMethod(str, Enum):
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"


class InvitationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"


class EvidenceStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class BookingPaymentState(str, Enum):
    AWAITING_PAYMENT = "awaiting_payment"
    PARTIALLY_PAID = "partially_paid"
    CONFIRMED = "confirmed"


INVITATION_TRANSITIONS: dict[InvitationStatus, frozenset[InvitationStatus]] = {
    InvitationStatus.PENDING: frozenset({InvitationStatus.ACCEPTED}),
    InvitationStatus.ACCEPTED: frozenset(),
}

EVIDENCE_TRANSITIONS: dict[EvidenceStatus, frozenset[EvidenceStatus]] = {
    EvidenceStatus.PENDING: frozenset({EvidenceStatus.APPROVED, EvidenceStatus.REJECTED}),
    EvidenceStatus.APPROVED: frozenset(),
    EvidenceStatus.REJECTED: frozenset(),
}

# Installments only ever get paid, so the ledger state only moves forward.
BOOKING_PAYMENT_TRANSITIONS: dict[BookingPaymentState, frozenset[BookingPaymentState]] = {
    BookingPaymentState.AWAITING_PAYMENT: frozenset(
        {BookingPaymentState.PARTIALLY_PAID, BookingPaymentState.CONFIRMED}
    ),
    BookingPaymentState.PARTIALLY_PAID: frozenset(
        {BookingPaymentState.PARTIALLY_PAID, BookingPaymentState.CONFIRMED}
    ),
    BookingPaymentState.CONFIRMED: frozenset(),
}


def ensure_transition(table: dict, current: Enum, target: Enum) -> None:
    if target not in table.get(current, frozenset()):
        raise InvalidStateTransition(
            f"Cannot move from '{current.value}' to '{target.value}'"
        )


# Installment slot keys, in schedule order. The full payment slot is exclusive
# of the monthly ones.
MONTHLY_SLOTS = ("p1", "p2", "p3", "p4")
FULL_PAYMENT_SLOT = "full_payment"
INSTALLMENT_SLOTS = MONTHLY_SLOTS + (FULL_PAYMENT_SLOT,)

MAX_MONTHS_REQUIRED = 12
PERCENTAGE_TOLERANCE = "0.01"
