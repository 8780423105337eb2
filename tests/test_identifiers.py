"""
Identifier generation tests.

Verifies:
- Booking codes use the tour month and the per-package sequence
- Group member codes are deterministic and only issued for shared bookings
- Per-package counts come from the database
"""

import re
from datetime import date

import pytest

from tour_payments.api.bookings.identifiers import (
    _identity_hash,
    count_bookings_for_package,
    new_group_id,
    next_booking_code,
    next_group_member_code,
)
from tour_payments.core.common.constants import BookingType

from conftest import TOUR_PACKAGE_ID


MEMBER_CODE = re.compile(r"^(DB|GB)-[A-Z]{2}-\d{4}-\d{3}$")


class TestBookingCode:
    def test_sequence_follows_existing_count(self):
        assert next_booking_code(date(2025, 12, 19), 3) == "2512-0004"

    def test_first_booking_for_package(self):
        assert next_booking_code(date(2026, 6, 15), 0) == "2606-0001"


class TestIdentityHash:
    def test_weights_code_units_by_position(self):
        assert _identity_hash("ab") == 97 * 1 + 98 * 2

    def test_astral_characters_count_as_two_units(self):
        # U+1F600 is the surrogate pair D83D DE00
        assert _identity_hash("\U0001F600") == 0xD83D * 1 + 0xDE00 * 2


class TestGroupMemberCode:
    def test_single_booking_has_no_member_code(self):
        assert next_group_member_code(
            BookingType.SINGLE, "Iceland", "Maria", "Lopez", "maria@example.com"
        ) is None

    @pytest.mark.parametrize(
        "booking_type,prefix",
        [(BookingType.DUO, "DB"), (BookingType.GROUP, "GB")],
    )
    def test_prefix_and_format(self, booking_type, prefix):
        code = next_group_member_code(
            booking_type, "Iceland", "maria", "lopez", "maria@example.com"
        )
        assert MEMBER_CODE.match(code)
        assert code.startswith(f"{prefix}-ML-")

    def test_tag_and_member_derive_from_identity_hash(self):
        hashed = _identity_hash("Duo Booking|Iceland|Maria|Lopez|maria@example.com")
        code = next_group_member_code(
            BookingType.DUO, "Iceland", "Maria", "Lopez", "maria@example.com"
        )
        assert code == f"DB-ML-{hashed % 10000:04d}-{hashed % 999 + 1:03d}"

    def test_deterministic(self):
        args = (BookingType.GROUP, "Iceland", "Maria", "Lopez", "maria@example.com")
        assert next_group_member_code(*args) == next_group_member_code(*args)

    def test_accepts_stored_booking_type_string(self):
        assert next_group_member_code(
            "Group Booking", "Iceland", "Maria", "Lopez", "maria@example.com"
        ) == next_group_member_code(
            BookingType.GROUP, "Iceland", "Maria", "Lopez", "maria@example.com"
        )


def test_group_ids_are_unique():
    assert new_group_id() != new_group_id()
    assert new_group_id().startswith("GRP-")


async def test_count_bookings_for_package(session, main_booking):
    assert await count_bookings_for_package(session, TOUR_PACKAGE_ID) == 1
    assert await count_bookings_for_package(session, "pkg-other") == 0
