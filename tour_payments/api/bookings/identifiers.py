from __future__ import annotations

from datetime import date
import uuid

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tour_payments.api.bookings.models import Booking
from tour_payments.core.common.constants import BookingType


MEMBER_CODE_PREFIXES = {
    BookingType.DUO: "DB",
    BookingType.GROUP: "GB",
}


def next_booking_code(tour_date: date, existing_count_for_package: int) -> str:
    """``YYMM-XXXX`` where XXXX is the next sequence number for the package."""
    return f"{tour_date:%y%m}-{existing_count_for_package + 1:04d}"


def _identity_hash(identity: str) -> int:
    # Weighted sum over UTF-16 code units, so astral characters count twice.
    raw = identity.encode("utf-16-le")
    units = [int.from_bytes(raw[i:i + 2], "little") for i in range(0, len(raw), 2)]
    return sum(unit * (position + 1) for position, unit in enumerate(units))


def _initials(first_name: str, last_name: str) -> str:
    return f"{first_name.strip()[:1]}{last_name.strip()[:1]}".upper()


def next_group_member_code(
    booking_type: BookingType | str,
    tour_name: str,
    first_name: str,
    last_name: str,
    email: str,
) -> str | None:
    booking_type = BookingType(booking_type)
    prefix = MEMBER_CODE_PREFIXES.get(booking_type)
    if prefix is None:
        return None

    identity = f"{booking_type.value}|{tour_name}|{first_name}|{last_name}|{email}"
    hashed = _identity_hash(identity)
    tag = hashed % 10000
    member = hashed % 999 + 1
    return f"{prefix}-{_initials(first_name, last_name)}-{tag:04d}-{member:03d}"


def new_group_id() -> str:
    return f"GRP-{uuid.uuid4().hex[:8].upper()}"


async def count_bookings_for_package(session: AsyncSession, tour_package_id: str) -> int:
    stmt = select(func.count()).select_from(Booking).where(
        Booking.tour_package_id == tour_package_id
    )
    return int((await session.execute(stmt)).scalar_one())
