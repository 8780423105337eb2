from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tour_payments.api.bookings.guest_service import onboard_guest
from tour_payments.api.bookings.helpers import to_booking_response, to_guest_booking_response
from tour_payments.api.bookings.schemas import (
    BookingResponse,
    CreateBookingRequest,
    GuestBookingRequest,
    GuestBookingResponse,
)
from tour_payments.api.bookings.service import create_booking, get_booking
from tour_payments.db.main import get_session

bookings_router = APIRouter()
guest_booking_router = APIRouter()


@bookings_router.post(
    "",
    response_model=BookingResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def post_booking(
    payload: CreateBookingRequest,
    session: AsyncSession = Depends(get_session),
):
    booking = await create_booking(session, payload)
    return to_booking_response(booking)


@bookings_router.get(
    "/{document_id}",
    response_model=BookingResponse,
    response_model_by_alias=True,
)
async def get_booking_by_id(
    document_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    return to_booking_response(await get_booking(session, document_id))


@guest_booking_router.post(
    "",
    response_model=GuestBookingResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def post_guest_booking(
    payload: GuestBookingRequest,
    session: AsyncSession = Depends(get_session),
):
    booking = await onboard_guest(
        session,
        payment_id=payload.payment_doc_id,
        parent_payment_id=payload.parent_booking_id,
        guest_email=payload.guest_email,
        guest_profile=payload.guest_data,
    )
    return to_guest_booking_response(booking)
