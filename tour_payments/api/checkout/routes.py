from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tour_payments.api.checkout.helpers import to_checkout_payment_response, to_invitation_response
from tour_payments.api.checkout.schemas import (
    CheckoutPaymentRequest,
    CheckoutPaymentResponse,
    InviteGuestsRequest,
    InviteGuestsResponse,
)
from tour_payments.api.checkout.service import invite_guests, list_invitations, record_checkout_payment
from tour_payments.db.main import get_session

checkout_router = APIRouter()


@checkout_router.post(
    "/payments",
    response_model=CheckoutPaymentResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def post_checkout_payment(
    payload: CheckoutPaymentRequest,
    session: AsyncSession = Depends(get_session),
):
    payment = await record_checkout_payment(session, payload)
    invitations = await list_invitations(session, payment.id)
    return to_checkout_payment_response(payment, invitations)


@checkout_router.post(
    "/payments/{payment_id}/invitations",
    response_model=InviteGuestsResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def post_guest_invitations(
    payment_id: uuid.UUID,
    payload: InviteGuestsRequest,
    session: AsyncSession = Depends(get_session),
):
    invitations = await invite_guests(session, payment_id, payload.emails)
    return InviteGuestsResponse(
        invitations=[to_invitation_response(item) for item in invitations]
    )
