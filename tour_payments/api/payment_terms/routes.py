from __future__ import annotations

from datetime import date
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tour_payments.api.payment_terms.helpers import to_payment_term_response
from tour_payments.api.payment_terms.schemas import (
    AvailablePaymentTermsResponse,
    InitializeDefaultsResponse,
    PaymentTermCreateRequest,
    PaymentTermListResponse,
    PaymentTermResponse,
    PaymentTermUpdateRequest,
)
from tour_payments.api.payment_terms.service import (
    create_payment_term,
    get_payment_term,
    initialize_default_terms,
    list_available_terms,
    list_payment_terms,
    update_payment_term,
)
from tour_payments.db.main import get_session
from tour_payments.utils.clock import utc_today

payment_terms_router = APIRouter()


@payment_terms_router.get(
    "",
    response_model=PaymentTermListResponse,
    response_model_by_alias=True,
)
async def get_payment_terms(
    active_only: bool = Query(False, alias="activeOnly"),
    session: AsyncSession = Depends(get_session),
):
    terms = await list_payment_terms(session, active_only=active_only)
    return PaymentTermListResponse(
        paymentTerms=[to_payment_term_response(term) for term in terms],
        total=len(terms),
    )


@payment_terms_router.post(
    "",
    response_model=PaymentTermResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def post_payment_term(
    payload: PaymentTermCreateRequest,
    session: AsyncSession = Depends(get_session),
):
    term = await create_payment_term(session, payload)
    return to_payment_term_response(term)


@payment_terms_router.post(
    "/initialize-defaults",
    response_model=InitializeDefaultsResponse,
)
async def post_initialize_defaults(session: AsyncSession = Depends(get_session)):
    return await initialize_default_terms(session)


@payment_terms_router.get(
    "/available",
    response_model=AvailablePaymentTermsResponse,
    response_model_by_alias=True,
)
async def get_available_payment_terms(
    tour_date: date = Query(..., alias="tourDate"),
    booked_on: date | None = Query(None, alias="bookedOn"),
    session: AsyncSession = Depends(get_session),
):
    return await list_available_terms(session, tour_date, booked_on or utc_today())


@payment_terms_router.get(
    "/{term_id}",
    response_model=PaymentTermResponse,
    response_model_by_alias=True,
)
async def get_payment_term_by_id(
    term_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    return to_payment_term_response(await get_payment_term(session, term_id))


@payment_terms_router.patch(
    "/{term_id}",
    response_model=PaymentTermResponse,
    response_model_by_alias=True,
)
async def patch_payment_term(
    term_id: uuid.UUID,
    payload: PaymentTermUpdateRequest,
    session: AsyncSession = Depends(get_session),
):
    term = await update_payment_term(session, term_id, payload)
    return to_payment_term_response(term)
