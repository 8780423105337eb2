from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tour_payments.api.bookings.service import get_booking
from tour_payments.api.payments.helpers import to_evidence_response
from tour_payments.api.payments.schemas import (
    EvidenceListResponse,
    EvidenceRejectRequest,
    EvidenceResponse,
    EvidenceSubmitRequest,
    ScreenshotUploadRequest,
    ScreenshotUploadResponse,
    ScreenshotUrlResponse,
)
from tour_payments.api.payments.services.reconciliation_service import (
    approve_evidence,
    get_evidence,
    list_evidence,
    reject_evidence,
    submit_evidence,
)
from tour_payments.core.common.constants import EvidenceStatus
from tour_payments.core.config import Config
from tour_payments.db.main import get_session
from tour_payments.evidence.storage import create_screenshot_upload, screenshot_view_url

payment_evidence_router = APIRouter()


@payment_evidence_router.post(
    "",
    response_model=EvidenceResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def post_payment_evidence(
    payload: EvidenceSubmitRequest,
    session: AsyncSession = Depends(get_session),
):
    evidence = await submit_evidence(session, payload)
    return to_evidence_response(evidence)


@payment_evidence_router.get(
    "",
    response_model=EvidenceListResponse,
    response_model_by_alias=True,
)
async def get_payment_evidence(
    evidence_status: EvidenceStatus | None = Query(None, alias="status"),
    session: AsyncSession = Depends(get_session),
):
    items = await list_evidence(session, evidence_status)
    return EvidenceListResponse(
        evidence=[to_evidence_response(item) for item in items],
        total=len(items),
    )


@payment_evidence_router.post(
    "/upload-url",
    response_model=ScreenshotUploadResponse,
    response_model_by_alias=True,
)
async def post_screenshot_upload_url(
    payload: ScreenshotUploadRequest,
    session: AsyncSession = Depends(get_session),
):
    booking = await get_booking(session, payload.booking_document_id)
    upload_url, screenshot_ref = create_screenshot_upload(
        booking.id, payload.file_name, payload.content_type
    )
    return ScreenshotUploadResponse(
        uploadUrl=upload_url,
        screenshotRef=screenshot_ref,
        expiresIn=Config.EVIDENCE_URL_EXPIRES_IN,
    )


@payment_evidence_router.get(
    "/{evidence_id}/screenshot-url",
    response_model=ScreenshotUrlResponse,
    response_model_by_alias=True,
)
async def get_screenshot_url(
    evidence_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    evidence = await get_evidence(session, evidence_id)
    return ScreenshotUrlResponse(
        url=screenshot_view_url(evidence.screenshot_ref, Config.EVIDENCE_URL_EXPIRES_IN),
        expiresIn=Config.EVIDENCE_URL_EXPIRES_IN,
    )


@payment_evidence_router.post(
    "/{evidence_id}/approve",
    response_model=EvidenceResponse,
    response_model_by_alias=True,
)
async def post_approve_evidence(
    evidence_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    return to_evidence_response(await approve_evidence(session, evidence_id))


@payment_evidence_router.post(
    "/{evidence_id}/reject",
    response_model=EvidenceResponse,
    response_model_by_alias=True,
)
async def post_reject_evidence(
    evidence_id: uuid.UUID,
    payload: EvidenceRejectRequest,
    session: AsyncSession = Depends(get_session),
):
    return to_evidence_response(await reject_evidence(session, evidence_id, payload.reason))
