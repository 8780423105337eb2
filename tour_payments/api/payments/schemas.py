from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from tour_payments.core.common.constants import INSTALLMENT_SLOTS, EvidenceStatus


class EvidenceSubmitRequest(BaseModel):
    booking_document_id: Annotated[UUID, Field(alias="bookingDocumentId")]
    installment_term: Annotated[str, Field(alias="installmentTerm")]
    amount: Annotated[Decimal, Field(gt=0)]
    currency: str | None = None
    screenshot_ref: Annotated[str, Field(alias="screenshotRef", min_length=1)]

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def validate_installment_term(self) -> "EvidenceSubmitRequest":
        if self.installment_term not in INSTALLMENT_SLOTS:
            raise ValueError(
                f"installmentTerm must be one of: {', '.join(INSTALLMENT_SLOTS)}"
            )
        return self


class EvidenceRejectRequest(BaseModel):
    reason: Annotated[str, Field(min_length=1, max_length=1000)]


class EvidenceResponse(BaseModel):
    id: UUID
    booking_document_id: Annotated[UUID, Field(alias="bookingDocumentId")]
    installment_term: Annotated[str, Field(alias="installmentTerm")]
    amount: Decimal
    currency: str
    screenshot_ref: Annotated[str, Field(alias="screenshotRef")]
    status: EvidenceStatus
    rejection_reason: Annotated[str | None, Field(alias="rejectionReason")] = None
    created_at: Annotated[datetime, Field(alias="createdAt")]
    decided_at: Annotated[datetime | None, Field(alias="decidedAt")] = None

    model_config = {"populate_by_name": True}


class EvidenceListResponse(BaseModel):
    evidence: list[EvidenceResponse]
    total: int


class ScreenshotUploadRequest(BaseModel):
    booking_document_id: Annotated[UUID, Field(alias="bookingDocumentId")]
    file_name: Annotated[str, Field(alias="fileName", min_length=1, max_length=255)]
    content_type: Annotated[str, Field(alias="contentType")] = "image/png"

    model_config = {"populate_by_name": True}


class ScreenshotUploadResponse(BaseModel):
    upload_url: Annotated[str, Field(alias="uploadUrl")]
    screenshot_ref: Annotated[str, Field(alias="screenshotRef")]
    expires_in: Annotated[int, Field(alias="expiresIn")]

    model_config = {"populate_by_name": True}


class ScreenshotUrlResponse(BaseModel):
    url: str
    expires_in: Annotated[int, Field(alias="expiresIn")]

    model_config = {"populate_by_name": True}
