from __future__ import annotations

from tour_payments.api.payments.models import PaymentEvidence
from tour_payments.api.payments.schemas import EvidenceResponse


def to_evidence_response(evidence: PaymentEvidence) -> EvidenceResponse:
    return EvidenceResponse(
        id=evidence.id,
        bookingDocumentId=evidence.booking_document_id,
        installmentTerm=evidence.installment_term,
        amount=evidence.amount,
        currency=evidence.currency,
        screenshotRef=evidence.screenshot_ref,
        status=evidence.status,
        rejectionReason=evidence.rejection_reason,
        createdAt=evidence.created_at,
        decidedAt=evidence.decided_at,
    )
