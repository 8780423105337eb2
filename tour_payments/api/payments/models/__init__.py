from tour_payments.api.payments.models.payment_evidence import PaymentEvidence


__all__ = ["PaymentEvidence"]
