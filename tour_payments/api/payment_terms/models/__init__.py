from tour_payments.api.payment_terms.models.payment_term import PaymentTerm


__all__ = ["PaymentTerm"]
