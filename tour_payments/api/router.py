from fastapi import APIRouter
from tour_payments.api.bookings.routes import bookings_router, guest_booking_router
from tour_payments.api.checkout.routes import checkout_router
from tour_payments.api.health.routes import health_router
from tour_payments.api.payment_terms.routes import payment_terms_router
from tour_payments.api.payments.routes import payment_evidence_router
api_router = APIRouter()

api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(checkout_router, prefix="/checkout", tags=["checkout"])
api_router.include_router(bookings_router, prefix="/bookings", tags=["bookings"])
api_router.include_router(guest_booking_router, prefix="/guest-booking", tags=["bookings"])
api_router.include_router(payment_terms_router, prefix="/payment-terms", tags=["payment-terms"])
api_router.include_router(
    payment_evidence_router, prefix="/payment-evidence", tags=["payment-evidence"]
)
