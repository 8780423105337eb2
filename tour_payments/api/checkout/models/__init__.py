from tour_payments.api.checkout.models.booking_payment import BookingPayment
from tour_payments.api.checkout.models.guest_invitation import GuestInvitation


__all__ = ["BookingPayment", "GuestInvitation"]
