from tour_payments.api.bookings.models.booking import Booking


__all__ = ["Booking"]
