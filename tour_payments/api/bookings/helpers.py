from __future__ import annotations

from tour_payments.api.bookings.ledger import installment_evidence_id, read_installments
from tour_payments.api.bookings.models import Booking
from tour_payments.api.bookings.schemas import BookingResponse, GuestBookingResponse, InstallmentItem


def to_booking_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        id=booking.id,
        bookingId=booking.booking_id,
        groupId=booking.group_id,
        memberCode=booking.member_code,
        bookingType=booking.booking_type,
        isMainBooker=booking.is_main_booker,
        email=booking.email,
        firstName=booking.first_name,
        lastName=booking.last_name,
        tourPackageId=booking.tour_package_id,
        tourPackageName=booking.tour_package_name,
        tourDate=booking.tour_date,
        returnDate=booking.return_date,
        originalTourCost=booking.original_tour_cost,
        discountedTourCost=booking.discounted_tour_cost,
        reservationFee=booking.reservation_fee,
        currency=booking.currency,
        paymentPlan=booking.payment_plan,
        paymentMethod=booking.payment_method,
        paymentId=booking.payment_id,
        parentBookingId=booking.parent_booking_id,
        installments=[
            InstallmentItem(
                term=item.label,
                amount=item.amount,
                dueDate=item.due_date,
                datePaid=item.date_paid,
                evidenceId=installment_evidence_id(booking, item.label),
            )
            for item in read_installments(booking)
        ],
        paymentState=booking.payment_state,
        bookingStatus=booking.booking_status,
        paymentProgress=booking.payment_progress,
        paid=booking.paid,
        remainingBalance=booking.remaining_balance,
    )


def to_guest_booking_response(booking: Booking) -> GuestBookingResponse:
    return GuestBookingResponse(bookingDocumentId=booking.id, bookingId=booking.booking_id)
