class ErrorMessage:
    # ---------- Generic ----------
    SERVER_ERROR = "Internal server error"
    DATABASE_FAILURE = "Database operation failed"
    STORAGE_UNAVAILABLE = "Storage is temporarily unavailable, please retry"
    EXTERNAL_SERVICE_FAILURE = "External service request failed"

    # ---------- Payment terms ----------
    PAYMENT_TERM_NOT_FOUND = "Payment term not found"
    PAYMENT_TERM_INACTIVE = "Payment term is no longer available for new bookings"
    PERCENTAGES_DO_NOT_SUM = "Monthly percentages must add up to 100"
    PERCENTAGES_LENGTH_MISMATCH = "Number of monthly percentages must equal monthsRequired"
    MONTHS_OUT_OF_RANGE = "monthsRequired must be between 1 and 12"
    DAYS_REQUIRED_INVALID = "daysRequired must be zero or greater"

    # ---------- Bookings ----------
    BOOKING_NOT_FOUND = "Booking not found"
    PAYMENT_RECORD_NOT_FOUND = "Payment record not found"
    PARENT_PAYMENT_RECORD_NOT_FOUND = "Parent payment record not found"
    PARENT_BOOKING_NOT_FOUND = "Parent booking not found"
    TOUR_PACKAGE_NOT_FOUND = "Tour package not found"
    SCHEDULE_INFEASIBLE = "Tour date is incompatible with the selected payment term"
    TOO_MANY_INSTALLMENTS = "Payment plan has more installments than a booking can hold"
    INSTALLMENT_NOT_POSITIVE = "Tour cost is too small to split across this payment plan"
    DUPLICATE_BOOKING = "You have already made a booking for this group"
    PAYMENT_RECORD_ALREADY_USED = "Payment record is already linked to another booking"
    GUEST_PAYMENT_OTHER_TOUR = "Guest payment was made for a different tour package"
    GUEST_PAYMENT_OTHER_BOOKING_TYPE = "Guest payment booking type does not match the group booking"
    GUEST_PAYMENT_OTHER_PAYER = "Guest payment was made by a different email address"

    # ---------- Invitations ----------
    INVITATION_NOT_FOUND = "No invitation found for this email address."
    INVITATION_ALREADY_ACCEPTED = "You have already completed your reservation for this booking."
    INVITATION_EXPIRED = "This invitation has expired. Please contact the main booker for a new invitation."
    INVITATIONS_NOT_ALLOWED = "Guest invitations are only available for Duo and Group bookings"

    # ---------- Payment evidence ----------
    EVIDENCE_NOT_FOUND = "Payment evidence not found"
    INSTALLMENT_NOT_IN_PLAN = "Installment is not part of this booking's payment plan"
    INSTALLMENT_ALREADY_PAID = "Installment has already been paid"
    SCREENSHOT_URL_UNAVAILABLE = "Screenshot reference is not a storage URL"
