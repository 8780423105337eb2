# tour_payments/core/exceptions.py
from tour_payments.core.errors import ErrorCode
from tour_payments.core.messages import ErrorMessage

class GlobalException(Exception):
    status_code: int
    error_code: str
    message: str

    def __init__(self, message: str | None = None):
        if message:
            self.message = message
        super().__init__(self.message)


class ResourceNotFound(GlobalException):
    status_code = 404
    error_code = "not_found"
    message = "Requested resource not found"


class ValidationException(GlobalException):
    status_code = 400
    error_code = "validation_error"
    message = "Validation failed"


class InvalidConfig(GlobalException):
    status_code = 400
    error_code = "invalid_config"
    message = "Payment term configuration is invalid"


class ScheduleInfeasible(GlobalException):
    status_code = 400
    error_code = "schedule_infeasible"
    message = ErrorMessage.SCHEDULE_INFEASIBLE


class InvitationInvalid(GlobalException):
    status_code = 400
    error_code = "invitation_invalid"
    message = "Invalid invitation"


class DuplicateBooking(GlobalException):
    status_code = 400
    error_code = "duplicate_booking"
    message = ErrorMessage.DUPLICATE_BOOKING


class InstallmentAlreadyPaid(GlobalException):
    status_code = 409
    error_code = "installment_already_paid"
    message = ErrorMessage.INSTALLMENT_ALREADY_PAID

class InvalidStateTransition(GlobalException):
    status_code = 409
    error_code = "invalid_state_transition"
    message = "State transition is not allowed"

class StorageUnavailable(GlobalException):
    status_code = 503
    error_code = ErrorCode.STORAGE_UNAVAILABLE
    message = ErrorMessage.STORAGE_UNAVAILABLE

class ExternalServiceError(GlobalException):
    status_code = 502
    error_code = "external_service_error"
    message = ErrorMessage.EXTERNAL_SERVICE_FAILURE
