"""Disbursement error kinds"""


class DisbursementError(Exception):
    """Base class for all schedule and ledger errors.

    Every error carries a stable ``kind`` string so the API layer can
    report it without inspecting the class hierarchy.
    """
    kind = "disbursement_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(DisbursementError):
    """Caller does not hold the role the operation requires"""
    kind = "unauthorized"


class InsufficientVested(DisbursementError):
    """Withdrawal amount exceeds the current entitlement"""
    kind = "insufficient_vested"


class InvalidAmount(DisbursementError):
    """Negative token amount"""
    kind = "invalid_amount"


class InvalidDestination(DisbursementError):
    """Withdrawal would send tokens back onto the schedule itself"""
    kind = "invalid_destination"


class InvalidConfiguration(DisbursementError):
    """Construction-time parameter violation"""
    kind = "invalid_configuration"


class TransferFailed(DisbursementError):
    """The token ledger refused a transfer"""
    kind = "transfer_failed"


class ScheduleNotFound(DisbursementError):
    kind = "schedule_not_found"
