"""
Domain errors for the daily ledger.

Every client-caused rejection is a LedgerError (a ValueError, like the other
validation errors of the project). The API layer maps them to HTTP status codes
and renders `message` to the user verbatim.
"""


class LedgerError(ValueError):
    """Base class: a rejected operation with a human-readable reason"""
    code = "LEDGER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LedgerValidationError(LedgerError):
    """Malformed input (amount, category, game...)"""
    code = "VALIDATION"


class RecordNotFoundError(LedgerError):
    """Expense / transaction id missing, inactive, or owned by another account"""
    code = "NOT_FOUND"


class DayFinalizedError(LedgerError):
    """Mutation touches a day that has already been closed"""
    code = "DAY_FINALIZED"


class FutureDateError(LedgerError):
    """Create / update / finalize targets a day after today"""
    code = "FUTURE_DATE"


class AlreadyFinalizedError(LedgerError):
    """Finalize requested for a day that is already closed"""
    code = "ALREADY_FINALIZED"


class DuplicateRecordError(LedgerError):
    """Store uniqueness violation (e.g. two finalize calls racing)"""
    code = "CONFLICT"
