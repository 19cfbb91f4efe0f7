"""
Failure taxonomy shared by the ledger, token sale and asset access apps.

Every error aborts the operation that raised it; the surrounding
``transaction.atomic()`` block discards all writes made so far.
"""


class LedgerError(Exception):
    """Base class for every classifiable ledger failure."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class AuthorizationError(LedgerError):
    """Caller is not allowed to invoke a privileged operation."""


class PhaseError(LedgerError):
    """Operation invoked outside the time window where it is allowed."""


class ValidationError(LedgerError):
    """Arguments rejected by a business rule (limits, caps, allow-list)."""


class InsufficientFundsError(LedgerError):
    """External asset transfer failed for balance or allowance reasons."""


class TimelockError(LedgerError):
    """Timelocked administrative change launched or executed out of turn."""


class ReentrancyError(LedgerError):
    """A guarded operation was re-entered from inside an external call."""
