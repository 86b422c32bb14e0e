"""
Billing error taxonomy.

Every rejected operation surfaces as one of these types. Each carries a
machine-readable ``error_code`` and the HTTP status the API layer answers with.
"""
from __future__ import annotations

from typing import Any


class BillingError(Exception):
    """
    Base billing error.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for API responses
        status_code: HTTP status code for this error type
        context: Identifiers involved in the failed operation
    """

    error_code = "BILLING_ERROR"
    status_code = 400

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class InvalidPeriodError(BillingError):
    """Plan period must be a positive number of ticks."""

    error_code = "INVALID_PERIOD"
    status_code = 400

    def __init__(self, period: int) -> None:
        super().__init__(
            f"Billing period must be greater than zero, got {period}",
            context={"period": period},
        )


class InvalidSubscriptionError(BillingError):
    """Unknown plan, or no enrollment for the account."""

    error_code = "INVALID_SUBSCRIPTION"
    status_code = 404


class UnauthorizedError(BillingError):
    """Caller does not own the plan."""

    error_code = "UNAUTHORIZED"
    status_code = 403


class AlreadySubscribedError(BillingError):
    error_code = "ALREADY_SUBSCRIBED"
    status_code = 409


class SubscriptionInactiveError(BillingError):
    """Plan or enrollment has been deactivated."""

    error_code = "SUBSCRIPTION_INACTIVE"
    status_code = 409


class PaymentFailedError(BillingError):
    """Payment is not due yet, or the fund transfer was refused."""

    error_code = "PAYMENT_FAILED"
    status_code = 402


class InsufficientFundsError(Exception):
    """Raised by a ledger when the sender cannot cover the amount."""

    def __init__(self, account: str, amount: int, balance: int) -> None:
        self.account = account
        self.amount = amount
        self.balance = balance
        super().__init__(
            f"Account {account} holds {balance}, cannot transfer {amount}"
        )
