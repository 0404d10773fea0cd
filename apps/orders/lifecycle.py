"""
Order status and payment-status state machines.

Pure rules only: no database access. `apps.orders.services` applies them
atomically against storage.
"""

import random
from collections.abc import Iterable
from datetime import datetime
from datetime import timezone as dt_timezone
from decimal import ROUND_HALF_UP, Decimal

from rest_framework import status as http_status

from apps.common.constants import OrderStatus, PaymentStatus

TWOPLACES = Decimal("0.01")

STATUS_TRANSITIONS: dict[str, frozenset[str]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.ACCEPTED, OrderStatus.REJECTED}),
    OrderStatus.ACCEPTED: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.REJECTED: frozenset(),
    OrderStatus.COMPLETED: frozenset(),
}

PAYMENT_TRANSITIONS: dict[str, frozenset[str]] = {
    PaymentStatus.UNPAID: frozenset({PaymentStatus.PENDING, PaymentStatus.PAID}),
    PaymentStatus.PENDING: frozenset({PaymentStatus.PAID, PaymentStatus.FAILED}),
    PaymentStatus.FAILED: frozenset({PaymentStatus.PENDING, PaymentStatus.PAID}),
    PaymentStatus.PAID: frozenset(),
}


class OrderError(Exception):
    status_code = http_status.HTTP_400_BAD_REQUEST


class OrderNotFound(OrderError):
    status_code = http_status.HTTP_404_NOT_FOUND


class TableNotFound(OrderError):
    status_code = http_status.HTTP_404_NOT_FOUND


class InvalidTransition(OrderError):
    status_code = http_status.HTTP_409_CONFLICT

    def __init__(self, current: str, requested: str, message: str | None = None):
        self.current = current
        self.requested = requested
        super().__init__(message or f"Cannot change order status from '{current}' to '{requested}'.")


class PaymentNotSettled(OrderError):
    status_code = http_status.HTTP_409_CONFLICT

    def __init__(self, payment_status: str):
        self.payment_status = payment_status
        super().__init__(f"Cannot complete an order while its payment status is '{payment_status}'.")


class InvalidPaymentTransition(OrderError):
    def __init__(self, current: str, requested: str, message: str | None = None):
        self.current = current
        self.requested = requested
        super().__init__(message or f"Cannot change payment status from '{current}' to '{requested}'.")


class InvoiceNumberExhausted(OrderError):
    status_code = http_status.HTTP_503_SERVICE_UNAVAILABLE


class DeliveryCodeMismatch(OrderError):
    pass


def validate_status_transition(current: str, requested: str, payment_status: str | None = None) -> str:
    """
    Return `requested` if the order may move there, raise otherwise.

    Same-state moves, moves out of a terminal status and unknown targets are all
    `InvalidTransition`. Completing an order that is not paid is `PaymentNotSettled`.
    """
    if requested not in STATUS_TRANSITIONS.get(current, frozenset()):
        raise InvalidTransition(current, requested)

    if requested == OrderStatus.COMPLETED and payment_status != PaymentStatus.PAID:
        raise PaymentNotSettled(payment_status)

    return requested


def validate_payment_transition(current: str, requested: str) -> str:
    if requested not in PAYMENT_TRANSITIONS.get(current, frozenset()):
        raise InvalidPaymentTransition(current, requested)
    return requested


def is_terminal(status: str) -> bool:
    return not STATUS_TRANSITIONS.get(status)


def generate_invoice_number(now: datetime | None = None) -> str:
    """`INV-YYYYMMDD-NNNNN` from the UTC date and a random 5-digit suffix; uniqueness is up to storage."""
    now = now or datetime.now(dt_timezone.utc)
    date_part = now.astimezone(dt_timezone.utc).strftime("%Y%m%d")
    return f"INV-{date_part}-{random.randint(0, 99999):05d}"


def generate_verification_code() -> str:
    # Human-readable one-time code, not a secret: `random` is not a CSPRNG.
    return str(random.randint(100000, 999999))


def quantize_amount(amount: Decimal) -> Decimal:
    return (amount or Decimal("0")).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def calculate_total(lines: Iterable[tuple[Decimal, int]]) -> Decimal:
    """Sum of `price x quantity` over `(price, quantity)` pairs, rounded to cents."""
    return quantize_amount(sum((Decimal(price) * quantity for price, quantity in lines), Decimal("0")))
