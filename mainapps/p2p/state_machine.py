"""
Status model for P2P transfers.

Every mutation of ``P2pTransfer.status`` goes through :func:`next_status`, so the
table below is the single description of which moves are legal. The timing
helpers are pure: callers pass ``now`` and a :class:`P2pConfig` snapshot.
"""
from dataclasses import dataclass
from datetime import timedelta

from django.db import models

from .exceptions import InvalidTransition


class TransferStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PAYMENT_COMPLETED = 'payment_completed', 'Payment Completed'
    RELEASED = 'released', 'Released'
    APPEALED = 'appealed', 'Appealed'
    CANCELLED = 'cancelled', 'Cancelled'
    APPEAL_APPROVED = 'appeal_approved', 'Appeal Approved'
    APPEAL_REJECTED = 'appeal_rejected', 'Appeal Rejected'


class TransferEvent(models.TextChoices):
    CONFIRM_PAYMENT = 'confirm_payment', 'Buyer confirmed payment'
    EXPIRE_DEADLINE = 'expire_deadline', 'Payment deadline passed'
    RELEASE = 'release', 'Released by seller'
    AUTO_RELEASE = 'auto_release', 'Released automatically'
    APPEAL = 'appeal', 'Appeal opened'
    APPROVE_APPEAL = 'approve_appeal', 'Appeal approved'
    REJECT_APPEAL = 'reject_appeal', 'Appeal rejected'
    CANCEL = 'cancel', 'Cancelled'


TERMINAL_STATUSES = frozenset({
    TransferStatus.RELEASED,
    TransferStatus.CANCELLED,
    TransferStatus.APPEAL_APPROVED,
    TransferStatus.APPEAL_REJECTED,
})

OPEN_STATUSES = frozenset(set(TransferStatus) - TERMINAL_STATUSES)

TRANSITIONS = {
    (TransferStatus.PENDING, TransferEvent.CONFIRM_PAYMENT): TransferStatus.PAYMENT_COMPLETED,
    (TransferStatus.PENDING, TransferEvent.EXPIRE_DEADLINE): TransferStatus.CANCELLED,
    (TransferStatus.PAYMENT_COMPLETED, TransferEvent.RELEASE): TransferStatus.RELEASED,
    (TransferStatus.PAYMENT_COMPLETED, TransferEvent.AUTO_RELEASE): TransferStatus.RELEASED,
    (TransferStatus.PAYMENT_COMPLETED, TransferEvent.APPEAL): TransferStatus.APPEALED,
    (TransferStatus.APPEALED, TransferEvent.APPROVE_APPEAL): TransferStatus.APPEAL_APPROVED,
    (TransferStatus.APPEALED, TransferEvent.REJECT_APPEAL): TransferStatus.APPEAL_REJECTED,
}
TRANSITIONS.update({
    (status, TransferEvent.CANCEL): TransferStatus.CANCELLED for status in OPEN_STATUSES
})


@dataclass(frozen=True)
class P2pConfig:
    """Snapshot of the timer settings, read once per request or scan."""

    payment_deadline_minutes: int = 15
    auto_release_minutes: int = 5

    @property
    def payment_deadline(self) -> timedelta:
        return timedelta(minutes=self.payment_deadline_minutes)

    @property
    def auto_release_delay(self) -> timedelta:
        return timedelta(minutes=self.auto_release_minutes)


def is_terminal(status) -> bool:
    return status in TERMINAL_STATUSES


def can_transition(status, event) -> bool:
    return (status, event) in TRANSITIONS


def next_status(status, event) -> str:
    try:
        return TRANSITIONS[(status, event)]
    except KeyError:
        raise InvalidTransition(status, event) from None


def payment_deadline(created_at, config: P2pConfig):
    return created_at + config.payment_deadline


def auto_release_time(payment_completed_at, config: P2pConfig):
    return payment_completed_at + config.auto_release_delay


def is_payment_overdue(status, created_at, now, config: P2pConfig) -> bool:
    return status == TransferStatus.PENDING and now >= payment_deadline(created_at, config)


def should_auto_release(status, auto_release_at, now) -> bool:
    """True only while payment is confirmed and the release timer has run out."""
    return (
        status == TransferStatus.PAYMENT_COMPLETED
        and auto_release_at is not None
        and now >= auto_release_at
    )


def remaining_seconds(status, created_at, auto_release_at, now, config: P2pConfig):
    """
    Seconds left on whichever clock is running, floored at zero.

    Pending transfers count down to the payment deadline, confirmed ones to the
    auto-release time. Returns None when no clock applies.
    """
    if status == TransferStatus.PENDING:
        end = payment_deadline(created_at, config)
    elif status == TransferStatus.PAYMENT_COMPLETED and auto_release_at is not None:
        end = auto_release_at
    else:
        return None
    return max(0, int((end - now).total_seconds()))
