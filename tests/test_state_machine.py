from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from mainapps.p2p.exceptions import InvalidTransition
from mainapps.p2p.state_machine import (
    OPEN_STATUSES,
    TERMINAL_STATUSES,
    TRANSITIONS,
    P2pConfig,
    TransferEvent,
    TransferStatus,
    can_transition,
    is_payment_overdue,
    next_status,
    remaining_seconds,
    should_auto_release,
)

T0 = datetime(2026, 3, 1, 12, 0, 0, tzinfo=dt_timezone.utc)
CONFIG = P2pConfig(payment_deadline_minutes=15, auto_release_minutes=30)


@pytest.mark.parametrize("status, event, expected", [
    (TransferStatus.PENDING, TransferEvent.CONFIRM_PAYMENT, TransferStatus.PAYMENT_COMPLETED),
    (TransferStatus.PENDING, TransferEvent.EXPIRE_DEADLINE, TransferStatus.CANCELLED),
    (TransferStatus.PAYMENT_COMPLETED, TransferEvent.RELEASE, TransferStatus.RELEASED),
    (TransferStatus.PAYMENT_COMPLETED, TransferEvent.AUTO_RELEASE, TransferStatus.RELEASED),
    (TransferStatus.PAYMENT_COMPLETED, TransferEvent.APPEAL, TransferStatus.APPEALED),
    (TransferStatus.APPEALED, TransferEvent.APPROVE_APPEAL, TransferStatus.APPEAL_APPROVED),
    (TransferStatus.APPEALED, TransferEvent.REJECT_APPEAL, TransferStatus.APPEAL_REJECTED),
])
def test_listed_edges(status, event, expected):
    assert next_status(status, event) == expected


def test_plain_strings_from_the_database_match_the_table():
    assert next_status('pending', 'confirm_payment') == 'payment_completed'


@pytest.mark.parametrize("status", sorted(OPEN_STATUSES))
def test_cancel_allowed_from_every_open_status(status):
    assert next_status(status, TransferEvent.CANCEL) == TransferStatus.CANCELLED


@pytest.mark.parametrize("status", sorted(TERMINAL_STATUSES))
@pytest.mark.parametrize("event", list(TransferEvent))
def test_terminal_statuses_accept_no_event(status, event):
    assert not can_transition(status, event)
    with pytest.raises(InvalidTransition) as excinfo:
        next_status(status, event)
    assert excinfo.value.status == status
    assert "no longer available" in str(excinfo.value)


def test_unlisted_edges_are_rejected():
    assert not can_transition(TransferStatus.PENDING, TransferEvent.RELEASE)
    assert not can_transition(TransferStatus.PENDING, TransferEvent.APPEAL)
    assert not can_transition(TransferStatus.APPEALED, TransferEvent.RELEASE)
    assert not can_transition(TransferStatus.APPEALED, TransferEvent.AUTO_RELEASE)
    assert not can_transition(TransferStatus.PAYMENT_COMPLETED, TransferEvent.CONFIRM_PAYMENT)


def test_every_target_is_a_known_status():
    assert set(TRANSITIONS.values()) <= set(TransferStatus)
    assert OPEN_STATUSES | TERMINAL_STATUSES == set(TransferStatus)


def test_should_auto_release_boundary():
    release_at = T0 + timedelta(minutes=30)
    status = TransferStatus.PAYMENT_COMPLETED
    assert not should_auto_release(status, release_at, T0 + timedelta(minutes=29))
    assert should_auto_release(status, release_at, T0 + timedelta(minutes=30))
    assert should_auto_release(status, release_at, T0 + timedelta(days=2))


@pytest.mark.parametrize("status", [
    TransferStatus.PENDING,
    TransferStatus.APPEALED,
    TransferStatus.RELEASED,
    TransferStatus.CANCELLED,
])
def test_should_auto_release_only_when_payment_completed(status):
    assert not should_auto_release(status, T0, T0 + timedelta(days=1))


def test_should_auto_release_without_timer():
    assert not should_auto_release(TransferStatus.PAYMENT_COMPLETED, None, T0)


def test_payment_overdue_at_deadline():
    assert not is_payment_overdue(TransferStatus.PENDING, T0, T0 + timedelta(minutes=14, seconds=59), CONFIG)
    assert is_payment_overdue(TransferStatus.PENDING, T0, T0 + timedelta(minutes=15), CONFIG)
    assert not is_payment_overdue(TransferStatus.PAYMENT_COMPLETED, T0, T0 + timedelta(hours=1), CONFIG)


def test_remaining_seconds_counts_down_to_payment_deadline():
    values = [
        remaining_seconds(TransferStatus.PENDING, T0, None, T0 + timedelta(minutes=m), CONFIG)
        for m in (0, 1, 5, 14)
    ]
    assert values == [900, 840, 600, 60]
    assert remaining_seconds(TransferStatus.PENDING, T0, None, T0 + timedelta(hours=3), CONFIG) == 0


def test_remaining_seconds_counts_down_to_auto_release():
    release_at = T0 + timedelta(minutes=30)
    status = TransferStatus.PAYMENT_COMPLETED
    assert remaining_seconds(status, T0, release_at, T0, CONFIG) == 1800
    assert remaining_seconds(status, T0, release_at, T0 + timedelta(minutes=29), CONFIG) == 60
    assert remaining_seconds(status, T0, release_at, T0 + timedelta(minutes=45), CONFIG) == 0


@pytest.mark.parametrize("status", [
    TransferStatus.APPEALED,
    TransferStatus.RELEASED,
    TransferStatus.CANCELLED,
    TransferStatus.APPEAL_APPROVED,
    TransferStatus.APPEAL_REJECTED,
])
def test_remaining_seconds_absent_without_running_clock(status):
    assert remaining_seconds(status, T0, T0 + timedelta(minutes=30), T0, CONFIG) is None


def test_config_durations():
    config = P2pConfig()
    assert config.payment_deadline == timedelta(minutes=15)
    assert config.auto_release_delay == timedelta(minutes=5)
