"""
Status changes for P2P transfers.

Each transition locks the transfer row, checks the move against the table in
``state_machine`` and writes with ``UPDATE ... WHERE status=<observed>``, so two
actors racing on one transfer cannot both win. The matching order status is
written in the same transaction.
"""
import logging

from django.db import transaction
from django.utils import timezone

from mainapps.orders.models import Order
from . import state_machine
from .config import load_p2p_config
from .exceptions import ConcurrentModification, InvalidTransition, TransferNotAllowed
from .models import P2pTransfer
from .state_machine import OPEN_STATUSES, TransferEvent, TransferStatus

logger = logging.getLogger(__name__)

ORDER_STATUS_FOR_TRANSFER = {
    TransferStatus.RELEASED: Order.Status.SENT,
    TransferStatus.APPEALED: Order.Status.APPEALED,
    TransferStatus.APPEAL_APPROVED: Order.Status.APPEAL_APPROVED,
    TransferStatus.APPEAL_REJECTED: Order.Status.APPEAL_REJECTED,
    TransferStatus.CANCELLED: Order.Status.CANCELLED,
}

# Order statuses from which a new transfer may be opened
ORDER_STATUSES_ALLOWING_TRANSFER = (Order.Status.PENDING, Order.Status.APPEAL_APPROVED)


def open_transfer(order, partner_address, partner_payment_method, amount, network,
                  sender_address='', now=None):
    """Create the pending transfer for a P2P order, or a retry after an approved appeal."""
    now = now or timezone.now()
    with transaction.atomic():
        order = Order.objects.select_for_update().get(pk=order.pk)
        if not order.is_p2p:
            raise TransferNotAllowed('Order is not paid through P2P')
        if order.status not in ORDER_STATUSES_ALLOWING_TRANSFER:
            raise TransferNotAllowed(f"Order is {order.status}; a P2P transfer cannot be opened")
        if order.p2p_transfers.filter(status__in=OPEN_STATUSES).exists():
            raise TransferNotAllowed('Order already has an open P2P transfer')
        if not partner_payment_method.is_active:
            raise TransferNotAllowed('Selected payment method is not available')

        transfer = P2pTransfer.objects.create(
            order=order,
            partner_address=partner_address,
            partner_payment_method=partner_payment_method,
            amount=amount,
            network=network,
            sender_address=sender_address or '',
            status=TransferStatus.PENDING,
            created_at=now,
        )
        if order.status != Order.Status.PENDING:
            Order.objects.filter(pk=order.pk).update(status=Order.Status.PENDING, updated_at=now)

    logger.info("Opened P2P transfer %s for order %s", transfer.transfer_code, order.order_number)
    return transfer


def _apply_event(transfer, event, now, expected_status=None, changes=None, guard=None):
    with transaction.atomic():
        locked = P2pTransfer.objects.select_for_update().get(pk=transfer.pk)
        current = locked.status
        if expected_status is not None and current != expected_status:
            raise ConcurrentModification()

        target = state_machine.next_status(current, event)
        if guard is not None and not guard(locked):
            raise InvalidTransition(current, event)

        values = {'status': target, 'updated_at': now}
        values.update(changes or {})
        updated = P2pTransfer.objects.filter(pk=locked.pk, status=current).update(**values)
        if updated != 1:
            raise ConcurrentModification()
        for field, value in values.items():
            setattr(locked, field, value)

        order_status = ORDER_STATUS_FOR_TRANSFER.get(target)
        if order_status is not None:
            Order.objects.filter(
                pk=locked.order_id, status__in=Order.P2P_OWNED_STATUSES
            ).update(status=order_status, updated_at=now)

    logger.info(
        "P2P transfer %s: %s -> %s on %s", locked.transfer_code, current, target, event
    )
    return locked


def mark_payment_completed(transfer, now=None, config=None, expected_status=None,
                           sender_address=None):
    """Buyer says the off-chain payment was sent; starts the release timer."""
    now = now or timezone.now()
    config = config or load_p2p_config()
    changes = {
        'payment_completed_at': now,
        'release_timer_started_at': now,
        'auto_release_at': state_machine.auto_release_time(now, config),
    }
    if sender_address:
        changes['sender_address'] = sender_address
    return _apply_event(
        transfer, TransferEvent.CONFIRM_PAYMENT, now,
        expected_status=expected_status, changes=changes,
    )


def release_transfer(transfer, now=None, expected_status=None):
    return _apply_event(
        transfer, TransferEvent.RELEASE, now or timezone.now(),
        expected_status=expected_status,
    )


def auto_release_transfer(transfer, now=None):
    now = now or timezone.now()
    return _apply_event(
        transfer, TransferEvent.AUTO_RELEASE, now,
        guard=lambda locked: locked.should_auto_release(now),
    )


def expire_transfer(transfer, now=None, config=None):
    now = now or timezone.now()
    config = config or load_p2p_config()
    return _apply_event(
        transfer, TransferEvent.EXPIRE_DEADLINE, now,
        guard=lambda locked: state_machine.is_payment_overdue(
            locked.status, locked.created_at, now, config
        ),
    )


def appeal_transfer(transfer, reason, now=None, expected_status=None):
    """Freeze a confirmed transfer for admin review. The release timer stops counting."""
    now = now or timezone.now()
    return _apply_event(
        transfer, TransferEvent.APPEAL, now,
        expected_status=expected_status,
        changes={'appeal_reason': reason, 'appealed_at': now},
    )


def resolve_appeal(transfer, approve, admin=None, now=None, expected_status=None):
    now = now or timezone.now()
    event = TransferEvent.APPROVE_APPEAL if approve else TransferEvent.REJECT_APPEAL
    return _apply_event(
        transfer, event, now,
        expected_status=expected_status,
        changes={'resolved_at': now, 'resolved_by_id': getattr(admin, 'pk', None)},
    )


def cancel_transfer(transfer, now=None, expected_status=None):
    return _apply_event(
        transfer, TransferEvent.CANCEL, now or timezone.now(),
        expected_status=expected_status,
    )


def sync_transfer_timers(transfer, now=None, config=None):
    """
    Apply any timer transition that is due for one transfer and return it fresh.

    Used on read so a page shows the right status even if the periodic scan has
    not run yet.
    """
    now = now or timezone.now()
    config = config or load_p2p_config()
    try:
        if state_machine.is_payment_overdue(transfer.status, transfer.created_at, now, config):
            return expire_transfer(transfer, now=now, config=config)
        if transfer.should_auto_release(now):
            return auto_release_transfer(transfer, now=now)
    except (InvalidTransition, ConcurrentModification) as exc:
        logger.info("Timer check skipped for transfer %s: %s", transfer.transfer_code, exc)
        transfer.refresh_from_db()
    return transfer


def process_due_transfers(now=None, config=None):
    """
    Cancel pending transfers past their payment deadline and release confirmed
    ones whose timer ran out. Transfers that another actor moved in the meantime
    are skipped.
    """
    now = now or timezone.now()
    config = config or load_p2p_config()
    summary = {'cancelled': 0, 'released': 0, 'skipped': 0}

    overdue = P2pTransfer.objects.filter(
        status=TransferStatus.PENDING,
        created_at__lte=now - config.payment_deadline,
    ).only('pk', 'transfer_code')
    for transfer in list(overdue):
        try:
            expire_transfer(transfer, now=now, config=config)
        except (InvalidTransition, ConcurrentModification) as exc:
            logger.info("Deadline scan skipped transfer %s: %s", transfer.transfer_code, exc)
            summary['skipped'] += 1
        else:
            summary['cancelled'] += 1

    due = P2pTransfer.objects.filter(
        status=TransferStatus.PAYMENT_COMPLETED,
        auto_release_at__lte=now,
    ).only('pk', 'transfer_code')
    for transfer in list(due):
        try:
            auto_release_transfer(transfer, now=now)
        except (InvalidTransition, ConcurrentModification) as exc:
            logger.info("Auto-release scan skipped transfer %s: %s", transfer.transfer_code, exc)
            summary['skipped'] += 1
        else:
            summary['released'] += 1

    if summary['cancelled'] or summary['released'] or summary['skipped']:
        logger.info(
            "P2P timer scan at %s: %s cancelled, %s released, %s skipped",
            now.isoformat(), summary['cancelled'], summary['released'], summary['skipped'],
        )
    return summary
