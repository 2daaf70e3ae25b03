import logging

from django.db import transaction
from django.db.models import F

from mainapps.marketplace.models import Nft
from mainapps.p2p.services import cancel_transfer, open_transfer
from mainapps.p2p.state_machine import OPEN_STATUSES
from .models import Order

logger = logging.getLogger(__name__)


class OrderError(Exception):
    pass


def create_order(user, nft, total_price, quantity=1, payment_method=Order.PaymentMethod.CRYPTO,
                 transaction_id=None, sender_address=None, notes='', p2p=None, now=None):
    """
    Place an order. A P2P order gets its pending transfer in the same
    transaction, so the order never exists without one.
    """
    if nft.status != Nft.Status.ACTIVE:
        raise OrderError('This NFT is not available for purchase')
    if quantity > nft.quantity:
        raise OrderError('Requested quantity is not available')
    if payment_method == Order.PaymentMethod.P2P and not p2p:
        raise OrderError('P2P details are required for P2P orders')

    with transaction.atomic():
        order = Order.objects.create(
            user=user,
            nft=nft,
            total_price=total_price,
            quantity=quantity,
            payment_method=payment_method,
            transaction_id=transaction_id,
            sender_address=sender_address,
            notes=notes or '',
            status=Order.Status.PENDING,
        )
        if payment_method == Order.PaymentMethod.P2P:
            open_transfer(
                order,
                partner_address=p2p['partner_address'],
                partner_payment_method=p2p['partner_payment_method'],
                amount=p2p.get('amount', total_price),
                network=p2p['network'],
                sender_address=p2p.get('sender_address') or '',
                now=now,
            )

    logger.info("Order %s created by user %s via %s", order.order_number, user.pk, payment_method)
    return order


def set_order_status(order, new_status):
    """
    Admin status change; completing an order takes the NFT out of stock once.

    While a P2P transfer is open the transfer drives the order: cancelling or
    failing the order cancels the transfer first, and completing or sending it
    is refused until the transfer settles.
    """
    with transaction.atomic():
        transfer = order.p2p_transfers.filter(status__in=OPEN_STATUSES).first()
        if transfer is not None:
            if new_status in (Order.Status.COMPLETED, Order.Status.SENT):
                raise OrderError('Order has an open P2P transfer; settle or cancel it first')
            if new_status in (Order.Status.CANCELLED, Order.Status.FAILED):
                cancel_transfer(transfer)

        order = Order.objects.select_for_update().get(pk=order.pk)
        order.status = new_status
        update_fields = ['status', 'updated_at']
        if new_status == Order.Status.COMPLETED and not order.stock_deducted:
            Nft.objects.filter(pk=order.nft_id).update(quantity=F('quantity') - order.quantity)
            order.stock_deducted = True
            update_fields.append('stock_deducted')
        order.save(update_fields=update_fields)
    logger.info("Order %s status set to %s", order.order_number, new_status)
    return order


def submit_sent_request(order, sender_address):
    if order.is_p2p:
        raise OrderError('P2P orders are settled through their transfer')
    if order.status != Order.Status.PENDING:
        raise OrderError('Only pending orders can be marked as sent')
    order.status = Order.Status.PENDING_SENT
    order.sender_address = sender_address
    order.save(update_fields=['status', 'sender_address', 'updated_at'])
    return order


def review_sent_request(order, approve):
    if order.status != Order.Status.PENDING_SENT:
        raise OrderError('Order has no pending sent request')
    order.status = Order.Status.SENT if approve else Order.Status.SENT_REJECTED
    order.save(update_fields=['status', 'updated_at'])
    logger.info("Sent request for order %s %s", order.order_number, 'approved' if approve else 'rejected')
    return order
