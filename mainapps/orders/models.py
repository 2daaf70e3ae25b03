import random
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone


class Order(models.Model):
    """A buyer's purchase of an NFT; P2P orders settle through P2pTransfer."""

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        PROCESSING = 'processing', 'Processing'
        COMPLETED = 'completed', 'Completed'
        CANCELLED = 'cancelled', 'Cancelled'
        FAILED = 'failed', 'Failed'
        SENT = 'sent', 'Sent'
        APPEALED = 'appealed', 'Appealed'
        APPEAL_APPROVED = 'appeal_approved', 'Appeal Approved'
        APPEAL_REJECTED = 'appeal_rejected', 'Appeal Rejected'
        PENDING_SENT = 'pending_sent', 'Pending Sent'
        SENT_REJECTED = 'sent_rejected', 'Sent Rejected'

    class PaymentMethod(models.TextChoices):
        CRYPTO = 'crypto', 'Crypto'
        CARD = 'card', 'Card'
        P2P = 'p2p', 'P2P'

    # Statuses an admin may set directly from the order screen
    ADMIN_SETTABLE_STATUSES = (
        Status.PENDING, Status.COMPLETED, Status.CANCELLED, Status.FAILED, Status.SENT,
    )
    # Statuses a P2P transfer may overwrite; anything else was set by an admin or a
    # finished settlement and stays put
    P2P_OWNED_STATUSES = (Status.PENDING, Status.APPEALED)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='orders'
    )
    nft = models.ForeignKey(
        'marketplace.Nft',
        on_delete=models.CASCADE,
        related_name='orders'
    )
    order_number = models.CharField(max_length=50, unique=True, blank=True)
    total_price = models.DecimalField(max_digits=15, decimal_places=2)
    quantity = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('1'))
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.CRYPTO
    )
    transaction_id = models.CharField(max_length=255, blank=True, null=True)
    sender_address = models.CharField(max_length=255, blank=True, null=True)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True
    )
    notes = models.TextField(blank=True)
    stock_deducted = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders_order'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'status'], name='orders_orde_user_id_5a9f3c_idx'),
            models.Index(fields=['payment_method'], name='orders_orde_payment_1c2e4b_idx'),
        ]

    def __str__(self):
        return self.order_number

    def save(self, *args, **kwargs):
        if not self.order_number:
            self.order_number = self.generate_order_number()
        super().save(*args, **kwargs)

    def generate_order_number(self):
        """ORD-<timestamp>-<user id>-<3 random digits>, retried until unique"""
        while True:
            order_number = "ORD-{}-{}-{}".format(
                timezone.now().strftime('%Y%m%d%H%M%S'),
                self.user_id,
                random.randint(100, 999),
            )
            if not Order.objects.filter(order_number=order_number).exists():
                return order_number

    @property
    def is_p2p(self):
        return self.payment_method == self.PaymentMethod.P2P

    @property
    def latest_p2p_transfer(self):
        # Reads through all() so a prefetch_related('p2p_transfers') is reused
        return max(self.p2p_transfers.all(), key=lambda t: (t.created_at, t.pk), default=None)

    @property
    def active_p2p_transfer(self):
        """Latest transfer unless it ended in cancellation or a rejected appeal"""
        transfer = self.latest_p2p_transfer
        if transfer is None or transfer.status in transfer.HIDDEN_FROM_ORDER_STATUSES:
            return None
        return transfer
