from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.crypto import get_random_string

from . import state_machine
from .config import load_p2p_config
from .state_machine import OPEN_STATUSES, TransferStatus


class P2pTransfer(models.Model):
    """
    Off-chain payment handshake for a P2P order.

    Status changes go through ``mainapps.p2p.services``; the model only answers
    questions about the timers.
    """

    Status = TransferStatus

    # Outcomes after which the order no longer shows the transfer
    HIDDEN_FROM_ORDER_STATUSES = (Status.CANCELLED, Status.APPEAL_REJECTED)

    order = models.ForeignKey(
        'orders.Order',
        on_delete=models.CASCADE,
        related_name='p2p_transfers'
    )
    transfer_code = models.CharField(max_length=64, unique=True, blank=True)
    partner_address = models.CharField(max_length=255)
    partner_payment_method = models.ForeignKey(
        'marketplace.PaymentMethod',
        on_delete=models.PROTECT,
        related_name='p2p_transfers'
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    sender_address = models.CharField(max_length=255, blank=True)
    network = models.CharField(max_length=100)
    status = models.CharField(
        max_length=30,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True
    )

    payment_completed_at = models.DateTimeField(null=True, blank=True)
    release_timer_started_at = models.DateTimeField(null=True, blank=True)
    auto_release_at = models.DateTimeField(null=True, blank=True)

    appeal_reason = models.TextField(null=True, blank=True)
    appealed_at = models.DateTimeField(null=True, blank=True)
    resolved_at = models.DateTimeField(null=True, blank=True)
    resolved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='resolved_p2p_transfers'
    )

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'p2p_transfer'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='p2p_transf_status_8d1a2f_idx'),
            models.Index(fields=['status', 'auto_release_at'], name='p2p_transf_status_4e7b90_idx'),
            models.Index(fields=['appealed_at'], name='p2p_transf_appeale_3c5d6e_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['order'],
                condition=Q(status__in=sorted(s.value for s in OPEN_STATUSES)),
                name='p2p_one_open_transfer_per_order',
            ),
        ]

    def __str__(self):
        return f"{self.transfer_code} ({self.status})"

    def save(self, *args, **kwargs):
        if not self.transfer_code:
            self.transfer_code = self.generate_transfer_code()
        super().save(*args, **kwargs)

    @staticmethod
    def generate_transfer_code():
        while True:
            code = get_random_string(32)
            if not P2pTransfer.objects.filter(transfer_code=code).exists():
                return code

    @property
    def is_terminal(self):
        return state_machine.is_terminal(self.status)

    def should_auto_release(self, now=None):
        return state_machine.should_auto_release(
            self.status, self.auto_release_at, now or timezone.now()
        )

    def get_remaining_time(self, config=None, now=None):
        """Seconds left on the running clock, or None once no clock applies."""
        if config is None:
            config = load_p2p_config()
        return state_machine.remaining_seconds(
            self.status, self.created_at, self.auto_release_at,
            now or timezone.now(), config
        )
