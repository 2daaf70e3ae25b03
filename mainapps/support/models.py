from django.conf import settings
from django.db import models
from django.utils.crypto import get_random_string

TICKET_ID_ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789'


class SupportTicket(models.Model):
    class Status(models.TextChoices):
        OPEN = 'open', 'Open'
        IN_PROGRESS = 'in_progress', 'In Progress'
        CLOSED = 'closed', 'Closed'

    class Priority(models.TextChoices):
        LOW = 'low', 'Low'
        MEDIUM = 'medium', 'Medium'
        HIGH = 'high', 'High'

    ticket_unique_id = models.CharField(max_length=20, unique=True, blank=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='support_tickets'
    )
    subject = models.CharField(max_length=255)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.OPEN)
    priority = models.CharField(max_length=20, choices=Priority.choices, default=Priority.MEDIUM)
    p2p_transfer = models.ForeignKey(
        'p2p.P2pTransfer',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='support_tickets'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'support_ticket'
        ordering = ['-updated_at']
        indexes = [
            models.Index(fields=['user', 'status'], name='support_tic_user_id_7e2a41_idx'),
        ]

    def __str__(self):
        return f"{self.ticket_unique_id} {self.subject}"

    def save(self, *args, **kwargs):
        if not self.ticket_unique_id:
            self.ticket_unique_id = self.generate_ticket_id()
        super().save(*args, **kwargs)

    @staticmethod
    def generate_ticket_id():
        while True:
            ticket_id = '#' + get_random_string(8, allowed_chars=TICKET_ID_ALPHABET)
            if not SupportTicket.objects.filter(ticket_unique_id=ticket_id).exists():
                return ticket_id


class SupportTicketMessage(models.Model):
    ticket = models.ForeignKey(
        SupportTicket,
        on_delete=models.CASCADE,
        related_name='messages'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='support_messages'
    )
    message = models.TextField()
    is_admin_reply = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'support_ticket_message'
        ordering = ['created_at']

    def __str__(self):
        return f"{self.ticket.ticket_unique_id}: {self.message[:40]}"
