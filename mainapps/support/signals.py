from django.db.models.signals import post_save
from django.dispatch import receiver
from django.utils import timezone
from .models import SupportTicket, SupportTicketMessage


@receiver(post_save, sender=SupportTicketMessage)
def touch_ticket_on_message(sender, instance, created, **kwargs):
    """Bump the ticket so the newest conversation sorts first"""
    if created:
        SupportTicket.objects.filter(pk=instance.ticket_id).update(updated_at=timezone.now())
