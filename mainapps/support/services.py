import logging

from django.db import transaction

from .models import SupportTicket, SupportTicketMessage

logger = logging.getLogger(__name__)


def open_ticket(user, subject, message, author=None, priority=SupportTicket.Priority.MEDIUM,
                p2p_transfer=None):
    """Create a ticket for ``user`` with its first message written by ``author``."""
    author = author or user
    with transaction.atomic():
        ticket = SupportTicket.objects.create(
            user=user,
            subject=subject,
            priority=priority,
            status=SupportTicket.Status.OPEN,
            p2p_transfer=p2p_transfer,
        )
        SupportTicketMessage.objects.create(
            ticket=ticket,
            user=author,
            message=message,
            is_admin_reply=author.pk != user.pk and getattr(author, 'is_admin', False),
        )
    logger.info("Support ticket %s opened for user %s", ticket.ticket_unique_id, user.pk)
    return ticket


def add_reply(ticket, author, message):
    is_admin_reply = author.pk != ticket.user_id and getattr(author, 'is_admin', False)
    reply = SupportTicketMessage.objects.create(
        ticket=ticket,
        user=author,
        message=message,
        is_admin_reply=is_admin_reply,
    )
    if is_admin_reply and ticket.status == SupportTicket.Status.OPEN:
        SupportTicket.objects.filter(pk=ticket.pk).update(status=SupportTicket.Status.IN_PROGRESS)
        ticket.status = SupportTicket.Status.IN_PROGRESS
    return reply
