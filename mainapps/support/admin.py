from django.contrib import admin
from .models import SupportTicket, SupportTicketMessage


class SupportTicketMessageInline(admin.TabularInline):
    model = SupportTicketMessage
    extra = 0
    readonly_fields = ('created_at',)
    fields = ('user', 'message', 'is_admin_reply', 'created_at')


@admin.register(SupportTicket)
class SupportTicketAdmin(admin.ModelAdmin):
    list_display = ('ticket_unique_id', 'user', 'subject', 'priority', 'status', 'p2p_transfer', 'updated_at')
    list_filter = ('status', 'priority', 'created_at')
    search_fields = ('ticket_unique_id', 'subject', 'user__email')
    readonly_fields = ('ticket_unique_id', 'created_at', 'updated_at')
    raw_id_fields = ('user', 'p2p_transfer')
    inlines = [SupportTicketMessageInline]
