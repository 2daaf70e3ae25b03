from django.contrib import admin
from .models import P2pTransfer


@admin.register(P2pTransfer)
class P2pTransferAdmin(admin.ModelAdmin):
    list_display = (
        'transfer_code', 'order', 'amount', 'network', 'status',
        'partner_address_short', 'created_at', 'auto_release_at', 'appealed_at'
    )
    list_filter = ('status', 'network', 'created_at')
    search_fields = ('transfer_code', 'order__order_number', 'partner_address', 'sender_address')
    raw_id_fields = ('order',)
    readonly_fields = (
        'transfer_code', 'status', 'payment_completed_at', 'release_timer_started_at',
        'auto_release_at', 'appeal_reason', 'appealed_at', 'resolved_at', 'resolved_by',
        'created_at', 'updated_at'
    )

    def partner_address_short(self, obj):
        return f"{obj.partner_address[:6]}...{obj.partner_address[-4:]}"
    partner_address_short.short_description = "Partner"
