from django.contrib import admin
from mainapps.p2p.models import P2pTransfer
from .models import Order


class P2pTransferInline(admin.TabularInline):
    model = P2pTransfer
    extra = 0
    can_delete = False
    fields = ('transfer_code', 'status', 'amount', 'network', 'created_at', 'auto_release_at', 'appealed_at')
    readonly_fields = fields
    show_change_link = True


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('order_number', 'user', 'nft', 'total_price', 'payment_method', 'status', 'created_at')
    list_filter = ('status', 'payment_method', 'created_at')
    search_fields = ('order_number', 'user__email', 'transaction_id', 'sender_address')
    readonly_fields = ('order_number', 'stock_deducted', 'created_at', 'updated_at')
    raw_id_fields = ('user', 'nft')
    inlines = [P2pTransferInline]
