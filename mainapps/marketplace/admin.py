from django.contrib import admin
from .models import Category, Nft, P2pNetwork, PaymentMethod, Setting


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'is_active', 'created_at')
    list_filter = ('is_active',)
    search_fields = ('name', 'slug')
    prepopulated_fields = {'slug': ('name',)}


@admin.register(Nft)
class NftAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'price', 'quantity', 'status', 'views', 'created_at')
    list_filter = ('status', 'category', 'blockchain')
    search_fields = ('name', 'contract_address', 'token_id')
    readonly_fields = ('views', 'likes', 'created_at', 'updated_at')


@admin.register(PaymentMethod)
class PaymentMethodAdmin(admin.ModelAdmin):
    list_display = ('name', 'wallet_address_short', 'sort_order', 'is_active')
    list_filter = ('is_active',)
    search_fields = ('name', 'wallet_address')
    list_editable = ('sort_order', 'is_active')

    def wallet_address_short(self, obj):
        if obj.wallet_address:
            return f"{obj.wallet_address[:6]}...{obj.wallet_address[-4:]}"
        return "-"
    wallet_address_short.short_description = "Wallet"


@admin.register(P2pNetwork)
class P2pNetworkAdmin(admin.ModelAdmin):
    list_display = ('name', 'currency_symbol', 'is_active')
    list_filter = ('is_active',)
    search_fields = ('name', 'currency_symbol')


@admin.register(Setting)
class SettingAdmin(admin.ModelAdmin):
    list_display = ('key', 'value', 'description', 'updated_at')
    search_fields = ('key', 'description')
    readonly_fields = ('updated_at',)
