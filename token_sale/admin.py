from django.contrib import admin
from django.utils.html import format_html

from .models import AuthorizedPaymentCurrency, PurchaserRecord, SaleConfiguration


class AuthorizedPaymentCurrencyInline(admin.TabularInline):
    model = AuthorizedPaymentCurrency
    extra = 0
    readonly_fields = ['token', 'authorized_at']
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(SaleConfiguration)
class SaleConfigurationAdmin(admin.ModelAdmin):
    """Read-only: configuration changes go through the sale engine so they are phase-checked and logged"""
    list_display = ['token', 'wallet', 'sale_start', 'sale_end', 'formatted_progress']
    inlines = [AuthorizedPaymentCurrencyInline]
    readonly_fields = [field.name for field in SaleConfiguration._meta.fields]

    fieldsets = (
        ('Parties', {
            'fields': ('owner', 'sale_address', 'token', 'wallet')
        }),
        ('Schedule', {
            'fields': (
                'sale_start',
                'sale_end',
                'withdrawal_start',
                'withdraw_period_duration',
                'withdraw_period_number',
            )
        }),
        ('Pricing & Limits', {
            'fields': (
                'exchange_rate',
                'min_buy_value',
                'max_token_amount_per_address',
                'referral_reward_percentage',
                'amount_to_sell',
                'sold_amount',
            )
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def formatted_progress(self, obj):
        if not obj.amount_to_sell:
            return '-'
        percentage = obj.sold_amount * 100 // obj.amount_to_sell
        return format_html('{}% sold', percentage)
    formatted_progress.short_description = 'Progress'

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(PurchaserRecord)
class PurchaserRecordAdmin(admin.ModelAdmin):
    list_display = ['account', 'claimable_amount', 'withdrawn_amount', 'locked_amount', 'created_at']
    search_fields = ['account']
    readonly_fields = ['account', 'claimable_amount', 'withdrawn_amount', 'locked_amount', 'created_at', 'updated_at']

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
