from django.contrib import admin

from .models import Asset, AssetAllowance, AssetHolding, ContractAccount, LedgerEvent


@admin.register(Asset)
class AssetAdmin(admin.ModelAdmin):
    list_display = ['symbol', 'identifier', 'decimals', 'total_supply', 'created_at']
    search_fields = ['symbol', 'identifier']
    readonly_fields = ['total_supply', 'created_at']


@admin.register(AssetHolding)
class AssetHoldingAdmin(admin.ModelAdmin):
    list_display = ['account', 'asset', 'balance', 'updated_at']
    list_filter = ['asset']
    search_fields = ['account']
    readonly_fields = ['asset', 'account', 'balance', 'updated_at']

    def has_add_permission(self, request):
        # Balances only move through the asset services
        return False


@admin.register(AssetAllowance)
class AssetAllowanceAdmin(admin.ModelAdmin):
    list_display = ['owner', 'spender', 'asset', 'amount', 'updated_at']
    list_filter = ['asset']
    search_fields = ['owner', 'spender']
    readonly_fields = ['asset', 'owner', 'spender', 'amount', 'updated_at']

    def has_add_permission(self, request):
        return False


@admin.register(ContractAccount)
class ContractAccountAdmin(admin.ModelAdmin):
    list_display = ['app_id', 'label', 'address', 'created_at']
    search_fields = ['address', 'label']
    readonly_fields = ['address', 'created_at']


@admin.register(LedgerEvent)
class LedgerEventAdmin(admin.ModelAdmin):
    list_display = ['id', 'source', 'name', 'block_time', 'created_at']
    list_filter = ['source', 'name']
    readonly_fields = ['source', 'name', 'payload', 'block_time', 'created_at']
    ordering = ['-id']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
