from django.db import models

from ledger.fields import TokenAmountField


class Asset(models.Model):
    """A fungible asset tracked by the ledger (payment currencies and the sold token)"""
    identifier = models.CharField(max_length=58, unique=True, help_text="Asset address")
    symbol = models.CharField(max_length=16)
    decimals = models.PositiveSmallIntegerField(default=18)
    total_supply = TokenAmountField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['symbol']

    def __str__(self):
        return f"{self.symbol} ({self.identifier[:8]}...)"


class AssetHolding(models.Model):
    """Balance of one account in one asset"""
    asset = models.ForeignKey(Asset, on_delete=models.CASCADE, related_name='holdings')
    account = models.CharField(max_length=58)
    balance = TokenAmountField()
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ['asset', 'account']
        indexes = [
            models.Index(fields=['account'], name='ledger_holding_account_idx'),
        ]

    def __str__(self):
        return f"{self.account[:8]}... holds {self.balance} {self.asset.symbol}"


class AssetAllowance(models.Model):
    """Amount a spender may still pull from an owner's holding"""
    asset = models.ForeignKey(Asset, on_delete=models.CASCADE, related_name='allowances')
    owner = models.CharField(max_length=58)
    spender = models.CharField(max_length=58)
    amount = TokenAmountField()
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ['asset', 'owner', 'spender']

    def __str__(self):
        return f"{self.owner[:8]}... -> {self.spender[:8]}...: {self.amount} {self.asset.symbol}"


class ContractAccount(models.Model):
    """Address of a deployed application, i.e. an identity that carries code"""
    app_id = models.PositiveBigIntegerField(unique=True)
    address = models.CharField(max_length=58, unique=True)
    label = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['app_id']

    def __str__(self):
        return f"App {self.app_id} ({self.label or self.address[:8]})"


class LedgerEvent(models.Model):
    """Append-only event log used for external indexing"""
    source = models.CharField(max_length=32, help_text="App that emitted the event")
    name = models.CharField(max_length=64)
    payload = models.JSONField(default=dict)
    block_time = models.BigIntegerField(help_text="Unix time of the operation that emitted the event")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['id']
        indexes = [
            models.Index(fields=['name'], name='ledger_event_name_idx'),
            models.Index(fields=['source', 'name'], name='ledger_event_source_name_idx'),
        ]

    def __str__(self):
        return f"{self.source}:{self.name} @ {self.block_time}"
