from django.db import models

from ledger.fields import TokenAmountField


class SaleConfiguration(models.Model):
    """Sale parameters and aggregate counters - singleton model"""
    owner = models.CharField(max_length=58, help_text="Administrative principal allowed to configure the sale")
    sale_address = models.CharField(max_length=58, help_text="Identity that custodies the sold token")
    token = models.CharField(max_length=58, help_text="Identifier of the sold token")
    wallet = models.CharField(max_length=58, help_text="Beneficiary collecting the payments")

    # Unix timestamps; a missing sale start means the sale is not initialised yet
    sale_start = models.BigIntegerField(null=True, blank=True)
    sale_end = models.BigIntegerField(null=True, blank=True)
    withdrawal_start = models.BigIntegerField(null=True, blank=True)
    withdraw_period_duration = models.PositiveBigIntegerField(default=1, help_text="Seconds per vesting period")
    withdraw_period_number = models.PositiveIntegerField(default=1, help_text="Number of vesting periods")

    min_buy_value = TokenAmountField(help_text="Minimum payment value per purchase")
    max_token_amount_per_address = TokenAmountField(help_text="Cap on tokens bought by one address")
    exchange_rate = TokenAmountField(help_text="Tokens per payment unit, scaled by 10^18")
    referral_reward_percentage = models.PositiveSmallIntegerField(default=0)
    amount_to_sell = TokenAmountField(help_text="Aggregate cap on tokens sold")
    sold_amount = TokenAmountField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Sale Configuration"
        verbose_name_plural = "Sale Configuration"

    def __str__(self):
        return f"Sale of {self.token[:8]}... ({self.sold_amount}/{self.amount_to_sell} sold)"

    def has_started(self, now: int) -> bool:
        return self.sale_start is not None and now >= self.sale_start

    def has_ended(self, now: int) -> bool:
        return self.sale_end is not None and now >= self.sale_end


class AuthorizedPaymentCurrency(models.Model):
    """Payment asset accepted by the sale; the list only grows"""
    configuration = models.ForeignKey(
        SaleConfiguration,
        on_delete=models.CASCADE,
        related_name='currencies',
    )
    token = models.CharField(max_length=58, unique=True)
    authorized_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['id']
        verbose_name_plural = "Authorized payment currencies"

    def __str__(self):
        return self.token


class PurchaserRecord(models.Model):
    """Per-address entitlement and withdrawal progress"""
    account = models.CharField(max_length=58, unique=True)
    claimable_amount = TokenAmountField(help_text="Purchased tokens plus referral bonuses")
    withdrawn_amount = TokenAmountField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return f"{self.account[:8]}...: {self.withdrawn_amount}/{self.claimable_amount}"

    @property
    def locked_amount(self):
        """Entitlement not withdrawn yet, vested or not"""
        return self.claimable_amount - self.withdrawn_amount
