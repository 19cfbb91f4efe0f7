"""
Sale and vesting state machine.

The engine sells a fixed amount of one token against an allow-list of payment
assets during ``[sale_start, sale_end)``, credits buyers (and their referrals)
with a claimable entitlement, and releases that entitlement linearly after the
cliff. Every state-changing operation:

- reads "now" once from the injected clock,
- runs inside ``transaction.atomic()`` with the configuration row locked,
- validates and writes all bookkeeping before calling into an asset,
- is guarded against re-entry from inside that asset call.

Any failure rolls back every write made by the operation, including events
and asset movements recorded in the ledger database.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from django.db import transaction

from ledger.clock import Clock, chain_time
from ledger.exceptions import (
    AuthorizationError,
    InsufficientFundsError,
    PhaseError,
    ValidationError,
)
from ledger.guards import non_reentrant
from ledger.services.accounts import validate_address
from ledger.services.assets import get_asset
from ledger.services.events import emit_event
from token_sale import vesting
from token_sale.models import SaleConfiguration
from token_sale.services import ledger as sale_ledger
from token_sale.services import registry

logger = logging.getLogger(__name__)

EVENT_SOURCE = 'token_sale'
EXCHANGE_RATE_SCALE = 10 ** 18
CONFIGURATION_ID = 1


@dataclass(frozen=True)
class SaleSettings:
    """Read-only snapshot of the sale configuration and counters."""

    token: str
    wallet: str
    sale_start: Optional[int]
    sale_end: Optional[int]
    withdrawal_start: Optional[int]
    withdraw_period_duration: int
    withdraw_period_number: int
    min_buy_value: int
    max_token_amount_per_address: int
    exchange_rate: int
    referral_reward_percentage: int
    amount_to_sell: int
    sold_amount: int

    @classmethod
    def from_configuration(cls, configuration: SaleConfiguration) -> "SaleSettings":
        return cls(
            token=configuration.token,
            wallet=configuration.wallet,
            sale_start=configuration.sale_start,
            sale_end=configuration.sale_end,
            withdrawal_start=configuration.withdrawal_start,
            withdraw_period_duration=configuration.withdraw_period_duration,
            withdraw_period_number=configuration.withdraw_period_number,
            min_buy_value=configuration.min_buy_value,
            max_token_amount_per_address=configuration.max_token_amount_per_address,
            exchange_rate=configuration.exchange_rate,
            referral_reward_percentage=configuration.referral_reward_percentage,
            amount_to_sell=configuration.amount_to_sell,
            sold_amount=configuration.sold_amount,
        )


def token_amount_for(value: int, exchange_rate: int) -> int:
    return value * exchange_rate // EXCHANGE_RATE_SCALE


def _require_int(value, label: str, minimum: int = 0) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"TokenSale: {label} must be an integer")
    if value < minimum:
        raise ValidationError(f"TokenSale: {label} must be at least {minimum}")
    return value


def _non_negative(label):
    return lambda value: _require_int(value, label)


def _positive(label):
    return lambda value: _require_int(value, label, minimum=1)


def _percentage(value):
    _require_int(value, "referral reward percentage")
    if value > 100:
        raise ValidationError("TokenSale: referral reward percentage above 100")
    return value


# field -> (event name, event payload key, validator)
SETTINGS = {
    'wallet': ('WalletUpdated', 'newWallet', lambda value: validate_address(value, "wallet")),
    'sale_start': ('SaleStartUpdated', 'newSaleStart', _non_negative("sale start")),
    'sale_end': ('SaleEndUpdated', 'newSaleEnd', _non_negative("sale end")),
    'withdrawal_start': ('WithdrawalStartUpdated', 'newWithdrawalStart', _non_negative("withdrawal start")),
    'withdraw_period_duration': (
        'WithdrawPeriodDurationUpdated', 'newWithdrawPeriodDuration', _positive("withdraw period duration"),
    ),
    'withdraw_period_number': (
        'WithdrawPeriodNumberUpdated', 'newWithdrawPeriodNumber', _positive("withdraw period number"),
    ),
    'min_buy_value': ('MinBuyValueUpdated', 'newMinBuyValue', _non_negative("minimum buy value")),
    'max_token_amount_per_address': (
        'MaxTokenAmountPerAddressUpdated', 'newMaxTokenAmountPerAddress', _non_negative("maximum token amount"),
    ),
    'exchange_rate': ('ExchangeRateUpdated', 'newExchangeRate', _non_negative("exchange rate")),
    'referral_reward_percentage': (
        'ReferralRewardPercentageUpdated', 'newReferralRewardPercentage', _percentage,
    ),
    'amount_to_sell': ('AmountToSellUpdated', 'newAmountToSell', _non_negative("amount to sell")),
}


class SaleEngine:
    """
    Entry point for every sale operation.

    ``clock`` returns the current unix time; ``asset_resolver`` maps an asset
    identifier to an object exposing ``balance_of``, ``transfer``,
    ``transfer_from`` and ``burn``.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        asset_resolver: Optional[Callable[[str], object]] = None,
    ) -> None:
        self.clock: Clock = clock or chain_time
        self.asset_resolver = asset_resolver or get_asset

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _configuration(self, lock: bool = False) -> SaleConfiguration:
        queryset = SaleConfiguration.objects.all()
        if lock:
            queryset = queryset.select_for_update()
        configuration = queryset.filter(pk=CONFIGURATION_ID).first()
        if configuration is None:
            raise PhaseError("TokenSale: sale not initialized")
        return configuration

    def _require_owner(self, configuration: SaleConfiguration, caller: str) -> None:
        if caller != configuration.owner:
            logger.warning("Rejected privileged sale call from %s", caller)
            raise AuthorizationError("Ownable: caller is not the owner")

    def _require_not_started(self, configuration: SaleConfiguration, now: int) -> None:
        if configuration.has_started(now):
            raise PhaseError("TokenSale: sale already started")

    # ------------------------------------------------------------------
    # Deployment
    # ------------------------------------------------------------------

    def initialize(
        self,
        owner: str,
        sale_address: str,
        token: str,
        wallet: str,
        *,
        sale_start: Optional[int] = None,
        sale_end: Optional[int] = None,
        withdrawal_start: Optional[int] = None,
        withdraw_period_duration: int = 1,
        withdraw_period_number: int = 1,
        min_buy_value: int = 0,
        max_token_amount_per_address: int = 0,
        exchange_rate: int = 0,
        referral_reward_percentage: int = 0,
        amount_to_sell: int = 0,
        currencies: Iterable[str] = (),
    ) -> SaleConfiguration:
        """Create the sale configuration; a deployment is initialized once."""
        validate_address(owner, "owner")
        validate_address(sale_address, "sale address")
        validate_address(token, "token")
        tokens = list(currencies)
        for currency in tokens:
            validate_address(currency, "payment currency")
        values = {
            'wallet': wallet,
            'withdraw_period_duration': withdraw_period_duration,
            'withdraw_period_number': withdraw_period_number,
            'min_buy_value': min_buy_value,
            'max_token_amount_per_address': max_token_amount_per_address,
            'exchange_rate': exchange_rate,
            'referral_reward_percentage': referral_reward_percentage,
            'amount_to_sell': amount_to_sell,
        }
        schedule = {
            'sale_start': sale_start,
            'sale_end': sale_end,
            'withdrawal_start': withdrawal_start,
        }
        for field, value in values.items():
            SETTINGS[field][2](value)
        for field, value in schedule.items():
            if value is not None:
                SETTINGS[field][2](value)
        if sale_start is not None and sale_end is not None and sale_start > sale_end:
            raise ValidationError("TokenSale: sale start after sale end")

        with transaction.atomic():
            if SaleConfiguration.objects.select_for_update().filter(pk=CONFIGURATION_ID).exists():
                raise ValidationError("TokenSale: sale already initialized")
            configuration = SaleConfiguration.objects.create(
                pk=CONFIGURATION_ID,
                owner=owner,
                sale_address=sale_address,
                token=token,
                **schedule,
                **values,
            )
            if tokens:
                registry.authorize(configuration, tokens)
        logger.info("Initialized sale of %s (owner %s, custody %s)", token, owner, sale_address)
        return configuration

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def _update_setting(self, caller: str, field: str, value) -> None:
        event_name, payload_key, validate = SETTINGS[field]
        now = self.clock()
        with transaction.atomic():
            configuration = self._configuration(lock=True)
            self._require_owner(configuration, caller)
            self._require_not_started(configuration, now)
            validate(value)
            setattr(configuration, field, value)
            configuration.save(update_fields=[field, 'updated_at'])
            emit_event(EVENT_SOURCE, event_name, now, **{payload_key: value, 'updater': caller})
        logger.info("Sale %s updated to %s by %s", field, value, caller)

    def set_wallet(self, caller: str, wallet: str) -> None:
        self._update_setting(caller, 'wallet', wallet)

    def set_sale_start(self, caller: str, sale_start: int) -> None:
        self._update_setting(caller, 'sale_start', sale_start)

    def set_sale_end(self, caller: str, sale_end: int) -> None:
        self._update_setting(caller, 'sale_end', sale_end)

    def set_withdrawal_start(self, caller: str, withdrawal_start: int) -> None:
        self._update_setting(caller, 'withdrawal_start', withdrawal_start)

    def set_withdraw_period_duration(self, caller: str, duration: int) -> None:
        self._update_setting(caller, 'withdraw_period_duration', duration)

    def set_withdraw_period_number(self, caller: str, number: int) -> None:
        self._update_setting(caller, 'withdraw_period_number', number)

    def set_min_buy_value(self, caller: str, value: int) -> None:
        self._update_setting(caller, 'min_buy_value', value)

    def set_max_token_amount_per_address(self, caller: str, amount: int) -> None:
        self._update_setting(caller, 'max_token_amount_per_address', amount)

    def set_exchange_rate(self, caller: str, rate: int) -> None:
        self._update_setting(caller, 'exchange_rate', rate)

    def set_referral_reward_percentage(self, caller: str, percentage: int) -> None:
        self._update_setting(caller, 'referral_reward_percentage', percentage)

    def set_amount_to_sell(self, caller: str, amount: int) -> None:
        self._update_setting(caller, 'amount_to_sell', amount)

    def authorize_payment_currencies(self, caller: str, tokens: Iterable[str]) -> List[str]:
        tokens = list(tokens)
        for token in tokens:
            validate_address(token, "payment currency")
        now = self.clock()
        with transaction.atomic():
            configuration = self._configuration(lock=True)
            self._require_owner(configuration, caller)
            self._require_not_started(configuration, now)
            added = registry.authorize(configuration, tokens)
            emit_event(EVENT_SOURCE, 'PaymentCurrenciesAuthorized', now, tokens=tokens)
        return added

    # ------------------------------------------------------------------
    # Sale
    # ------------------------------------------------------------------

    @non_reentrant
    def buy_token(self, buyer: str, currency: str, value: int, referral: Optional[str] = None) -> int:
        """Pay ``value`` of ``currency`` for tokens; returns the token amount credited."""
        now = self.clock()
        with transaction.atomic():
            configuration = self._configuration(lock=True)

            if (
                configuration.sale_start is None
                or configuration.sale_end is None
                or now < configuration.sale_start
            ):
                raise PhaseError("TokenSale: sale not started yet")
            if configuration.has_ended(now):
                raise PhaseError("TokenSale: sale ended")
            if not registry.is_authorized(currency):
                raise ValidationError("TokenSale: unauthorized token")
            _require_int(value, "value")
            if value <= 0 or value < configuration.min_buy_value:
                raise ValidationError("TokenSale: under minimum buy value")

            token_amount = token_amount_for(value, configuration.exchange_rate)
            if configuration.sold_amount + token_amount > configuration.amount_to_sell:
                raise ValidationError("TokenSale: not enough tokens available")
            record = sale_ledger.lock_record(buyer)
            if record.claimable_amount + token_amount > configuration.max_token_amount_per_address:
                raise ValidationError("TokenSale: above maximum token amount per address")
            if referral and referral == buyer:
                raise ValidationError("TokenSale: invalid referral address")

            # Referral bonuses are paid on top of the capped supply
            sale_ledger.add_sold(configuration, token_amount)
            sale_ledger.credit(buyer, token_amount)
            referral_bonus = 0
            if referral:
                referral_bonus = token_amount * configuration.referral_reward_percentage // 100
                sale_ledger.credit(referral, referral_bonus)

            emit_event(
                EVENT_SOURCE,
                'TokenBought',
                now,
                account=buyer,
                currency=currency,
                value=value,
                referral=referral,
            )

            payment_asset = self.asset_resolver(currency)
            if payment_asset.transfer_from(configuration.sale_address, buyer, configuration.wallet, value) is False:
                raise InsufficientFundsError("TokenSale: payment transfer failed")

        logger.info(
            "%s bought %s tokens for %s of %s (referral %s, bonus %s)",
            buyer, token_amount, value, currency, referral, referral_bonus,
        )
        return token_amount

    # ------------------------------------------------------------------
    # Vesting
    # ------------------------------------------------------------------

    @non_reentrant
    def withdraw_token(self, account: str) -> int:
        """Send ``account`` everything vested and not yet withdrawn; returns the amount sent."""
        now = self.clock()
        with transaction.atomic():
            configuration = self._configuration(lock=True)
            if configuration.withdrawal_start is None or now < configuration.withdrawal_start:
                raise PhaseError("TokenSale: withdrawal not started yet")

            record = sale_ledger.get_record(account)
            if record is None:
                logger.debug("Withdrawal by %s: nothing claimable", account)
                return 0
            record = sale_ledger.lock_record(account)
            entitled = vesting.vested_amount(
                now,
                record.claimable_amount,
                vesting.VestingTerms.from_configuration(configuration),
            )
            payable = entitled - record.withdrawn_amount
            if payable <= 0:
                logger.debug("Withdrawal by %s: nothing vested since last withdrawal", account)
                return 0

            sale_ledger.record_withdrawal(record, payable)
            emit_event(EVENT_SOURCE, 'TokenWithdrew', now, account=account, amount=payable)

            sold_asset = self.asset_resolver(configuration.token)
            if sold_asset.transfer(configuration.sale_address, account, payable) is False:
                raise InsufficientFundsError("TokenSale: token transfer failed")

        logger.info("%s withdrew %s tokens (%s/%s)", account, payable, record.withdrawn_amount, record.claimable_amount)
        return payable

    # ------------------------------------------------------------------
    # Finalization
    # ------------------------------------------------------------------

    @non_reentrant
    def burn_remaining_tokens(self, caller: str) -> int:
        """Destroy every sold-token unit still held by the sale; anyone may call it after the end."""
        now = self.clock()
        with transaction.atomic():
            configuration = self._configuration(lock=True)
            if configuration.sale_end is None or now < configuration.sale_end:
                raise PhaseError("TokenSale: sale not ended yet")

            sold_asset = self.asset_resolver(configuration.token)
            remaining = sold_asset.balance_of(configuration.sale_address)
            if remaining > 0:
                sold_asset.burn(configuration.sale_address, remaining)
            emit_event(EVENT_SOURCE, 'RemainingTokensBurnt', now, remainingBalance=remaining)

        logger.info("Burnt %s remaining tokens (requested by %s)", remaining, caller)
        return remaining

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    def get_sale_settings(self) -> SaleSettings:
        return SaleSettings.from_configuration(self._configuration())

    def is_authorized_payment_currency(self, token: str) -> bool:
        return registry.is_authorized(token)

    def get_authorized_payment_currencies(self) -> List[str]:
        return registry.authorized_tokens()

    def get_claimable_amount(self, account: str) -> int:
        return sale_ledger.claimable_of(account)

    def get_withdrew_amount(self, account: str) -> int:
        return sale_ledger.withdrawn_of(account)

    def get_sold_amount(self) -> int:
        return self._configuration().sold_amount

    def get_withdrawable_amount(self, account: str) -> int:
        """Amount ``withdraw_token`` would send right now."""
        configuration = self._configuration()
        now = self.clock()
        if configuration.withdrawal_start is None or now < configuration.withdrawal_start:
            return 0
        record = sale_ledger.get_record(account)
        if record is None:
            return 0
        entitled = vesting.vested_amount(
            now,
            record.claimable_amount,
            vesting.VestingTerms.from_configuration(configuration),
        )
        return max(entitled - record.withdrawn_amount, 0)
