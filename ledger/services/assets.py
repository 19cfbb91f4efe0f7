"""
Fungible asset bookkeeping.

``LedgerAsset`` exposes the capability set the sale expects from any asset
(``balance_of``, ``transfer``, ``transfer_from``) plus the supply operations
used by the asset access controller. All writes happen through row-locked
holdings so they join whatever ``transaction.atomic()`` block the caller has
opened: when the caller fails, the asset movements roll back with it.
"""

from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction

from ledger.exceptions import InsufficientFundsError, ValidationError
from ledger.models import Asset, AssetAllowance, AssetHolding

logger = logging.getLogger(__name__)


def _check_amount(amount: int) -> int:
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise ValidationError(f"Ledger: amount must be an integer, got {amount!r}")
    if amount < 0:
        raise ValidationError("Ledger: amount cannot be negative")
    return amount


class LedgerAsset:
    """Handle on one fungible asset stored in the ledger database."""

    def __init__(self, asset: Asset) -> None:
        self.asset = asset
        self.identifier: str = asset.identifier

    def __repr__(self) -> str:
        return f"LedgerAsset({self.asset.symbol}, {self.identifier})"

    def _holding(self, account: str) -> AssetHolding:
        holding, _ = AssetHolding.objects.select_for_update().get_or_create(
            asset=self.asset,
            account=account,
        )
        return holding

    def balance_of(self, account: str) -> int:
        holding = AssetHolding.objects.filter(asset=self.asset, account=account).first()
        return holding.balance if holding else 0

    def allowance(self, owner: str, spender: str) -> int:
        allowance = AssetAllowance.objects.filter(
            asset=self.asset, owner=owner, spender=spender
        ).first()
        return allowance.amount if allowance else 0

    def total_supply(self) -> int:
        return Asset.objects.get(pk=self.asset.pk).total_supply

    def approve(self, owner: str, spender: str, amount: int) -> None:
        _check_amount(amount)
        with transaction.atomic():
            allowance, _ = AssetAllowance.objects.select_for_update().get_or_create(
                asset=self.asset, owner=owner, spender=spender
            )
            allowance.amount = amount
            allowance.save(update_fields=['amount', 'updated_at'])

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        _check_amount(amount)
        with transaction.atomic():
            source = self._holding(sender)
            if source.balance < amount:
                raise InsufficientFundsError(f"{self.asset.symbol}: transfer amount exceeds balance")
            if sender == recipient:
                return
            target = self._holding(recipient)
            source.balance -= amount
            target.balance += amount
            source.save(update_fields=['balance', 'updated_at'])
            target.save(update_fields=['balance', 'updated_at'])
        logger.debug("%s transfer %s -> %s: %s", self.asset.symbol, sender, recipient, amount)

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> None:
        """Move ``amount`` out of ``owner``'s holding on behalf of ``spender``."""
        _check_amount(amount)
        with transaction.atomic():
            allowance = AssetAllowance.objects.select_for_update().filter(
                asset=self.asset, owner=owner, spender=spender
            ).first()
            if allowance is None or allowance.amount < amount:
                raise InsufficientFundsError(f"{self.asset.symbol}: insufficient allowance")
            self.transfer(owner, recipient, amount)
            allowance.amount -= amount
            allowance.save(update_fields=['amount', 'updated_at'])

    def mint(self, account: str, amount: int) -> None:
        _check_amount(amount)
        with transaction.atomic():
            asset = Asset.objects.select_for_update().get(pk=self.asset.pk)
            holding = self._holding(account)
            holding.balance += amount
            asset.total_supply += amount
            holding.save(update_fields=['balance', 'updated_at'])
            asset.save(update_fields=['total_supply'])
            self.asset = asset
        logger.info("%s minted %s to %s", self.asset.symbol, amount, account)

    def burn(self, account: str, amount: int) -> None:
        """Destroy ``amount`` out of ``account``'s holding."""
        _check_amount(amount)
        with transaction.atomic():
            asset = Asset.objects.select_for_update().get(pk=self.asset.pk)
            holding = self._holding(account)
            if holding.balance < amount:
                raise InsufficientFundsError(f"{self.asset.symbol}: burn amount exceeds balance")
            holding.balance -= amount
            asset.total_supply -= amount
            holding.save(update_fields=['balance', 'updated_at'])
            asset.save(update_fields=['total_supply'])
            self.asset = asset
        logger.info("%s burnt %s from %s", self.asset.symbol, amount, account)


def create_asset(
    identifier: str,
    symbol: str,
    decimals: int = 18,
    initial_supply: int = 0,
    holder: Optional[str] = None,
) -> LedgerAsset:
    """Register a new asset and mint its initial supply to ``holder``."""
    _check_amount(initial_supply)
    if initial_supply and not holder:
        raise ValidationError("Ledger: initial supply requires a holder")
    with transaction.atomic():
        if Asset.objects.filter(identifier=identifier).exists():
            raise ValidationError(f"Ledger: asset {identifier} already exists")
        asset = LedgerAsset(Asset.objects.create(identifier=identifier, symbol=symbol, decimals=decimals))
        if initial_supply:
            asset.mint(holder, initial_supply)
    logger.info("Created asset %s (%s) with supply %s", symbol, identifier, initial_supply)
    return asset


def get_asset(identifier: str) -> LedgerAsset:
    try:
        return LedgerAsset(Asset.objects.get(identifier=identifier))
    except Asset.DoesNotExist:
        raise ValidationError(f"Ledger: unknown asset {identifier}")
