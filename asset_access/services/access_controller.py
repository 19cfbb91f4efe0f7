"""
Timelocked control over who may mint and burn the sold token.

The owner announces a new minter with ``launch_update``; the change only
takes effect through ``execute_update`` once ``GRACE_PERIOD`` has elapsed,
which leaves holders a week to react to a hostile swap. Until a minter has
been executed, every gated mint or burn is refused.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from django.db import transaction

from ledger.clock import Clock, chain_time
from ledger.exceptions import AuthorizationError, PhaseError, TimelockError, ValidationError
from ledger.services.accounts import is_contract, validate_address
from ledger.services.assets import get_asset
from ledger.services.events import emit_event
from asset_access.models import MinterControl

logger = logging.getLogger(__name__)

EVENT_SOURCE = 'asset_access'
GRACE_PERIOD = 7 * 24 * 60 * 60
CONTROL_ID = 1


@dataclass(frozen=True)
class MinterUpdate:
    new_minter: Optional[str]
    end_grace_period: int
    has_to_be_executed: bool


class AssetAccessController:
    def __init__(
        self,
        clock: Optional[Clock] = None,
        asset_resolver: Optional[Callable[[str], object]] = None,
    ) -> None:
        self.clock: Clock = clock or chain_time
        self.asset_resolver = asset_resolver or get_asset

    def _control(self, lock: bool = False) -> MinterControl:
        queryset = MinterControl.objects.all()
        if lock:
            queryset = queryset.select_for_update()
        control = queryset.filter(pk=CONTROL_ID).first()
        if control is None:
            raise PhaseError("AssetAccess: controller not initialized")
        return control

    def _require_owner(self, control: MinterControl, caller: str) -> None:
        if caller != control.owner:
            logger.warning("Rejected minter administration call from %s", caller)
            raise AuthorizationError("Ownable: caller is not the owner")

    def _require_minter(self, control: MinterControl, caller: str) -> None:
        if not control.current_minter:
            raise AuthorizationError("AssetAccess: sender account not recognized")
        if caller != control.current_minter:
            logger.warning("Rejected gated supply change from %s", caller)
            raise AuthorizationError("AssetAccess: access denied")

    def initialize(self, owner: str, token: str) -> MinterControl:
        validate_address(owner, "owner")
        validate_address(token, "token")
        with transaction.atomic():
            if MinterControl.objects.filter(pk=CONTROL_ID).exists():
                raise ValidationError("AssetAccess: controller already initialized")
            control = MinterControl.objects.create(pk=CONTROL_ID, owner=owner, token=token)
        logger.info("Initialized minter control of %s (owner %s)", token, owner)
        return control

    def launch_update(self, caller: str, new_minter: str) -> MinterUpdate:
        """Announce ``new_minter``; it can be executed after the grace period."""
        now = self.clock()
        with transaction.atomic():
            control = self._control(lock=True)
            self._require_owner(control, caller)
            if not is_contract(new_minter):
                raise ValidationError("AssetAccess: address provided is not a contract")
            if control.has_to_be_executed:
                raise TimelockError("AssetAccess: current update has to be executed")

            control.new_minter = new_minter
            control.end_grace_period = now + GRACE_PERIOD
            control.has_to_be_executed = True
            control.save(update_fields=['new_minter', 'end_grace_period', 'has_to_be_executed', 'updated_at'])
            emit_event(EVENT_SOURCE, 'MinterUpdateLaunched', now, newMinter=new_minter)

        logger.info("Minter update to %s launched, executable at %s", new_minter, control.end_grace_period)
        return self._snapshot(control)

    def execute_update(self, caller: str) -> str:
        now = self.clock()
        with transaction.atomic():
            control = self._control(lock=True)
            self._require_owner(control, caller)
            if not control.new_minter:
                raise TimelockError("AssetAccess: no update launched")
            if not control.has_to_be_executed:
                raise TimelockError("AssetAccess: update already executed")
            if now < control.end_grace_period:
                raise TimelockError("AssetAccess: grace period has not finished")

            control.current_minter = control.new_minter
            control.has_to_be_executed = False
            control.save(update_fields=['current_minter', 'has_to_be_executed', 'updated_at'])
            emit_event(EVENT_SOURCE, 'MinterUpdateExecuted', now, newMinter=control.current_minter)

        logger.info("Minter is now %s", control.current_minter)
        return control.current_minter

    def mint_from_controller(self, caller: str, account: str, amount: int) -> None:
        with transaction.atomic():
            control = self._control(lock=True)
            self._require_minter(control, caller)
            self.asset_resolver(control.token).mint(account, amount)

    def burn_from_controller(self, caller: str, account: str, amount: int) -> None:
        with transaction.atomic():
            control = self._control(lock=True)
            self._require_minter(control, caller)
            self.asset_resolver(control.token).burn(account, amount)

    def get_current_minter(self) -> Optional[str]:
        return self._control().current_minter

    def get_pending_update(self) -> MinterUpdate:
        return self._snapshot(self._control())

    @staticmethod
    def _snapshot(control: MinterControl) -> MinterUpdate:
        return MinterUpdate(
            new_minter=control.new_minter,
            end_grace_period=control.end_grace_period,
            has_to_be_executed=control.has_to_be_executed,
        )
