"""
Per-address accounting of the sale.

Every mutation row-locks the record it touches and must run inside the
calling operation's ``transaction.atomic()`` block.
"""

import logging
from typing import Optional

from ledger.exceptions import ValidationError
from token_sale.models import PurchaserRecord, SaleConfiguration

logger = logging.getLogger(__name__)


def get_record(account: str) -> Optional[PurchaserRecord]:
    return PurchaserRecord.objects.filter(account=account).first()


def claimable_of(account: str) -> int:
    record = get_record(account)
    return record.claimable_amount if record else 0


def withdrawn_of(account: str) -> int:
    record = get_record(account)
    return record.withdrawn_amount if record else 0


def lock_record(account: str) -> PurchaserRecord:
    record, _ = PurchaserRecord.objects.select_for_update().get_or_create(account=account)
    return record


def credit(account: str, amount: int) -> PurchaserRecord:
    record = lock_record(account)
    record.claimable_amount += amount
    record.save(update_fields=['claimable_amount', 'updated_at'])
    return record


def record_withdrawal(record: PurchaserRecord, amount: int) -> PurchaserRecord:
    if record.withdrawn_amount + amount > record.claimable_amount:
        raise ValidationError("TokenSale: withdrawal above claimable amount")
    record.withdrawn_amount += amount
    record.save(update_fields=['withdrawn_amount', 'updated_at'])
    return record


def add_sold(configuration: SaleConfiguration, amount: int) -> int:
    """Increase the aggregate sold counter; ``configuration`` must be row-locked."""
    if configuration.sold_amount + amount > configuration.amount_to_sell:
        raise ValidationError("TokenSale: not enough tokens available")
    configuration.sold_amount += amount
    configuration.save(update_fields=['sold_amount', 'updated_at'])
    return configuration.sold_amount
