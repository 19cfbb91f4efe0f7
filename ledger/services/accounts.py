"""
Registry of code-bearing identities.

An identity carries code when it is the address of a deployed application;
application addresses are derived from the app id the same way the Algorand
node derives them.
"""

import logging

from algosdk import encoding
from algosdk.logic import get_application_address

from ledger.exceptions import ValidationError
from ledger.models import ContractAccount

logger = logging.getLogger(__name__)


def validate_address(address: str, label: str = "address") -> str:
    if not address or not encoding.is_valid_address(address):
        raise ValidationError(f"Ledger: invalid {label} {address!r}")
    return address


def register_contract(app_id: int, label: str = "") -> ContractAccount:
    if app_id <= 0:
        raise ValidationError("Ledger: app id must be positive")
    contract, created = ContractAccount.objects.get_or_create(
        app_id=app_id,
        defaults={'address': get_application_address(app_id), 'label': label},
    )
    if created:
        logger.info("Registered contract app %s at %s", app_id, contract.address)
    return contract


def is_contract(address: str) -> bool:
    if not address:
        return False
    return ContractAccount.objects.filter(address=address).exists()
