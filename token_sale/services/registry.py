"""Allow-list of payment assets accepted by the sale."""

import logging
from typing import Iterable, List

from token_sale.models import AuthorizedPaymentCurrency, SaleConfiguration

logger = logging.getLogger(__name__)


def authorize(configuration: SaleConfiguration, tokens: Iterable[str]) -> List[str]:
    """Add ``tokens`` to the allow-list and return the ones that were not on it yet."""
    added = []
    for token in tokens:
        _, created = AuthorizedPaymentCurrency.objects.get_or_create(
            token=token,
            defaults={'configuration': configuration},
        )
        if created:
            added.append(token)
    if added:
        logger.info("Authorized payment currencies: %s", ", ".join(added))
    return added


def is_authorized(token: str) -> bool:
    if not token:
        return False
    return AuthorizedPaymentCurrency.objects.filter(token=token).exists()


def authorized_tokens() -> List[str]:
    return list(AuthorizedPaymentCurrency.objects.values_list('token', flat=True))
