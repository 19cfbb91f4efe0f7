from dataclasses import asdict

import graphene

from ledger.exceptions import PhaseError
from token_sale.services.sale_engine import SaleEngine


class SaleSettingsType(graphene.ObjectType):
    """Amounts are decimal strings in the token's smallest unit"""
    token = graphene.String()
    wallet = graphene.String()
    sale_start = graphene.Float()
    sale_end = graphene.Float()
    withdrawal_start = graphene.Float()
    withdraw_period_duration = graphene.Float()
    withdraw_period_number = graphene.Int()
    min_buy_value = graphene.String()
    max_token_amount_per_address = graphene.String()
    exchange_rate = graphene.String()
    referral_reward_percentage = graphene.Int()
    amount_to_sell = graphene.String()
    sold_amount = graphene.String()


AMOUNT_FIELDS = (
    'min_buy_value',
    'max_token_amount_per_address',
    'exchange_rate',
    'amount_to_sell',
    'sold_amount',
)


class Query(graphene.ObjectType):
    """Read-only view of the sale"""

    sale_settings = graphene.Field(SaleSettingsType)
    sold_amount = graphene.String()
    is_authorized_payment_currency = graphene.Boolean(token=graphene.String(required=True))
    authorized_payment_currencies = graphene.List(graphene.String)
    claimable_amount = graphene.String(account=graphene.String(required=True))
    withdrew_amount = graphene.String(account=graphene.String(required=True))
    withdrawable_amount = graphene.String(account=graphene.String(required=True))

    def resolve_sale_settings(self, info):
        try:
            settings = SaleEngine().get_sale_settings()
        except PhaseError:
            return None
        values = asdict(settings)
        for field in AMOUNT_FIELDS:
            values[field] = str(values[field])
        return SaleSettingsType(**values)

    def resolve_sold_amount(self, info):
        try:
            return str(SaleEngine().get_sold_amount())
        except PhaseError:
            return None

    def resolve_is_authorized_payment_currency(self, info, token):
        return SaleEngine().is_authorized_payment_currency(token)

    def resolve_authorized_payment_currencies(self, info):
        return SaleEngine().get_authorized_payment_currencies()

    def resolve_claimable_amount(self, info, account):
        return str(SaleEngine().get_claimable_amount(account))

    def resolve_withdrew_amount(self, info, account):
        return str(SaleEngine().get_withdrew_amount(account))

    def resolve_withdrawable_amount(self, info, account):
        try:
            return str(SaleEngine().get_withdrawable_amount(account))
        except PhaseError:
            return "0"
